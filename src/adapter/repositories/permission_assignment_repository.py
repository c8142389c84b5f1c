from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import delete, or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_assignment_repository import (
    IPermissionAssignmentRepository,
)
from src.domain.entities import (
    Membership,
    Permission,
    PermissionAction,
    PermissionAssignment,
    ResourceType,
    User,
)


def _not_expired(now: datetime):
    return or_(
        col(PermissionAssignment.expires_at).is_(None),
        col(PermissionAssignment.expires_at) > now,
    )


class PermissionAssignmentRepository(IPermissionAssignmentRepository):
    """PermissionAssignment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, assignment_id: UUID
    ) -> Optional[Tuple[PermissionAssignment, Permission]]:
        stmt = (
            select(PermissionAssignment, Permission)
            .join(Permission, Permission.id == PermissionAssignment.permission_id)
            .where(PermissionAssignment.id == assignment_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def get_by_user_and_permission(
        self, user_id: UUID, permission_id: UUID
    ) -> Optional[PermissionAssignment]:
        stmt = select(PermissionAssignment).where(
            PermissionAssignment.user_id == user_id,
            PermissionAssignment.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(
        self, user_id: UUID, active_at: Optional[datetime] = None
    ) -> List[Tuple[PermissionAssignment, Permission]]:
        stmt = (
            select(PermissionAssignment, Permission)
            .join(Permission, Permission.id == PermissionAssignment.permission_id)
            .where(PermissionAssignment.user_id == user_id)
            .order_by(col(Permission.resource), col(Permission.action))
        )
        if active_at is not None:
            stmt = stmt.where(_not_expired(active_at))
        result = await self.session.execute(stmt)
        return [(assignment, permission) for assignment, permission in result.all()]

    async def list_permission_ids(
        self, user_id: UUID, permission_ids: Optional[Sequence[UUID]] = None
    ) -> List[UUID]:
        stmt = select(PermissionAssignment.permission_id).where(
            PermissionAssignment.user_id == user_id
        )
        if permission_ids is not None:
            stmt = stmt.where(
                col(PermissionAssignment.permission_id).in_(list(permission_ids))
            )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_holders_in_enterprise(
        self, permission_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[PermissionAssignment, User]]:
        stmt = (
            select(PermissionAssignment, User)
            .join(User, User.id == PermissionAssignment.user_id)
            .join(Membership, Membership.user_id == PermissionAssignment.user_id)
            .where(
                PermissionAssignment.permission_id == permission_id,
                Membership.enterprise_id == enterprise_id,
            )
            .order_by(col(PermissionAssignment.granted_at))
        )
        result = await self.session.execute(stmt)
        return [(assignment, user) for assignment, user in result.all()]

    async def has_active_assignment(
        self,
        user_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
        now: datetime,
    ) -> bool:
        stmt = (
            select(PermissionAssignment.id)
            .join(Permission, Permission.id == PermissionAssignment.permission_id)
            .where(
                PermissionAssignment.user_id == user_id,
                Permission.action == action,
                Permission.resource == resource,
                _not_expired(now),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, assignment: PermissionAssignment) -> PermissionAssignment:
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def bulk_create(self, assignments: Sequence[PermissionAssignment]) -> int:
        self.session.add_all(assignments)
        await self.session.flush()
        return len(assignments)

    async def update(self, assignment: PermissionAssignment) -> PermissionAssignment:
        self.session.add(assignment)
        await self.session.flush()
        await self.session.refresh(assignment)
        return assignment

    async def delete(self, assignment: PermissionAssignment) -> None:
        await self.session.delete(assignment)
        await self.session.flush()

    async def delete_by_user(self, user_id: UUID) -> int:
        stmt = delete(PermissionAssignment).where(
            col(PermissionAssignment.user_id) == user_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount
