from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.enterprise_permission_repository import (
    IEnterprisePermissionRepository,
)
from src.domain.entities import (
    EnterprisePermission,
    Permission,
    PermissionAction,
    ResourceType,
)


class EnterprisePermissionRepository(IEnterprisePermissionRepository):
    """EnterprisePermission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, enterprise_permission_id: UUID
    ) -> Optional[Tuple[EnterprisePermission, Permission]]:
        stmt = (
            select(EnterprisePermission, Permission)
            .join(Permission, Permission.id == EnterprisePermission.permission_id)
            .where(EnterprisePermission.id == enterprise_permission_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def get_by_enterprise_and_permission(
        self, enterprise_id: UUID, permission_id: UUID
    ) -> Optional[EnterprisePermission]:
        stmt = select(EnterprisePermission).where(
            EnterprisePermission.enterprise_id == enterprise_id,
            EnterprisePermission.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_enterprise(
        self, enterprise_id: UUID, resource: Optional[ResourceType] = None
    ) -> List[Tuple[EnterprisePermission, Permission]]:
        stmt = (
            select(EnterprisePermission, Permission)
            .join(Permission, Permission.id == EnterprisePermission.permission_id)
            .where(EnterprisePermission.enterprise_id == enterprise_id)
            .order_by(col(Permission.resource), col(Permission.action))
        )
        if resource is not None:
            stmt = stmt.where(Permission.resource == resource)
        result = await self.session.execute(stmt)
        return [(grant, permission) for grant, permission in result.all()]

    async def list_permission_ids(
        self, enterprise_id: UUID, permission_ids: Optional[Sequence[UUID]] = None
    ) -> List[UUID]:
        stmt = select(EnterprisePermission.permission_id).where(
            EnterprisePermission.enterprise_id == enterprise_id
        )
        if permission_ids is not None:
            stmt = stmt.where(
                col(EnterprisePermission.permission_id).in_(list(permission_ids))
            )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_active_grant(
        self,
        enterprise_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
        now: datetime,
    ) -> bool:
        stmt = (
            select(EnterprisePermission.id)
            .join(Permission, Permission.id == EnterprisePermission.permission_id)
            .where(
                EnterprisePermission.enterprise_id == enterprise_id,
                Permission.action == action,
                Permission.resource == resource,
                or_(
                    col(EnterprisePermission.expires_at).is_(None),
                    col(EnterprisePermission.expires_at) > now,
                ),
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def create(self, grant: EnterprisePermission) -> EnterprisePermission:
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def bulk_create(self, grants: Sequence[EnterprisePermission]) -> int:
        self.session.add_all(grants)
        await self.session.flush()
        return len(grants)

    async def update(self, grant: EnterprisePermission) -> EnterprisePermission:
        self.session.add(grant)
        await self.session.flush()
        await self.session.refresh(grant)
        return grant

    async def delete(self, grant: EnterprisePermission) -> None:
        await self.session.delete(grant)
        await self.session.flush()
