from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.role_repository import IRoleRepository
from src.domain.entities import (
    Membership,
    Permission,
    PermissionAction,
    ResourceType,
    Role,
    RolePermission,
    User,
    UserRole,
)


class RoleRepository(IRoleRepository):
    """Role repository implementation using SQLModel

    Join rows are inserted and deleted explicitly in the caller's transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_in_enterprise(self, role_id: UUID, enterprise_id: UUID) -> Optional[Role]:
        stmt = select(Role).where(Role.id == role_id, Role.enterprise_id == enterprise_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, enterprise_id: UUID, name: str) -> Optional[Role]:
        stmt = select(Role).where(Role.enterprise_id == enterprise_id, Role.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_enterprise(self, enterprise_id: UUID) -> List[Role]:
        stmt = (
            select(Role)
            .where(Role.enterprise_id == enterprise_id)
            .order_by(col(Role.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def update(self, role: Role) -> Role:
        self.session.add(role)
        await self.session.flush()
        await self.session.refresh(role)
        return role

    async def delete(self, role: Role) -> None:
        await self.session.execute(
            delete(RolePermission).where(col(RolePermission.role_id) == role.id)
        )
        await self.session.execute(delete(UserRole).where(col(UserRole.role_id) == role.id))
        await self.session.delete(role)
        await self.session.flush()

    # Role <-> Permission

    async def list_permissions(self, role_id: UUID) -> List[Permission]:
        stmt = (
            select(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .where(RolePermission.role_id == role_id)
            .order_by(col(Permission.resource), col(Permission.action))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def has_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        stmt = select(RolePermission).where(
            RolePermission.role_id == role_id,
            RolePermission.permission_id == permission_id,
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def add_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        self.session.add_all(
            RolePermission(role_id=role_id, permission_id=permission_id)
            for permission_id in permission_ids
        )
        await self.session.flush()

    async def remove_permission(self, role_id: UUID, permission_id: UUID) -> None:
        await self.session.execute(
            delete(RolePermission).where(
                col(RolePermission.role_id) == role_id,
                col(RolePermission.permission_id) == permission_id,
            )
        )

    async def set_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        await self.session.execute(
            delete(RolePermission).where(col(RolePermission.role_id) == role_id)
        )
        await self.add_permissions(role_id, list(dict.fromkeys(permission_ids)))

    # User <-> Role

    async def count_users(self, role_id: UUID) -> int:
        stmt = select(func.count()).select_from(UserRole).where(UserRole.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_users(self, role_id: UUID) -> List[User]:
        stmt = (
            select(User)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.role_id == role_id)
            .order_by(col(User.email))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def user_has_role(self, user_id: UUID, role_id: UUID) -> bool:
        stmt = select(UserRole).where(UserRole.user_id == user_id, UserRole.role_id == role_id)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def assign_to_user(self, user_id: UUID, role_id: UUID) -> None:
        self.session.add(UserRole(user_id=user_id, role_id=role_id))
        await self.session.flush()

    async def remove_from_user(self, user_id: UUID, role_id: UUID) -> None:
        await self.session.execute(
            delete(UserRole).where(
                col(UserRole.user_id) == user_id, col(UserRole.role_id) == role_id
            )
        )

    async def remove_all_from_user(self, user_id: UUID) -> int:
        result = await self.session.execute(
            delete(UserRole).where(col(UserRole.user_id) == user_id)
        )
        return result.rowcount

    async def list_user_roles(
        self, user_id: UUID, enterprise_id: Optional[UUID] = None
    ) -> List[Role]:
        stmt = (
            select(Role)
            .join(UserRole, UserRole.role_id == Role.id)
            .where(UserRole.user_id == user_id)
            .order_by(col(Role.created_at))
        )
        if enterprise_id is not None:
            stmt = stmt.where(Role.enterprise_id == enterprise_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_user_role_permissions(
        self, user_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[Role, Permission]]:
        stmt = (
            select(Role, Permission)
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(UserRole.user_id == user_id, Role.enterprise_id == enterprise_id)
            .order_by(col(Role.created_at), col(Permission.resource), col(Permission.action))
        )
        result = await self.session.execute(stmt)
        return [(role, permission) for role, permission in result.all()]

    async def user_has_permission(
        self,
        user_id: UUID,
        enterprise_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
    ) -> bool:
        stmt = (
            select(UserRole.role_id)
            .select_from(UserRole)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Permission, Permission.id == RolePermission.permission_id)
            .where(
                UserRole.user_id == user_id,
                Role.enterprise_id == enterprise_id,
                Permission.action == action,
                Permission.resource == resource,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list_holders_of_permission(
        self, permission_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[User, Role]]:
        stmt = (
            select(User, Role)
            .select_from(UserRole)
            .join(User, User.id == UserRole.user_id)
            .join(Role, Role.id == UserRole.role_id)
            .join(RolePermission, RolePermission.role_id == Role.id)
            .join(Membership, Membership.user_id == UserRole.user_id)
            .where(
                RolePermission.permission_id == permission_id,
                Role.enterprise_id == enterprise_id,
                Membership.enterprise_id == enterprise_id,
            )
            .order_by(col(User.email), col(Role.name))
        )
        result = await self.session.execute(stmt)
        return [(user, role) for user, role in result.all()]
