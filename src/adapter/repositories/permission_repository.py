from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.permission_repository import IPermissionRepository
from src.domain.entities import Permission

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


class PermissionRepository(IPermissionRepository):
    """Permission catalog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def count(self) -> int:
        stmt = select(func.count(col(Permission.id)))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_all(self) -> List[Permission]:
        stmt = select(Permission).order_by(
            col(Permission.resource), col(Permission.action)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        stmt = select(Permission).where(Permission.id == permission_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, permission_ids: Sequence[UUID]) -> List[Permission]:
        if not permission_ids:
            return []
        stmt = select(Permission).where(col(Permission.id).in_(list(permission_ids)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def bulk_create_skip_duplicates(self, permissions: Sequence[Permission]) -> int:
        if not permissions:
            return 0

        before = await self.count()
        insert = _UPSERT_INSERTS.get(self.session.bind.dialect.name)

        if insert is not None:
            rows = [permission.model_dump() for permission in permissions]
            stmt = insert(Permission).values(rows).on_conflict_do_nothing()
            await self.session.execute(stmt)
        else:
            # No ON CONFLICT support: only insert names not present yet
            names = [permission.name for permission in permissions]
            stmt = select(Permission.name).where(col(Permission.name).in_(names))
            existing = set((await self.session.execute(stmt)).scalars().all())
            self.session.add_all(p for p in permissions if p.name not in existing)

        await self.session.flush()
        return await self.count() - before
