from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.enterprise_repository import IEnterpriseRepository
from src.domain.entities import Enterprise, Membership


class EnterpriseRepository(IEnterpriseRepository):
    """Enterprise repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, enterprise_id: UUID) -> Optional[Enterprise]:
        stmt = select(Enterprise).where(Enterprise.id == enterprise_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_id(self, enterprise_id: UUID) -> Optional[Enterprise]:
        stmt = select(Enterprise).where(
            Enterprise.id == enterprise_id, col(Enterprise.is_active).is_(True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_name(self, name: str) -> Optional[Enterprise]:
        stmt = select(Enterprise).where(
            Enterprise.name == name, col(Enterprise.is_active).is_(True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active_with_member_count(self) -> List[Tuple[Enterprise, int]]:
        member_count = (
            select(func.count(col(Membership.id)))
            .where(Membership.enterprise_id == Enterprise.id)
            .correlate(Enterprise)
            .scalar_subquery()
        )
        stmt = (
            select(Enterprise, member_count)
            .where(col(Enterprise.is_active).is_(True))
            .order_by(col(Enterprise.created_at))
        )
        result = await self.session.execute(stmt)
        return [(enterprise, count) for enterprise, count in result.all()]

    async def create(self, enterprise: Enterprise) -> Enterprise:
        self.session.add(enterprise)
        await self.session.flush()
        await self.session.refresh(enterprise)
        return enterprise

    async def update(self, enterprise: Enterprise) -> Enterprise:
        self.session.add(enterprise)
        await self.session.flush()
        await self.session.refresh(enterprise)
        return enterprise
