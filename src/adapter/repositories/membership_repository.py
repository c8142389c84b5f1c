from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.entities import Membership


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        stmt = select(Membership).where(Membership.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_user_and_enterprise(
        self, user_id: UUID, enterprise_id: UUID
    ) -> Optional[Membership]:
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.enterprise_id == enterprise_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_enterprise_id(self, enterprise_id: UUID) -> List[Membership]:
        stmt = (
            select(Membership)
            .where(Membership.enterprise_id == enterprise_id)
            .order_by(col(Membership.joined_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, membership: Membership) -> Membership:
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        await self.session.delete(membership)
        await self.session.flush()
