from typing import List, Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.join_request_repository import IJoinRequestRepository
from src.domain.entities import JoinRequest, JoinRequestStatus


class JoinRequestRepository(IJoinRequestRepository):
    """JoinRequest repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, request_id: UUID) -> Optional[JoinRequest]:
        stmt = select(JoinRequest).where(JoinRequest.id == request_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_and_enterprise(
        self, user_id: UUID, enterprise_id: UUID
    ) -> Optional[JoinRequest]:
        stmt = select(JoinRequest).where(
            JoinRequest.user_id == user_id, JoinRequest.enterprise_id == enterprise_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_pending_by_enterprise(self, enterprise_id: UUID) -> List[JoinRequest]:
        stmt = (
            select(JoinRequest)
            .where(
                JoinRequest.enterprise_id == enterprise_id,
                JoinRequest.status == JoinRequestStatus.PENDING,
            )
            .order_by(col(JoinRequest.requested_at).desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_user(self, user_id: UUID) -> List[JoinRequest]:
        stmt = (
            select(JoinRequest)
            .where(JoinRequest.user_id == user_id)
            .order_by(col(JoinRequest.requested_at).desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, join_request: JoinRequest) -> JoinRequest:
        self.session.add(join_request)
        await self.session.flush()
        await self.session.refresh(join_request)
        return join_request

    async def update(self, join_request: JoinRequest) -> JoinRequest:
        self.session.add(join_request)
        await self.session.flush()
        await self.session.refresh(join_request)
        return join_request

    async def delete(self, join_request: JoinRequest) -> None:
        await self.session.delete(join_request)
        await self.session.flush()
