from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork

from .dtos import JoinRequestResponse


class ListPendingJoinRequestsUseCase:
    """Owner-only listing of PENDING requests for their enterprise"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, enterprise_id: UUID
    ) -> Result[List[JoinRequestResponse]]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(
                actor_id, enterprise_id
            )
            if owner_result.is_err():
                return owner_result

            requests = await self.uow.join_requests.list_pending_by_enterprise(enterprise_id)
            return Return.ok([JoinRequestResponse.model_validate(r) for r in requests])
