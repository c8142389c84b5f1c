from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import JoinRequestResponse


class ListMyJoinRequestsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[JoinRequestResponse]]:
        async with self.uow:
            requests = await self.uow.join_requests.list_by_user(user_id)
            return Return.ok([JoinRequestResponse.model_validate(r) for r in requests])
