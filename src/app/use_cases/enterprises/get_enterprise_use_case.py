from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFound

from .dtos import EnterpriseDetailResponse, EnterpriseResponse, MemberInfo


class GetEnterpriseUseCase:
    """Use case for reading one enterprise with its members"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, enterprise_id: UUID) -> Result[EnterpriseDetailResponse]:
        async with self.uow:
            enterprise = await self.uow.enterprises.get_by_id(enterprise_id)
            if enterprise is None:
                return Return.err(NotFound("ENTERPRISE_NOT_FOUND", "Enterprise not found"))

            members = await self.uow.memberships.get_by_enterprise_id(enterprise_id)

            return Return.ok(
                EnterpriseDetailResponse(
                    enterprise=EnterpriseResponse.model_validate(enterprise),
                    members=[MemberInfo.model_validate(m) for m in members],
                    member_count=len(members),
                )
            )
