from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork

from .dtos import EnterpriseResponse, MyEnterpriseResponse


class GetMyEnterpriseUseCase:
    """
    Use case for reading the caller's own enterprise.

    Not belonging to any enterprise is a normal answer, not an error.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MyEnterpriseResponse]:
        async with self.uow:
            membership = await MembershipStore(self.uow.memberships).membership_of(user_id)
            if membership is None:
                return Return.ok(MyEnterpriseResponse(has_enterprise=False))

            enterprise = await self.uow.enterprises.get_by_id(membership.enterprise_id)

            return Return.ok(
                MyEnterpriseResponse(
                    has_enterprise=True,
                    is_owner=membership.is_owner,
                    enterprise=EnterpriseResponse.model_validate(enterprise),
                    joined_at=membership.joined_at,
                )
            )
