from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork

from .dtos import UserRolesResponse
from .role_listing import user_roles_response


class GetUserRolesUseCase:
    """Roles of another member of the caller's enterprise"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, user_id: UUID) -> Result[UserRolesResponse]:
        async with self.uow:
            scope_result = await MembershipStore(self.uow.memberships).require_same_enterprise(
                actor_id, user_id
            )
            if scope_result.is_err():
                return scope_result
            _actor, target = scope_result.value

            return Return.ok(await user_roles_response(self.uow, target))
