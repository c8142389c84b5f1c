from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork

from .dtos import RoleResponse


class ListRolesUseCase:
    """Roles of the caller's enterprise with permissions and holder counts"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[RoleResponse]]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result

            roles = await self.uow.roles.list_by_enterprise(
                membership_result.value.enterprise_id
            )
            return Return.ok(
                [
                    RoleResponse.from_role(
                        role,
                        await self.uow.roles.list_permissions(role.id),
                        user_count=await self.uow.roles.count_users(role.id),
                    )
                    for role in roles
                ]
            )
