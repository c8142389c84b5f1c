from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFound

from .dtos import RoleDetailResponse, RoleResponse, RoleUser


class GetRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, role_id: UUID) -> Result[RoleDetailResponse]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result

            role = await self.uow.roles.get_in_enterprise(
                role_id, membership_result.value.enterprise_id
            )
            if role is None:
                return Return.err(NotFound("ROLE_NOT_FOUND", "Role not found"))

            permissions = await self.uow.roles.list_permissions(role.id)
            users = await self.uow.roles.list_users(role.id)
            base = RoleResponse.from_role(role, permissions, user_count=len(users))

            return Return.ok(
                RoleDetailResponse(
                    **base.model_dump(),
                    users=[RoleUser(id=u.id, email=u.email) for u in users],
                )
            )
