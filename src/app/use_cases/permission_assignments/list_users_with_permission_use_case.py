from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFound

from .dtos import DirectHolder, PermissionHoldersResponse, RoleHolder


class ListUsersWithPermissionUseCase:
    """Owner view: members holding a permission directly or through a role"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, permission_id: UUID
    ) -> Result[PermissionHoldersResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(NotFound("PERMISSION_NOT_FOUND", "Permission not found"))

            direct = await self.uow.permission_assignments.list_holders_in_enterprise(
                permission_id, enterprise_id
            )
            via_roles = await self.uow.roles.list_holders_of_permission(
                permission_id, enterprise_id
            )

            return Return.ok(
                PermissionHoldersResponse(
                    permission_id=permission.id,
                    permission_name=permission.name,
                    direct=[
                        DirectHolder(
                            user_id=user.id,
                            email=user.email,
                            assignment_id=assignment.id,
                            expires_at=assignment.expires_at,
                        )
                        for assignment, user in direct
                    ],
                    via_roles=[
                        RoleHolder(
                            user_id=user.id,
                            email=user.email,
                            role_id=role.id,
                            role_name=role.name,
                        )
                        for user, role in via_roles
                    ],
                )
            )
