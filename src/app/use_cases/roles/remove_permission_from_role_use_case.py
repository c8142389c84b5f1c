from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden, NotFound

from .dtos import RoleResponse


class RemovePermissionFromRoleUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, role_id: UUID, permission_id: UUID
    ) -> Result[RoleResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            role = await self.uow.roles.get_in_enterprise(role_id, enterprise_id)
            if role is None:
                return Return.err(NotFound("ROLE_NOT_FOUND", "Role not found"))

            if role.is_system:
                return Return.err(
                    Forbidden("SYSTEM_ROLE_PROTECTED", "System roles cannot be modified")
                )

            if not await self.uow.roles.has_permission(role_id, permission_id):
                return Return.err(
                    NotFound("PERMISSION_NOT_IN_ROLE", "Role does not have this permission")
                )

            await self.uow.roles.remove_permission(role_id, permission_id)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.ROLE_UPDATE.value,
                    resource=ResourceType.ROLES.value,
                    resource_id=str(role_id),
                    changes={"removed_permission_id": str(permission_id)},
                )
            )

            permissions = await self.uow.roles.list_permissions(role_id)
            response = RoleResponse.from_role(role, permissions)
            await self.uow.commit()

            return Return.ok(response)
