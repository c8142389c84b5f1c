import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Owner deletes a custom role; its permission and user links go with it"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, role_id: UUID) -> Result[StatusResponse]:
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
                    Forbidden("SYSTEM_ROLE_PROTECTED", "System roles cannot be deleted")
                )

            role_name = role.name
            await self.uow.roles.delete(role)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.ROLE_DELETE.value,
                    resource=ResourceType.ROLES.value,
                    resource_id=str(role_id),
                    changes={"name": role_name},
                )
            )

            await self.uow.commit()
            logger.info(f"Role {role_name} deleted from enterprise {enterprise_id}")

            return Return.ok(StatusResponse(status="deleted"))
