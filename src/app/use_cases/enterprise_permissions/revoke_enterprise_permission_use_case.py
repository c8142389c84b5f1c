import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden, NotFound

logger = logging.getLogger(__name__)


class RevokeEnterprisePermissionUseCase:
    """Owner removes an enterprise-wide grant of their own enterprise"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, enterprise_permission_id: UUID
    ) -> Result[StatusResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            found = await self.uow.enterprise_permissions.get_by_id(enterprise_permission_id)
            if found is None:
                return Return.err(
                    NotFound("ENTERPRISE_PERMISSION_NOT_FOUND", "Enterprise permission not found")
                )
            grant, permission = found

            if grant.enterprise_id != enterprise_id:
                return Return.err(
                    Forbidden(
                        "NOT_SAME_ENTERPRISE",
                        "Permission grant belongs to another enterprise",
                    )
                )

            await self.uow.enterprise_permissions.delete(grant)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_REVOKE.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(enterprise_permission_id),
                    changes={"permission": permission.name, "scope": "enterprise"},
                )
            )

            await self.uow.commit()
            logger.info(f"Permission {permission.name} revoked from enterprise {enterprise_id}")

            return Return.ok(StatusResponse(status="revoked"))
