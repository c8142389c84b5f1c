import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import NotFound

logger = logging.getLogger(__name__)


class RevokeUserPermissionUseCase:
    """Owner removes one direct assignment held by a member of their enterprise"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, assignment_id: UUID) -> Result[StatusResponse]:
        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            found = await self.uow.permission_assignments.get_by_id(assignment_id)
            if found is None:
                return Return.err(
                    NotFound("ASSIGNMENT_NOT_FOUND", "Permission assignment not found")
                )
            assignment, permission = found

            scope_result = await store.require_same_enterprise(actor_id, assignment.user_id)
            if scope_result.is_err():
                return scope_result

            target_user_id = assignment.user_id
            await self.uow.permission_assignments.delete(assignment)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=owner_result.value.enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_REVOKE.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(assignment_id),
                    changes={
                        "permission": permission.name,
                        "target_user_id": str(target_user_id),
                    },
                )
            )

            await self.uow.commit()
            logger.info(f"Permission {permission.name} revoked from user {target_user_id}")

            return Return.ok(StatusResponse(status="revoked"))
