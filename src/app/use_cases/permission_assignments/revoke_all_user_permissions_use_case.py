from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType

from .dtos import RevokeAllResponse


class RevokeAllUserPermissionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, user_id: UUID) -> Result[RevokeAllResponse]:
        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            scope_result = await store.require_same_enterprise(actor_id, user_id)
            if scope_result.is_err():
                return scope_result

            revoked = await self.uow.permission_assignments.delete_by_user(user_id)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=owner_result.value.enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_REVOKE.value,
                    resource=ResourceType.PERMISSIONS.value,
                    changes={"target_user_id": str(user_id), "revoked": revoked},
                )
            )

            await self.uow.commit()

            return Return.ok(RevokeAllResponse(user_id=user_id, revoked=revoked))
