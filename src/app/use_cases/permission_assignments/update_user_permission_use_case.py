from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utc_now
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import NotFound

from .dtos import UserPermissionResponse


class UpdateUserPermissionUseCase:
    """Owner sets or clears the expiry of a direct assignment"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        assignment_id: UUID,
        expires_at: Optional[datetime],
    ) -> Result[UserPermissionResponse]:
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

            assignment.expires_at = to_naive_utc(expires_at)
            assignment = await self.uow.permission_assignments.update(assignment)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=owner_result.value.enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_UPDATE.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(assignment_id),
                    changes={
                        "expires_at": (
                            assignment.expires_at.isoformat() if assignment.expires_at else None
                        )
                    },
                )
            )

            response = UserPermissionResponse.from_assignment(assignment, permission, utc_now())
            await self.uow.commit()

            return Return.ok(response)
