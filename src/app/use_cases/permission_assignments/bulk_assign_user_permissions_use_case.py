import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions.dtos import BulkAssignResponse
from src.domain.base import to_naive_utc
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    PermissionAssignment,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class BulkAssignUserPermissionsUseCase:
    """
    Use case for assigning several permissions to one user.

    Unknown ids fail the whole request; ids the user already holds are
    skipped; Conflict only when every id is already held.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        user_id: UUID,
        permission_ids: List[UUID],
        expires_at: Optional[datetime] = None,
    ) -> Result[BulkAssignResponse]:
        requested = list(dict.fromkeys(permission_ids))

        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            scope_result = await store.require_same_enterprise(actor_id, user_id)
            if scope_result.is_err():
                return scope_result
            enterprise_id = owner_result.value.enterprise_id

            permissions = await self.uow.permissions.get_by_ids(requested)
            if len(permissions) != len(requested):
                return Return.err(
                    NotFound("PERMISSION_NOT_FOUND", "One or more permissions not found")
                )

            already = set(
                await self.uow.permission_assignments.list_permission_ids(user_id, requested)
            )
            to_assign = [pid for pid in requested if pid not in already]
            if not to_assign:
                return Return.err(
                    Conflict(
                        "PERMISSIONS_ALREADY_ASSIGNED",
                        "All permissions are already assigned to the user",
                    )
                )

            expires_at = to_naive_utc(expires_at)
            try:
                assigned = await self.uow.permission_assignments.bulk_create(
                    [
                        PermissionAssignment(
                            user_id=user_id,
                            permission_id=pid,
                            granted_by=actor_id,
                            expires_at=expires_at,
                        )
                        for pid in to_assign
                    ]
                )
            except IntegrityError:
                await self.uow.rollback()
                concurrent = await self.uow.permission_assignments.list_permission_ids(
                    user_id, to_assign
                )
                if not concurrent:
                    raise
                return Return.err(
                    Conflict(
                        "PERMISSIONS_ALREADY_ASSIGNED",
                        "Permissions were assigned concurrently, retry the request",
                    )
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_GRANT.value,
                    resource=ResourceType.PERMISSIONS.value,
                    changes={
                        "target_user_id": str(user_id),
                        "permission_ids": [str(pid) for pid in to_assign],
                    },
                )
            )

            await self.uow.commit()
            logger.info(f"{assigned} permissions assigned to user {user_id}")

            return Return.ok(BulkAssignResponse(assigned=assigned, skipped=len(already)))
