"""
Copy User Permissions Use Case

Duplicates one member's direct assignments onto another member.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    PermissionAssignment,
    ResourceType,
)
from src.domain.errors import NotFound

from .dtos import CopyPermissionsResponse

logger = logging.getLogger(__name__)


class CopyUserPermissionsUseCase:
    """
    Use case for copying direct assignments between members.

    Business Rules:
    - Only the owner can copy, and both users must be in the owner's enterprise
    - Source must hold at least one assignment
    - Permissions the target already holds are skipped
    - Copies keep the source expiry and are granted by the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, source_user_id: UUID, target_user_id: UUID
    ) -> Result[CopyPermissionsResponse]:
        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            for user_id in (source_user_id, target_user_id):
                scope_result = await store.require_same_enterprise(actor_id, user_id)
                if scope_result.is_err():
                    return scope_result

            source_rows = await self.uow.permission_assignments.list_by_user(source_user_id)
            if not source_rows:
                return Return.err(
                    NotFound("NO_PERMISSIONS_TO_COPY", "Source user has no permissions to copy")
                )

            held = set(await self.uow.permission_assignments.list_permission_ids(target_user_id))
            to_copy = [
                assignment
                for assignment, _permission in source_rows
                if assignment.permission_id not in held
            ]

            copied = 0
            if to_copy:
                copied = await self.uow.permission_assignments.bulk_create(
                    [
                        PermissionAssignment(
                            user_id=target_user_id,
                            permission_id=assignment.permission_id,
                            granted_by=actor_id,
                            expires_at=assignment.expires_at,
                        )
                        for assignment in to_copy
                    ]
                )

                await self.uow.audit_events.record(
                    AuditEvent(
                        enterprise_id=owner_result.value.enterprise_id,
                        user_id=actor_id,
                        action=AuditAction.PERMISSION_GRANT.value,
                        resource=ResourceType.PERMISSIONS.value,
                        changes={
                            "copied_from": str(source_user_id),
                            "target_user_id": str(target_user_id),
                            "count": copied,
                        },
                    )
                )
                await self.uow.commit()
                logger.info(
                    f"Copied {copied} permissions from {source_user_id} to {target_user_id}"
                )

            return Return.ok(
                CopyPermissionsResponse(
                    source_user_id=source_user_id,
                    target_user_id=target_user_id,
                    copied=copied,
                    skipped=len(source_rows) - copied,
                )
            )
