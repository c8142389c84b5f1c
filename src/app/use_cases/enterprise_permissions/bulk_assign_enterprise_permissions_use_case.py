"""
Bulk Assign Enterprise Permissions Use Case
"""

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
    EnterprisePermission,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

logger = logging.getLogger(__name__)


class BulkAssignEnterprisePermissionsUseCase:
    """
    Use case for granting several permissions to an enterprise at once.

    Business Rules:
    - Only the owner can grant
    - Every id must exist in the catalog, otherwise nothing is granted
    - Already granted ids are skipped; Conflict only when all of them are
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        permission_ids: List[UUID],
        expires_at: Optional[datetime] = None,
    ) -> Result[BulkAssignResponse]:
        requested = list(dict.fromkeys(permission_ids))

        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            permissions = await self.uow.permissions.get_by_ids(requested)
            if len(permissions) != len(requested):
                return Return.err(
                    NotFound("PERMISSION_NOT_FOUND", "One or more permissions not found")
                )

            already = set(
                await self.uow.enterprise_permissions.list_permission_ids(
                    enterprise_id, requested
                )
            )
            to_grant = [pid for pid in requested if pid not in already]
            if not to_grant:
                return Return.err(
                    Conflict(
                        "PERMISSIONS_ALREADY_ASSIGNED",
                        "All permissions are already assigned to the enterprise",
                    )
                )

            expires_at = to_naive_utc(expires_at)
            try:
                assigned = await self.uow.enterprise_permissions.bulk_create(
                    [
                        EnterprisePermission(
                            enterprise_id=enterprise_id,
                            permission_id=pid,
                            granted_by=actor_id,
                            expires_at=expires_at,
                        )
                        for pid in to_grant
                    ]
                )
            except IntegrityError:
                await self.uow.rollback()
                concurrent = await self.uow.enterprise_permissions.list_permission_ids(
                    enterprise_id, to_grant
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
                        "permission_ids": [str(pid) for pid in to_grant],
                        "scope": "enterprise",
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                f"{assigned} permissions granted to enterprise {enterprise_id}, "
                f"{len(already)} skipped"
            )

            return Return.ok(BulkAssignResponse(assigned=assigned, skipped=len(already)))
