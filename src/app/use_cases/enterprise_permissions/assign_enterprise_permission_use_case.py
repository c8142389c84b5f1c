"""
Assign Enterprise Permission Use Case

Grants one catalog permission to every member of the owner's enterprise.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    EnterprisePermission,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

from .dtos import EnterprisePermissionResponse

logger = logging.getLogger(__name__)


class AssignEnterprisePermissionUseCase:
    """
    Use case for granting a permission to an enterprise.

    Business Rules:
    - Only the owner can grant
    - Permission must exist in the catalog
    - A permission is granted to an enterprise at most once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        permission_id: UUID,
        expires_at: Optional[datetime] = None,
    ) -> Result[EnterprisePermissionResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(NotFound("PERMISSION_NOT_FOUND", "Permission not found"))

            existing = await self.uow.enterprise_permissions.get_by_enterprise_and_permission(
                enterprise_id, permission_id
            )
            if existing is not None:
                return Return.err(
                    Conflict(
                        "PERMISSION_ALREADY_ASSIGNED",
                        "Permission is already assigned to the enterprise",
                    )
                )

            try:
                grant = await self.uow.enterprise_permissions.create(
                    EnterprisePermission(
                        enterprise_id=enterprise_id,
                        permission_id=permission_id,
                        granted_by=actor_id,
                        expires_at=to_naive_utc(expires_at),
                    )
                )
            except IntegrityError:
                await self.uow.rollback()
                existing = await self.uow.enterprise_permissions.get_by_enterprise_and_permission(
                    enterprise_id, permission_id
                )
                if existing is None:
                    raise
                return Return.err(
                    Conflict(
                        "PERMISSION_ALREADY_ASSIGNED",
                        "Permission is already assigned to the enterprise",
                    )
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_GRANT.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(grant.id),
                    changes={"permission": permission.name, "scope": "enterprise"},
                )
            )

            response = EnterprisePermissionResponse.from_grant(grant, permission, utc_now())
            await self.uow.commit()
            logger.info(f"Permission {permission.name} granted to enterprise {enterprise_id}")

            return Return.ok(response)
