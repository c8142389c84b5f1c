"""
Assign User Permission Use Case

Grants one catalog permission directly to a member of the owner's enterprise.
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
    PermissionAssignment,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

from .dtos import UserPermissionResponse

logger = logging.getLogger(__name__)


class AssignUserPermissionUseCase:
    """
    Use case for assigning a permission to a user.

    Business Rules:
    - Only the owner can assign
    - Target must be a member of the owner's enterprise
    - Permission must exist in the catalog
    - A permission is assigned to a user at most once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        user_id: UUID,
        permission_id: UUID,
        expires_at: Optional[datetime] = None,
    ) -> Result[UserPermissionResponse]:
        """
        Execute assign use case.

        Args:
            actor_id: Caller, must be the owner
            user_id: Member receiving the permission
            permission_id: Catalog permission
            expires_at: Optional expiry, None for permanent

        Returns:
            Result with UserPermissionResponse DTO, or Error
        """
        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            scope_result = await store.require_same_enterprise(actor_id, user_id)
            if scope_result.is_err():
                return scope_result
            enterprise_id = owner_result.value.enterprise_id

            permission = await self.uow.permissions.get_by_id(permission_id)
            if permission is None:
                return Return.err(NotFound("PERMISSION_NOT_FOUND", "Permission not found"))

            existing = await self.uow.permission_assignments.get_by_user_and_permission(
                user_id, permission_id
            )
            if existing is not None:
                return Return.err(
                    Conflict(
                        "PERMISSION_ALREADY_ASSIGNED",
                        "Permission is already assigned to the user",
                    )
                )

            try:
                assignment = await self.uow.permission_assignments.create(
                    PermissionAssignment(
                        user_id=user_id,
                        permission_id=permission_id,
                        granted_by=actor_id,
                        expires_at=to_naive_utc(expires_at),
                    )
                )
            except IntegrityError:
                await self.uow.rollback()
                existing = await self.uow.permission_assignments.get_by_user_and_permission(
                    user_id, permission_id
                )
                if existing is None:
                    raise
                return Return.err(
                    Conflict(
                        "PERMISSION_ALREADY_ASSIGNED",
                        "Permission is already assigned to the user",
                    )
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_GRANT.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(assignment.id),
                    changes={"permission": permission.name, "target_user_id": str(user_id)},
                )
            )

            response = UserPermissionResponse.from_assignment(assignment, permission, utc_now())
            await self.uow.commit()
            logger.info(f"Permission {permission.name} assigned to user {user_id}")

            return Return.ok(response)
