"""
Leave Enterprise Use Case

A non-owner member leaves their enterprise.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden

from .dtos import MembershipEndedResponse
from .membership_cleanup import end_membership

logger = logging.getLogger(__name__)


class LeaveEnterpriseUseCase:
    """
    Use case for leaving the current enterprise.

    Business Rules:
    - Caller must belong to an enterprise
    - The owner cannot leave; ownership must be transferred first
    - Direct permission assignments and role links are removed with the membership
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MembershipEndedResponse]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result
            membership = membership_result.value

            if membership.is_owner:
                return Return.err(
                    Forbidden(
                        "OWNER_CANNOT_LEAVE",
                        "Owner cannot leave the enterprise. Transfer ownership first",
                    )
                )

            enterprise_id = membership.enterprise_id
            revoked, removed = await end_membership(self.uow, membership)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_LEAVE.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(enterprise_id),
                    changes={"revoked_permissions": revoked, "removed_roles": removed},
                )
            )

            await self.uow.commit()
            logger.info(f"User {user_id} left enterprise {enterprise_id}")

            return Return.ok(
                MembershipEndedResponse(
                    status="left",
                    user_id=user_id,
                    enterprise_id=enterprise_id,
                    revoked_permissions=revoked,
                    removed_roles=removed,
                )
            )
