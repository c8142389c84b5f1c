"""
Remove Member Use Case

Owner removes a member from their enterprise.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden, NotFound

from .dtos import MembershipEndedResponse
from .membership_cleanup import end_membership

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing a member from an enterprise.

    Business Rules:
    - Only the owner can remove members
    - Target must be a member of the owner's enterprise
    - The owner cannot be removed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, owner_id: UUID, member_id: UUID) -> Result[MembershipEndedResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(owner_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            target = await self.uow.memberships.get_by_user_and_enterprise(
                member_id, enterprise_id
            )
            if target is None:
                return Return.err(
                    NotFound("MEMBER_NOT_FOUND", "User is not a member of your enterprise")
                )

            if target.is_owner:
                return Return.err(
                    Forbidden("CANNOT_REMOVE_OWNER", "The owner cannot be removed")
                )

            revoked, removed = await end_membership(self.uow, target)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=owner_id,
                    action=AuditAction.ENTERPRISE_MEMBER_REMOVE.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(member_id),
                    changes={"revoked_permissions": revoked, "removed_roles": removed},
                )
            )

            await self.uow.commit()
            logger.info(f"Member {member_id} removed from enterprise {enterprise_id}")

            return Return.ok(
                MembershipEndedResponse(
                    status="removed",
                    user_id=member_id,
                    enterprise_id=enterprise_id,
                    revoked_permissions=revoked,
                    removed_roles=removed,
                )
            )
