"""
Transfer Ownership Use Case

Moves the owner flag from the current owner to another member.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Conflict, NotFound

from .dtos import TransferOwnershipResponse

logger = logging.getLogger(__name__)


class TransferOwnershipUseCase:
    """
    Use case for transferring enterprise ownership.

    Business Rules:
    - Only the current owner can transfer
    - New owner must be a member of the same enterprise
    - Both flags flip in one transaction; exactly one owner afterwards
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, current_owner_id: UUID, new_owner_id: UUID
    ) -> Result[TransferOwnershipResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(
                current_owner_id
            )
            if owner_result.is_err():
                return owner_result
            current = owner_result.value
            enterprise_id = current.enterprise_id

            if new_owner_id == current_owner_id:
                return Return.err(Conflict("ALREADY_OWNER", "You already own this enterprise"))

            new_owner = await self.uow.memberships.get_by_user_and_enterprise(
                new_owner_id, enterprise_id
            )
            if new_owner is None:
                return Return.err(
                    NotFound("MEMBER_NOT_FOUND", "New owner must be a member of the enterprise")
                )

            # Demote first so the one-owner index never sees two owners
            current.is_owner = False
            await self.uow.memberships.update(current)
            new_owner.is_owner = True
            await self.uow.memberships.update(new_owner)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=current_owner_id,
                    action=AuditAction.OWNERSHIP_TRANSFER.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(enterprise_id),
                    changes={
                        "previous_owner_id": str(current_owner_id),
                        "new_owner_id": str(new_owner_id),
                    },
                )
            )

            await self.uow.commit()
            logger.info(
                f"Ownership of enterprise {enterprise_id} transferred "
                f"from {current_owner_id} to {new_owner_id}"
            )

            return Return.ok(
                TransferOwnershipResponse(
                    status="transferred",
                    enterprise_id=enterprise_id,
                    previous_owner_id=current_owner_id,
                    new_owner_id=new_owner_id,
                )
            )
