"""
Delete Enterprise Use Case

Soft-deletes an enterprise; memberships and grants are kept.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import NotFound

from .dtos import EnterpriseResponse

logger = logging.getLogger(__name__)


class DeleteEnterpriseUseCase:
    """Owner-only soft delete: is_active flips to False"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, enterprise_id: UUID) -> Result[EnterpriseResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(
                user_id, enterprise_id
            )
            if owner_result.is_err():
                return owner_result

            enterprise = await self.uow.enterprises.get_by_id(enterprise_id)
            if enterprise is None:
                return Return.err(NotFound("ENTERPRISE_NOT_FOUND", "Enterprise not found"))

            enterprise.is_active = False
            enterprise = await self.uow.enterprises.update(enterprise)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_DELETE.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(enterprise_id),
                )
            )

            await self.uow.commit()
            logger.info(f"Enterprise {enterprise_id} deactivated by owner {user_id}")

            return Return.ok(EnterpriseResponse.model_validate(enterprise))
