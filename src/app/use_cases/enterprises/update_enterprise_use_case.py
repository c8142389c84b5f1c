"""
Update Enterprise Use Case

Owner-only edit of enterprise details.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Conflict, NotFound

from .dtos import EnterpriseResponse

logger = logging.getLogger(__name__)


class UpdateEnterpriseUseCase:
    """
    Use case for updating an enterprise.

    Business Rules:
    - Only the owner of this enterprise can update it
    - A new name must not be held by another active enterprise
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        enterprise_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        logo: Optional[str] = None,
        website: Optional[str] = None,
    ) -> Result[EnterpriseResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(
                user_id, enterprise_id
            )
            if owner_result.is_err():
                return owner_result

            enterprise = await self.uow.enterprises.get_by_id(enterprise_id)
            if enterprise is None:
                return Return.err(NotFound("ENTERPRISE_NOT_FOUND", "Enterprise not found"))

            changes = {}
            if name is not None and name != enterprise.name:
                clash = await self.uow.enterprises.get_active_by_name(name)
                if clash is not None and clash.id != enterprise.id:
                    return Return.err(
                        Conflict(
                            "ENTERPRISE_NAME_TAKEN",
                            "An enterprise with that name already exists",
                        )
                    )
                changes["name"] = {"old": enterprise.name, "new": name}
                enterprise.name = name

            for field, value in (
                ("description", description),
                ("logo", logo),
                ("website", website),
            ):
                if value is not None:
                    changes[field] = value
                    setattr(enterprise, field, value)

            try:
                enterprise = await self.uow.enterprises.update(enterprise)
            except IntegrityError:
                await self.uow.rollback()
                if name is None:
                    raise
                clash = await self.uow.enterprises.get_active_by_name(name)
                if clash is None or clash.id == enterprise_id:
                    raise
                return Return.err(
                    Conflict("ENTERPRISE_NAME_TAKEN", "An enterprise with that name already exists")
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_UPDATE.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(enterprise_id),
                    changes=changes,
                )
            )

            await self.uow.commit()
            logger.info(f"Enterprise {enterprise_id} updated by owner {user_id}")

            return Return.ok(EnterpriseResponse.model_validate(enterprise))
