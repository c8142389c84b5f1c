"""
Create Enterprise Use Case

Creates a new enterprise with the caller as its owner.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    Enterprise,
    Membership,
    ResourceType,
)
from src.domain.errors import Conflict

from .dtos import CreateEnterpriseResponse, EnterpriseResponse, MemberInfo

logger = logging.getLogger(__name__)


class CreateEnterpriseUseCase:
    """
    Use case for creating an enterprise.

    Business Rules:
    - A user already belonging to an enterprise cannot create another one
    - Name must not be held by another active enterprise
    - Enterprise and owner membership are created in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: UUID,
        name: str,
        description: Optional[str] = None,
        logo: Optional[str] = None,
        website: Optional[str] = None,
    ) -> Result[CreateEnterpriseResponse]:
        """
        Execute create enterprise use case.

        Args:
            user_id: Creator, becomes the owner
            name: Enterprise name
            description: Optional description
            logo: Optional logo URL
            website: Optional website URL

        Returns:
            Result with CreateEnterpriseResponse DTO, or Error
        """
        async with self.uow:
            await self.uow.users.ensure(user_id)

            # Single-membership invariant, checked in the creating transaction
            existing_membership = await self.uow.memberships.get_by_user_id(user_id)
            if existing_membership is not None:
                return Return.err(
                    Conflict("ALREADY_IN_ENTERPRISE", "User already belongs to an enterprise")
                )

            if await self.uow.enterprises.get_active_by_name(name) is not None:
                return Return.err(
                    Conflict("ENTERPRISE_NAME_TAKEN", "An enterprise with that name already exists")
                )

            try:
                enterprise = await self.uow.enterprises.create(
                    Enterprise(
                        name=name,
                        description=description,
                        logo=logo,
                        website=website,
                    )
                )
            except IntegrityError:
                await self.uow.rollback()
                if await self.uow.enterprises.get_active_by_name(name) is None:
                    raise
                return Return.err(
                    Conflict("ENTERPRISE_NAME_TAKEN", "An enterprise with that name already exists")
                )

            try:
                membership = await self.uow.memberships.create(
                    Membership(user_id=user_id, enterprise_id=enterprise.id, is_owner=True)
                )
            except IntegrityError:
                await self.uow.rollback()
                if await self.uow.memberships.get_by_user_id(user_id) is None:
                    raise
                return Return.err(
                    Conflict("ALREADY_IN_ENTERPRISE", "User already belongs to an enterprise")
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise.id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_CREATE.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(enterprise.id),
                    changes={"name": name},
                )
            )

            await self.uow.commit()
            logger.info(f"Enterprise {enterprise.name} created by owner {user_id}")

            return Return.ok(
                CreateEnterpriseResponse(
                    enterprise=EnterpriseResponse.model_validate(enterprise),
                    membership=MemberInfo.model_validate(membership),
                )
            )
