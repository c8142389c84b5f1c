"""
Seed Default Permissions Use Case

Installs the fixed permission catalog.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType

from .catalog import default_catalog
from .dtos import SeedPermissionsResponse

logger = logging.getLogger(__name__)


class SeedDefaultPermissionsUseCase:
    """
    Use case for seeding the permission catalog.

    Business Rules:
    - Idempotent: a non-empty catalog is left untouched
    - Concurrent seeds never duplicate rows (insert skips existing (action, resource) pairs)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: Optional[UUID] = None) -> Result[SeedPermissionsResponse]:
        """
        Execute seed use case.

        Args:
            actor_id: Caller when seeded over HTTP, None at startup

        Returns:
            Result with SeedPermissionsResponse, created=False when nothing was inserted
        """
        async with self.uow:
            existing = await self.uow.permissions.count()
            if existing > 0:
                logger.info(f"Permission catalog already seeded ({existing} permissions)")
                return Return.ok(SeedPermissionsResponse(created=False, count=existing))

            inserted = await self.uow.permissions.bulk_create_skip_duplicates(default_catalog())

            if actor_id is not None:
                await self.uow.audit_events.record(
                    AuditEvent(
                        user_id=actor_id,
                        action=AuditAction.PERMISSION_SEED.value,
                        resource=ResourceType.PERMISSIONS.value,
                        changes={"inserted": inserted},
                    )
                )

            await self.uow.commit()
            logger.info(f"Seeded {inserted} permissions")

            return Return.ok(SeedPermissionsResponse(created=inserted > 0, count=inserted))
