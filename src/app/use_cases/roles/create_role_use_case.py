"""
Create Role Use Case

Creates a custom role in the owner's enterprise.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType, Role
from src.domain.errors import Conflict

from .dtos import RoleResponse
from .permission_ids import validate_permission_ids

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """
    Use case for creating a role.

    Business Rules:
    - Only the owner can create roles
    - Role name is unique within the enterprise
    - All given permission ids must exist
    - Created roles are custom (is_system=False)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        name: str,
        description: Optional[str] = None,
        permission_ids: Optional[List[UUID]] = None,
    ) -> Result[RoleResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            if await self.uow.roles.get_by_name(enterprise_id, name) is not None:
                return Return.err(
                    Conflict("ROLE_NAME_TAKEN", f"Role '{name}' already exists in the enterprise")
                )

            ids_result = await validate_permission_ids(self.uow, permission_ids or [])
            if ids_result.is_err():
                return ids_result

            try:
                role = await self.uow.roles.create(
                    Role(
                        name=name,
                        description=description,
                        enterprise_id=enterprise_id,
                        is_system=False,
                        is_custom=True,
                    )
                )
            except IntegrityError:
                await self.uow.rollback()
                if await self.uow.roles.get_by_name(enterprise_id, name) is None:
                    raise
                return Return.err(
                    Conflict("ROLE_NAME_TAKEN", f"Role '{name}' already exists in the enterprise")
                )

            if ids_result.value:
                await self.uow.roles.add_permissions(role.id, ids_result.value)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.ROLE_CREATE.value,
                    resource=ResourceType.ROLES.value,
                    resource_id=str(role.id),
                    changes={
                        "name": name,
                        "permission_ids": [str(pid) for pid in ids_result.value],
                    },
                )
            )

            permissions = await self.uow.roles.list_permissions(role.id)
            response = RoleResponse.from_role(role, permissions, user_count=0)
            await self.uow.commit()
            logger.info(f"Role {name} created in enterprise {enterprise_id}")

            return Return.ok(response)
