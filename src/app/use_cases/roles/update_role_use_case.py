"""
Update Role Use Case
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Conflict, Forbidden, NotFound

from .dtos import RoleResponse
from .permission_ids import validate_permission_ids

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """
    Use case for editing a role.

    Business Rules:
    - Only the owner can edit roles of their enterprise
    - System roles are read-only
    - A new name must not clash with another role of the enterprise
    - permission_ids, when given, replaces the whole permission set
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        role_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        permission_ids: Optional[List[UUID]] = None,
    ) -> Result[RoleResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            role = await self.uow.roles.get_in_enterprise(role_id, enterprise_id)
            if role is None:
                return Return.err(NotFound("ROLE_NOT_FOUND", "Role not found"))

            if role.is_system:
                return Return.err(
                    Forbidden("SYSTEM_ROLE_PROTECTED", "System roles cannot be modified")
                )

            changes = {}
            if name is not None and name != role.name:
                clash = await self.uow.roles.get_by_name(enterprise_id, name)
                if clash is not None and clash.id != role.id:
                    return Return.err(
                        Conflict(
                            "ROLE_NAME_TAKEN",
                            f"Role '{name}' already exists in the enterprise",
                        )
                    )
                changes["name"] = {"old": role.name, "new": name}
                role.name = name

            if description is not None:
                changes["description"] = description
                role.description = description

            if permission_ids is not None:
                ids_result = await validate_permission_ids(self.uow, permission_ids)
                if ids_result.is_err():
                    return ids_result
                await self.uow.roles.set_permissions(role.id, ids_result.value)
                changes["permission_ids"] = [str(pid) for pid in ids_result.value]

            try:
                role = await self.uow.roles.update(role)
            except IntegrityError:
                await self.uow.rollback()
                if name is None:
                    raise
                clash = await self.uow.roles.get_by_name(enterprise_id, name)
                if clash is None or clash.id == role_id:
                    raise
                return Return.err(
                    Conflict("ROLE_NAME_TAKEN", f"Role '{name}' already exists in the enterprise")
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.ROLE_UPDATE.value,
                    resource=ResourceType.ROLES.value,
                    resource_id=str(role.id),
                    changes=changes,
                )
            )

            permissions = await self.uow.roles.list_permissions(role.id)
            user_count = await self.uow.roles.count_users(role.id)
            response = RoleResponse.from_role(role, permissions, user_count=user_count)
            await self.uow.commit()
            logger.info(f"Role {role_id} updated in enterprise {enterprise_id}")

            return Return.ok(response)
