"""
Assign Role To User Use Case
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Conflict, NotFound

from .dtos import UserRolesResponse
from .role_listing import user_roles_response

logger = logging.getLogger(__name__)


class AssignRoleToUserUseCase:
    """
    Use case for giving a role to a member.

    Business Rules:
    - Only the owner can assign roles
    - Target must be a member of the owner's enterprise
    - Role must belong to the owner's enterprise
    - A user holds a role at most once
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, user_id: UUID, role_id: UUID
    ) -> Result[UserRolesResponse]:
        async with self.uow:
            store = MembershipStore(self.uow.memberships)
            owner_result = await store.require_owner(actor_id)
            if owner_result.is_err():
                return owner_result

            scope_result = await store.require_same_enterprise(actor_id, user_id)
            if scope_result.is_err():
                return scope_result
            enterprise_id = owner_result.value.enterprise_id
            _actor, target = scope_result.value

            role = await self.uow.roles.get_in_enterprise(role_id, enterprise_id)
            if role is None:
                return Return.err(NotFound("ROLE_NOT_FOUND", "Role not found"))

            if await self.uow.roles.user_has_role(user_id, role_id):
                return Return.err(
                    Conflict("ROLE_ALREADY_ASSIGNED", "User already has this role")
                )

            try:
                await self.uow.roles.assign_to_user(user_id, role_id)
            except IntegrityError:
                await self.uow.rollback()
                if not await self.uow.roles.user_has_role(user_id, role_id):
                    raise
                return Return.err(
                    Conflict("ROLE_ALREADY_ASSIGNED", "User already has this role")
                )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.ROLE_ASSIGN.value,
                    resource=ResourceType.ROLES.value,
                    resource_id=str(role_id),
                    changes={"role": role.name, "target_user_id": str(user_id)},
                )
            )

            response = await user_roles_response(self.uow, target)
            await self.uow.commit()
            logger.info(f"Role {role.name} assigned to user {user_id}")

            return Return.ok(response)
