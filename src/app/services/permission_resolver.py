"""
Permission Resolver

Single allow/deny decision over four independent grant channels:
owner bypass, enterprise-wide grants, direct user assignments and roles.
"""

import logging
from datetime import datetime
from typing import Callable
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import PermissionAction, ResourceType

logger = logging.getLogger(__name__)


class PermissionResolver:
    """
    Decides whether a user may perform (action, resource).

    Must be used inside an entered unit of work so every lookup of one
    decision reads from the same session.

    Decision order, first match wins:
    1. no membership -> deny
    2. owner -> allow
    3. unexpired enterprise grant -> allow
    4. unexpired direct assignment -> allow
    5. role of the current enterprise carrying the permission -> allow (roles never expire)
    6. deny
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = utc_now):
        self.uow = uow
        self.clock = clock

    async def check_permission(
        self, user_id: UUID, action: PermissionAction, resource: ResourceType
    ) -> bool:
        membership = await self.uow.memberships.get_by_user_id(user_id)
        if membership is None:
            return False

        if membership.is_owner:
            return True

        now = self.clock()

        if await self.uow.enterprise_permissions.has_active_grant(
            membership.enterprise_id, action, resource, now
        ):
            return True

        if await self.uow.permission_assignments.has_active_assignment(
            user_id, action, resource, now
        ):
            return True

        allowed = await self.uow.roles.user_has_permission(
            user_id, membership.enterprise_id, action, resource
        )
        if not allowed:
            logger.debug(
                f"Denied {action.value} on {resource.value} for user {user_id}"
            )
        return allowed
