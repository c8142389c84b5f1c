"""
Get My Permissions Use Case

Lists the permissions a member holds directly or through roles.
"""

from collections import defaultdict
from typing import Dict, List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import PermissionSource

from .dtos import EffectivePermission, MyPermissionsResponse


class GetMyPermissionsUseCase:
    """
    Use case for listing the caller's effective per-user permissions.

    Live direct assignments come first; role permissions are added only for
    permissions not already present. Enterprise-wide grants are listed by
    the enterprise permission endpoints and are not repeated here.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[MyPermissionsResponse]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result
            membership = membership_result.value

            collected: Dict[UUID, EffectivePermission] = {}

            direct = await self.uow.permission_assignments.list_by_user(
                user_id, active_at=utc_now()
            )
            for assignment, permission in direct:
                collected[permission.id] = EffectivePermission(
                    id=permission.id,
                    action=permission.action,
                    resource=permission.resource,
                    name=permission.name,
                    description=permission.description,
                    source=PermissionSource.direct,
                    expires_at=assignment.expires_at,
                )

            via_roles = await self.uow.roles.list_user_role_permissions(
                user_id, membership.enterprise_id
            )
            for role, permission in via_roles:
                if permission.id in collected:
                    continue
                collected[permission.id] = EffectivePermission(
                    id=permission.id,
                    action=permission.action,
                    resource=permission.resource,
                    name=permission.name,
                    description=permission.description,
                    source=PermissionSource.role,
                    role_name=role.name,
                )

            grouped: Dict[str, List[EffectivePermission]] = defaultdict(list)
            for entry in collected.values():
                grouped[entry.resource.value].append(entry)

            return Return.ok(
                MyPermissionsResponse(
                    is_owner=membership.is_owner,
                    total=len(collected),
                    permissions=dict(grouped),
                )
            )
