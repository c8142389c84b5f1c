from collections import defaultdict
from typing import Dict, List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now

from .dtos import EnterprisePermissionResponse, EnterprisePermissionsResponse


class ListEnterprisePermissionsUseCase:
    """Grants of the caller's enterprise grouped by resource, expired ones flagged"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[EnterprisePermissionsResponse]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result
            enterprise_id = membership_result.value.enterprise_id

            now = utc_now()
            rows = await self.uow.enterprise_permissions.list_by_enterprise(enterprise_id)

            grouped: Dict[str, List[EnterprisePermissionResponse]] = defaultdict(list)
            for grant, permission in rows:
                grouped[permission.resource.value].append(
                    EnterprisePermissionResponse.from_grant(grant, permission, now)
                )

            return Return.ok(
                EnterprisePermissionsResponse(
                    enterprise_id=enterprise_id,
                    total=len(rows),
                    permissions=dict(grouped),
                )
            )
