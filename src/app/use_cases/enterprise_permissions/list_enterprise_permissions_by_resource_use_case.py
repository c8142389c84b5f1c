from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import ResourceType

from .dtos import EnterprisePermissionResponse


class ListEnterprisePermissionsByResourceUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, resource: ResourceType
    ) -> Result[List[EnterprisePermissionResponse]]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result

            now = utc_now()
            rows = await self.uow.enterprise_permissions.list_by_enterprise(
                membership_result.value.enterprise_id, resource=resource
            )
            return Return.ok(
                [
                    EnterprisePermissionResponse.from_grant(grant, permission, now)
                    for grant, permission in rows
                ]
            )
