from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions.dtos import PermissionResponse

from .dtos import AvailablePermissionsResponse


class ListAvailablePermissionsUseCase:
    """Catalog split into permissions the enterprise has been granted and those it has not"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[AvailablePermissionsResponse]:
        async with self.uow:
            membership_result = await MembershipStore(self.uow.memberships).require_membership(
                user_id
            )
            if membership_result.is_err():
                return membership_result
            enterprise_id = membership_result.value.enterprise_id

            catalog = await self.uow.permissions.list_all()
            granted = set(await self.uow.enterprise_permissions.list_permission_ids(enterprise_id))

            return Return.ok(
                AvailablePermissionsResponse(
                    available=[
                        PermissionResponse.model_validate(p)
                        for p in catalog
                        if p.id not in granted
                    ],
                    assigned=[
                        PermissionResponse.model_validate(p) for p in catalog if p.id in granted
                    ],
                )
            )
