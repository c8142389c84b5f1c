from uuid import UUID

from libs.result import Result, Return
from src.app.services.permission_resolver import PermissionResolver
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import PermissionAction, ResourceType

from .dtos import CheckPermissionResponse


class CheckPermissionUseCase:
    """Allow/deny answer for the caller; lack of access is a value, never an error"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: UUID, action: PermissionAction, resource: ResourceType
    ) -> Result[CheckPermissionResponse]:
        async with self.uow:
            allowed = await PermissionResolver(self.uow).check_permission(
                user_id, action, resource
            )
            return Return.ok(
                CheckPermissionResponse(action=action, resource=resource, allowed=allowed)
            )
