from typing import List

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import PermissionResponse


class ListPermissionsUseCase:
    """Whole catalog ordered by (resource, action)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[List[PermissionResponse]]:
        async with self.uow:
            permissions = await self.uow.permissions.list_all()
            return Return.ok([PermissionResponse.model_validate(p) for p in permissions])
