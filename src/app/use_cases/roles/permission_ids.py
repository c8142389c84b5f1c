from typing import List, Sequence
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import NotFound


async def validate_permission_ids(
    uow: UnitOfWork, permission_ids: Sequence[UUID]
) -> Result[List[UUID]]:
    """Deduplicated ids, or NotFound when any of them is not in the catalog"""
    unique = list(dict.fromkeys(permission_ids))
    if not unique:
        return Return.ok(unique)
    found = await uow.permissions.get_by_ids(unique)
    if len(found) != len(unique):
        return Return.err(NotFound("PERMISSION_NOT_FOUND", "One or more permissions not found"))
    return Return.ok(unique)
