"""
Route Guards

FastAPI dependencies that stop a request with 403 before the handler runs.
"""

from uuid import UUID

from fastapi import Depends, status

from libs.result import Error
from src.api.error import ClientError
from src.app.services.membership_store import MembershipStore
from src.app.services.permission_resolver import PermissionResolver
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import PermissionAction, ResourceType


def require_permission(action: PermissionAction, resource: ResourceType):
    """
    Build a dependency that lets the request through only when the caller
    holds (action, resource) through any grant channel.

    Returns the caller's user id.
    """

    async def _checker(
        user_id: UUID = Depends(get_current_user_id),
        uow: UnitOfWork = Depends(get_unit_of_work),
    ) -> UUID:
        async with uow:
            allowed = await PermissionResolver(uow).check_permission(user_id, action, resource)
        if not allowed:
            raise ClientError(
                Error(
                    "PERMISSION_DENIED",
                    f"Missing permission {action.value} on {resource.value}",
                ),
                status_code=status.HTTP_403_FORBIDDEN,
            )
        return user_id

    return _checker


async def require_owner(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> UUID:
    """Lets the request through only when the caller owns an enterprise"""
    async with uow:
        owner = await MembershipStore(uow.memberships).is_owner(user_id)
    if not owner:
        raise ClientError(
            Error("NOT_OWNER", "Only the enterprise owner can perform this action"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return user_id
