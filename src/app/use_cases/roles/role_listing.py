from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Membership

from .dtos import RoleResponse, UserRolesResponse


async def user_roles_response(uow: UnitOfWork, membership: Membership) -> UserRolesResponse:
    """Roles a member holds in their current enterprise, with permissions"""
    roles = await uow.roles.list_user_roles(membership.user_id, membership.enterprise_id)
    return UserRolesResponse(
        user_id=membership.user_id,
        is_owner=membership.is_owner,
        roles=[
            RoleResponse.from_role(role, await uow.roles.list_permissions(role.id))
            for role in roles
        ],
    )
