from typing import Tuple

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Membership


async def end_membership(uow: UnitOfWork, membership: Membership) -> Tuple[int, int]:
    """
    Delete a membership together with the user's direct assignments and role links.

    Must run inside the caller's transaction.

    Returns:
        (revoked direct assignments, removed role links)
    """
    revoked = await uow.permission_assignments.delete_by_user(membership.user_id)
    removed = await uow.roles.remove_all_from_user(membership.user_id)
    await uow.memberships.delete(membership)
    return revoked, removed
