from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now

from .dtos import UserPermissionResponse, UserPermissionsResponse


class ListUserPermissionsUseCase:
    """
    Direct assignments of a member, expired ones included and flagged.

    Any member may look at members of their own enterprise.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor_id: UUID, user_id: UUID) -> Result[UserPermissionsResponse]:
        async with self.uow:
            scope_result = await MembershipStore(self.uow.memberships).require_same_enterprise(
                actor_id, user_id
            )
            if scope_result.is_err():
                return scope_result

            now = utc_now()
            rows = await self.uow.permission_assignments.list_by_user(user_id)

            return Return.ok(
                UserPermissionsResponse(
                    user_id=user_id,
                    total=len(rows),
                    permissions=[
                        UserPermissionResponse.from_assignment(assignment, permission, now)
                        for assignment, permission in rows
                    ],
                )
            )
