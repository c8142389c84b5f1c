"""
Membership Store

Answers "which enterprise does this user belong to, and do they own it".
Every enterprise-scoped query starts here.
"""

from typing import Optional, Tuple
from uuid import UUID

from libs.result import Result, Return
from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.entities import Membership
from src.domain.errors import Forbidden, NotFound


class MembershipStore:
    def __init__(self, memberships: IMembershipRepository):
        self.memberships = memberships

    async def membership_of(self, user_id: UUID) -> Optional[Membership]:
        return await self.memberships.get_by_user_id(user_id)

    async def is_owner(self, user_id: UUID) -> bool:
        membership = await self.membership_of(user_id)
        return membership is not None and membership.is_owner

    async def same_enterprise(self, user_a: UUID, user_b: UUID) -> bool:
        membership_a = await self.membership_of(user_a)
        membership_b = await self.membership_of(user_b)
        if membership_a is None or membership_b is None:
            return False
        return membership_a.enterprise_id == membership_b.enterprise_id

    async def require_membership(self, user_id: UUID) -> Result[Membership]:
        membership = await self.membership_of(user_id)
        if membership is None:
            return Return.err(
                NotFound("NO_ENTERPRISE", "You do not belong to any enterprise")
            )
        return Return.ok(membership)

    async def require_owner(
        self, user_id: UUID, enterprise_id: Optional[UUID] = None
    ) -> Result[Membership]:
        """
        Membership of the caller, provided they own an enterprise
        (and, when enterprise_id is given, that specific one).
        """
        membership = await self.membership_of(user_id)
        if (
            membership is None
            or not membership.is_owner
            or (enterprise_id is not None and membership.enterprise_id != enterprise_id)
        ):
            return Return.err(
                Forbidden("NOT_OWNER", "Only the enterprise owner can perform this action")
            )
        return Return.ok(membership)

    async def require_same_enterprise(
        self, actor_id: UUID, target_id: UUID
    ) -> Result[Tuple[Membership, Membership]]:
        actor = await self.membership_of(actor_id)
        if actor is None:
            return Return.err(
                Forbidden("NO_ENTERPRISE", "You do not belong to any enterprise")
            )

        target = await self.membership_of(target_id)
        if target is None:
            return Return.err(
                NotFound("MEMBER_NOT_FOUND", "User does not belong to any enterprise")
            )

        if actor.enterprise_id != target.enterprise_id:
            return Return.err(
                Forbidden("NOT_SAME_ENTERPRISE", "User does not belong to your enterprise")
            )

        return Return.ok((actor, target))
