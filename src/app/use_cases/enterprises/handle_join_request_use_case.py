"""
Handle Join Request Use Case

Owner approves or rejects a pending join request.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    JoinRequestAction,
    JoinRequestStatus,
    Membership,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

from .dtos import HandleJoinRequestResponse, JoinRequestResponse, MemberInfo

logger = logging.getLogger(__name__)


class HandleJoinRequestUseCase:
    """
    Use case for approving or rejecting a join request.

    Business Rules:
    - Only the owner of the requested enterprise may decide
    - Only PENDING requests can be processed
    - Approval fails if the requester joined another enterprise meanwhile
    - Approval creates the membership and marks the request in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor_id: UUID, request_id: UUID, action: JoinRequestAction
    ) -> Result[HandleJoinRequestResponse]:
        """
        Execute handle join request use case.

        Args:
            actor_id: Caller, must own the request's enterprise
            request_id: Join request to process
            action: APPROVE or REJECT

        Returns:
            Result with HandleJoinRequestResponse DTO, or Error
        """
        async with self.uow:
            join_request = await self.uow.join_requests.get_by_id(request_id)
            if join_request is None:
                return Return.err(NotFound("JOIN_REQUEST_NOT_FOUND", "Join request not found"))

            owner_result = await MembershipStore(self.uow.memberships).require_owner(
                actor_id, join_request.enterprise_id
            )
            if owner_result.is_err():
                return owner_result

            if join_request.status != JoinRequestStatus.PENDING:
                return Return.err(
                    Conflict(
                        "REQUEST_ALREADY_PROCESSED",
                        f"Join request is already {join_request.status.value}",
                    )
                )

            membership = None
            if action == JoinRequestAction.APPROVE:
                requester_id = join_request.user_id
                if await self.uow.memberships.get_by_user_id(requester_id) is not None:
                    return Return.err(
                        Conflict(
                            "ALREADY_IN_ENTERPRISE",
                            "User already belongs to an enterprise",
                        )
                    )
                try:
                    membership = await self.uow.memberships.create(
                        Membership(
                            user_id=requester_id,
                            enterprise_id=join_request.enterprise_id,
                            is_owner=False,
                        )
                    )
                except IntegrityError:
                    await self.uow.rollback()
                    if await self.uow.memberships.get_by_user_id(requester_id) is None:
                        raise
                    return Return.err(
                        Conflict(
                            "ALREADY_IN_ENTERPRISE",
                            "User already belongs to an enterprise",
                        )
                    )
                join_request.status = JoinRequestStatus.APPROVED
                audit_action = AuditAction.ENTERPRISE_JOIN_APPROVE
            else:
                join_request.status = JoinRequestStatus.REJECTED
                audit_action = AuditAction.ENTERPRISE_JOIN_REJECT

            join_request.processed_at = utc_now()
            join_request.processed_by = actor_id
            join_request = await self.uow.join_requests.update(join_request)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=join_request.enterprise_id,
                    user_id=actor_id,
                    action=audit_action.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(join_request.id),
                    changes={"requester_id": str(join_request.user_id)},
                )
            )

            await self.uow.commit()
            logger.info(
                f"Join request {request_id} {join_request.status.value} by owner {actor_id}"
            )

            return Return.ok(
                HandleJoinRequestResponse(
                    status=join_request.status.value,
                    request=JoinRequestResponse.model_validate(join_request),
                    membership=MemberInfo.model_validate(membership) if membership else None,
                )
            )
