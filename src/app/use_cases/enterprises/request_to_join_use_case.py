"""
Request To Join Use Case

Files (or re-files) a join request for an active enterprise.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utc_now
from src.domain.entities import (
    AuditAction,
    AuditEvent,
    JoinRequest,
    JoinRequestStatus,
    ResourceType,
)
from src.domain.errors import Conflict, NotFound

from .dtos import JoinRequestResponse

logger = logging.getLogger(__name__)


class RequestToJoinUseCase:
    """
    Use case for requesting to join an enterprise.

    Business Rules:
    - Target enterprise must exist and be active
    - Requester must not already belong to an enterprise
    - At most one request row per (user, enterprise)
    - A PENDING request blocks a new one
    - A REJECTED (or stale APPROVED) row is reset to PENDING rather than duplicated
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, enterprise_id: UUID) -> Result[JoinRequestResponse]:
        async with self.uow:
            enterprise = await self.uow.enterprises.get_active_by_id(enterprise_id)
            if enterprise is None:
                return Return.err(NotFound("ENTERPRISE_NOT_FOUND", "Enterprise not found"))

            await self.uow.users.ensure(user_id)

            if await self.uow.memberships.get_by_user_id(user_id) is not None:
                return Return.err(
                    Conflict("ALREADY_IN_ENTERPRISE", "User already belongs to an enterprise")
                )

            join_request = await self.uow.join_requests.get_by_user_and_enterprise(
                user_id, enterprise_id
            )

            if join_request is not None:
                if join_request.status == JoinRequestStatus.PENDING:
                    return Return.err(
                        Conflict(
                            "REQUEST_ALREADY_PENDING",
                            "A join request for this enterprise is already pending",
                        )
                    )

                join_request.status = JoinRequestStatus.PENDING
                join_request.requested_at = utc_now()
                join_request.processed_at = None
                join_request.processed_by = None
                join_request = await self.uow.join_requests.update(join_request)
            else:
                try:
                    join_request = await self.uow.join_requests.create(
                        JoinRequest(user_id=user_id, enterprise_id=enterprise_id)
                    )
                except IntegrityError:
                    await self.uow.rollback()
                    existing = await self.uow.join_requests.get_by_user_and_enterprise(
                        user_id, enterprise_id
                    )
                    if existing is None:
                        raise
                    return Return.err(
                        Conflict(
                            "REQUEST_ALREADY_PENDING",
                            "A join request for this enterprise is already pending",
                        )
                    )

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_JOIN_REQUEST.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(join_request.id),
                )
            )

            await self.uow.commit()
            logger.info(f"User {user_id} requested to join enterprise {enterprise_id}")

            return Return.ok(JoinRequestResponse.model_validate(join_request))
