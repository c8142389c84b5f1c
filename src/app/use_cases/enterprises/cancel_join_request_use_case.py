import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditAction, AuditEvent, JoinRequestStatus, ResourceType
from src.domain.errors import Conflict, Forbidden, NotFound

from .dtos import StatusResponse

logger = logging.getLogger(__name__)


class CancelJoinRequestUseCase:
    """
    Use case for withdrawing one's own join request.

    Only the requester may cancel, and only while the request is PENDING.
    The row is deleted.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, request_id: UUID) -> Result[StatusResponse]:
        async with self.uow:
            join_request = await self.uow.join_requests.get_by_id(request_id)
            if join_request is None:
                return Return.err(NotFound("JOIN_REQUEST_NOT_FOUND", "Join request not found"))

            if join_request.user_id != user_id:
                return Return.err(
                    Forbidden("NOT_REQUESTER", "You can only cancel your own join requests")
                )

            if join_request.status != JoinRequestStatus.PENDING:
                return Return.err(
                    Conflict(
                        "REQUEST_ALREADY_PROCESSED",
                        f"Join request is already {join_request.status.value}",
                    )
                )

            enterprise_id = join_request.enterprise_id
            await self.uow.join_requests.delete(join_request)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=user_id,
                    action=AuditAction.ENTERPRISE_JOIN_CANCEL.value,
                    resource=ResourceType.ENTERPRISE.value,
                    resource_id=str(request_id),
                )
            )

            await self.uow.commit()
            logger.info(f"Join request {request_id} cancelled by requester {user_id}")

            return Return.ok(StatusResponse(status="cancelled"))
