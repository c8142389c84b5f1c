from datetime import datetime
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.membership_store import MembershipStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import to_naive_utc, utc_now
from src.domain.entities import AuditAction, AuditEvent, ResourceType
from src.domain.errors import Forbidden, NotFound

from .dtos import EnterprisePermissionResponse


class UpdateEnterprisePermissionExpirationUseCase:
    """
    Owner sets or clears the expiry of an enterprise grant.

    expires_at=None makes the grant permanent.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        actor_id: UUID,
        enterprise_permission_id: UUID,
        expires_at: Optional[datetime],
    ) -> Result[EnterprisePermissionResponse]:
        async with self.uow:
            owner_result = await MembershipStore(self.uow.memberships).require_owner(actor_id)
            if owner_result.is_err():
                return owner_result
            enterprise_id = owner_result.value.enterprise_id

            found = await self.uow.enterprise_permissions.get_by_id(enterprise_permission_id)
            if found is None:
                return Return.err(
                    NotFound("ENTERPRISE_PERMISSION_NOT_FOUND", "Enterprise permission not found")
                )
            grant, permission = found

            if grant.enterprise_id != enterprise_id:
                return Return.err(
                    Forbidden(
                        "NOT_SAME_ENTERPRISE",
                        "Permission grant belongs to another enterprise",
                    )
                )

            previous = grant.expires_at
            grant.expires_at = to_naive_utc(expires_at)
            grant = await self.uow.enterprise_permissions.update(grant)

            await self.uow.audit_events.record(
                AuditEvent(
                    enterprise_id=enterprise_id,
                    user_id=actor_id,
                    action=AuditAction.PERMISSION_UPDATE.value,
                    resource=ResourceType.PERMISSIONS.value,
                    resource_id=str(enterprise_permission_id),
                    changes={
                        "expires_at": {
                            "old": previous.isoformat() if previous else None,
                            "new": grant.expires_at.isoformat() if grant.expires_at else None,
                        }
                    },
                )
            )

            response = EnterprisePermissionResponse.from_grant(grant, permission, utc_now())
            await self.uow.commit()

            return Return.ok(response)
