from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.use_cases.permissions.dtos import PermissionResponse
from src.domain.entities import EnterprisePermission, Permission, PermissionAction, ResourceType


class EnterprisePermissionResponse(BaseModel):
    """Enterprise-wide grant joined with its catalog permission"""

    id: UUID
    enterprise_id: UUID
    permission_id: UUID
    name: str
    action: PermissionAction
    resource: ResourceType
    description: str
    granted_by: UUID
    granted_at: datetime
    expires_at: Optional[datetime] = None
    is_expired: bool = False

    @classmethod
    def from_grant(
        cls, grant: EnterprisePermission, permission: Permission, now: datetime
    ) -> "EnterprisePermissionResponse":
        return cls(
            id=grant.id,
            enterprise_id=grant.enterprise_id,
            permission_id=permission.id,
            name=permission.name,
            action=permission.action,
            resource=permission.resource,
            description=permission.description,
            granted_by=grant.granted_by,
            granted_at=grant.granted_at,
            expires_at=grant.expires_at,
            is_expired=grant.expires_at is not None and grant.expires_at <= now,
        )


class EnterprisePermissionsResponse(BaseModel):
    enterprise_id: UUID
    total: int
    permissions: Dict[str, List[EnterprisePermissionResponse]]


class AvailablePermissionsResponse(BaseModel):
    available: List[PermissionResponse]
    assigned: List[PermissionResponse]
