from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import (
    Permission,
    PermissionAction,
    PermissionAssignment,
    ResourceType,
)


class UserPermissionResponse(BaseModel):
    """Direct assignment joined with its catalog permission"""

    id: UUID
    user_id: UUID
    permission_id: UUID
    name: str
    action: PermissionAction
    resource: ResourceType
    granted_by: UUID
    granted_at: datetime
    expires_at: Optional[datetime] = None
    is_expired: bool = False

    @classmethod
    def from_assignment(
        cls, assignment: PermissionAssignment, permission: Permission, now: datetime
    ) -> "UserPermissionResponse":
        return cls(
            id=assignment.id,
            user_id=assignment.user_id,
            permission_id=permission.id,
            name=permission.name,
            action=permission.action,
            resource=permission.resource,
            granted_by=assignment.granted_by,
            granted_at=assignment.granted_at,
            expires_at=assignment.expires_at,
            is_expired=assignment.expires_at is not None and assignment.expires_at <= now,
        )


class UserPermissionsResponse(BaseModel):
    user_id: UUID
    total: int
    permissions: List[UserPermissionResponse]


class DirectHolder(BaseModel):
    user_id: UUID
    email: Optional[str] = None
    assignment_id: UUID
    expires_at: Optional[datetime] = None


class RoleHolder(BaseModel):
    user_id: UUID
    email: Optional[str] = None
    role_id: UUID
    role_name: str


class PermissionHoldersResponse(BaseModel):
    permission_id: UUID
    permission_name: str
    direct: List[DirectHolder]
    via_roles: List[RoleHolder]


class RevokeAllResponse(BaseModel):
    user_id: UUID
    revoked: int


class CopyPermissionsResponse(BaseModel):
    source_user_id: UUID
    target_user_id: UUID
    copied: int
    skipped: int
