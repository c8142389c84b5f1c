"""
Permission Use Case DTOs

Shared by the catalog, grant, and assignment use cases.
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import PermissionAction, PermissionSource, ResourceType


class PermissionResponse(BaseModel):
    """Catalog permission"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    action: PermissionAction
    resource: ResourceType
    name: str
    description: str


class SeedPermissionsResponse(BaseModel):
    created: bool
    count: int


class CheckPermissionResponse(BaseModel):
    action: PermissionAction
    resource: ResourceType
    allowed: bool


class EffectivePermission(PermissionResponse):
    """A permission a user holds, and through which channel"""

    source: PermissionSource
    role_name: Optional[str] = None
    expires_at: Optional[datetime] = None


class MyPermissionsResponse(BaseModel):
    is_owner: bool
    total: int
    permissions: Dict[str, List[EffectivePermission]]


class BulkAssignResponse(BaseModel):
    assigned: int
    skipped: int
