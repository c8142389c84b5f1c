from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.use_cases.permissions.dtos import PermissionResponse
from src.domain.entities import Permission, Role


class RoleResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    enterprise_id: UUID
    is_system: bool
    is_custom: bool
    created_at: datetime
    permissions: List[PermissionResponse] = []
    user_count: Optional[int] = None

    @classmethod
    def from_role(
        cls,
        role: Role,
        permissions: List[Permission],
        user_count: Optional[int] = None,
    ) -> "RoleResponse":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            enterprise_id=role.enterprise_id,
            is_system=role.is_system,
            is_custom=role.is_custom,
            created_at=role.created_at,
            permissions=[PermissionResponse.model_validate(p) for p in permissions],
            user_count=user_count,
        )


class RoleUser(BaseModel):
    id: UUID
    email: Optional[str] = None


class RoleDetailResponse(RoleResponse):
    users: List[RoleUser] = []


class UserRolesResponse(BaseModel):
    user_id: UUID
    is_owner: bool
    roles: List[RoleResponse]
