"""
Role Entity

Named, enterprise-scoped bundle of permissions, plus its join tables.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Role(SQLModel, table=True):
    """
    Role entity.

    Business Rules:
    - Name is unique within an enterprise
    - System roles (is_system) cannot be updated, deleted, or have permissions changed
    - Role permissions never expire
    """

    __tablename__ = "roles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    enterprise_id: UUID = Field(foreign_key="enterprises.id", nullable=False, index=True)

    is_system: bool = Field(default=False)
    is_custom: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_role_enterprise_name", "enterprise_id", "name", unique=True),
    )


class RolePermission(SQLModel, table=True):
    """Role <-> Permission link"""

    __tablename__ = "role_permissions"

    role_id: UUID = Field(foreign_key="roles.id", primary_key=True)
    permission_id: UUID = Field(foreign_key="permissions.id", primary_key=True)


class UserRole(SQLModel, table=True):
    """User <-> Role link"""

    __tablename__ = "user_roles"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    role_id: UUID = Field(foreign_key="roles.id", primary_key=True)
