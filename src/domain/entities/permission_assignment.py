"""
PermissionAssignment Entity

A permission granted directly to one user.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class PermissionAssignment(SQLModel, table=True):
    """
    PermissionAssignment entity - direct user grant, independent of roles.

    Business Rules:
    - (user_id, permission_id) is unique
    - Expired assignments are filtered out at query time
    - Removed together with the membership on leave / removal
    """

    __tablename__ = "permission_assignments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    permission_id: UUID = Field(foreign_key="permissions.id", nullable=False)
    granted_by: UUID = Field(foreign_key="users.id", nullable=False)

    # Timestamps
    granted_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_permission_assignment", "user_id", "permission_id", unique=True),
    )
