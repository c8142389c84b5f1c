"""
EnterprisePermission Entity

A permission granted to every member of an enterprise.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class EnterprisePermission(SQLModel, table=True):
    """
    EnterprisePermission entity - enterprise-wide grant.

    Business Rules:
    - (enterprise_id, permission_id) is unique
    - Expired grants stay stored and are filtered out at query time
    """

    __tablename__ = "enterprise_permissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    enterprise_id: UUID = Field(foreign_key="enterprises.id", nullable=False, index=True)
    permission_id: UUID = Field(foreign_key="permissions.id", nullable=False)
    granted_by: UUID = Field(foreign_key="users.id", nullable=False)

    # Timestamps
    granted_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_enterprise_permission",
            "enterprise_id",
            "permission_id",
            unique=True,
        ),
    )
