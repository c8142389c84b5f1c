"""
Enterprise Entity

The tenant every membership, grant and role is scoped to.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Enterprise(SQLModel, table=True):
    """
    Enterprise entity - a tenant.

    Business Rules:
    - Name is unique among active enterprises
    - Soft delete: is_active flips to False, memberships are kept
    """

    __tablename__ = "enterprises"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255, index=True)
    description: Optional[str] = Field(default=None, max_length=1000)
    logo: Optional[str] = Field(default=None, max_length=500)
    website: Optional[str] = Field(default=None, max_length=500)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_enterprise_active_name",
            "name",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )
