"""
Membership Entity

Links a User to the single Enterprise they belong to.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Enterprise.

    Business Rules:
    - A user has at most one membership at any time
    - Exactly one membership per enterprise has is_owner=True
    - The owner cannot leave or be removed; ownership moves only by transfer
    - Deleted (not soft-deleted) on leave / removal
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    enterprise_id: UUID = Field(foreign_key="enterprises.id", nullable=False, index=True)

    is_owner: bool = Field(default=False)

    # Timestamps
    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_membership_user", "user_id", unique=True),
        Index(
            "uq_membership_enterprise_owner",
            "enterprise_id",
            unique=True,
            sqlite_where=text("is_owner = 1"),
            postgresql_where=text("is_owner"),
        ),
    )
