"""
JoinRequest Entity

A user's request to become a member of an enterprise.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utc_now

from .enums import JoinRequestStatus


class JoinRequest(SQLModel, table=True):
    """
    JoinRequest entity - PENDING -> APPROVED | REJECTED.

    Business Rules:
    - One row per (user_id, enterprise_id); a REJECTED row is reset to PENDING on resubmit
    - Only the enterprise owner can approve or reject
    - Only PENDING requests can be processed or cancelled
    """

    __tablename__ = "enterprise_join_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    enterprise_id: UUID = Field(foreign_key="enterprises.id", nullable=False, index=True)

    status: JoinRequestStatus = Field(default=JoinRequestStatus.PENDING)

    # Timestamps
    requested_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    processed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    processed_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    __table_args__ = (
        Index("uq_join_request_user_enterprise", "user_id", "enterprise_id", unique=True),
        Index("idx_join_request_status", "status"),
    )
