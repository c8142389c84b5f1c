"""
AuditEvent Entity

Append-only record of mutating authorization operations.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now


class AuditEvent(SQLModel, table=True):
    """
    AuditEvent entity - immutable log of management operations.

    Business Rules:
    - Immutable (never updated or deleted by the core)
    - enterprise_id nullable for events outside any enterprise (join requests, creation failures)
    - changes stores the before/after context of the operation
    """

    __tablename__ = "audit_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    enterprise_id: Optional[UUID] = Field(default=None, index=True)
    user_id: UUID = Field(index=True)

    action: str = Field(max_length=100)  # e.g., "ENTERPRISE_CREATE", "ROLE_ASSIGN"
    resource: str = Field(max_length=50)  # ResourceType value
    resource_id: Optional[str] = Field(default=None, max_length=64)
    changes: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_audit_created_at", "created_at"),
        Index("idx_audit_enterprise_action", "enterprise_id", "action"),
    )
