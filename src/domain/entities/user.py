"""
User Entity

Identity resolved by the authentication layer.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utc_now


class User(SQLModel, table=True):
    """
    User entity - an identity that belongs to at most one enterprise.

    Business Rules:
    - Rows are created on first use from the token's user id
    - Email, when known, is unique across all users
    - Credentials are owned by the authentication collaborator
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
