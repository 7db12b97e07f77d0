"""
OneTimeToken Entity

Single-use, purpose-scoped, time-bounded tokens.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from grimoire.domain.base import utcnow
from .enums import OneTimeTokenPurpose


class OneTimeToken(SQLModel, table=True):
    """
    OneTimeToken entity - email verification and password reset grants.

    Business Rules:
    - Token is stored as SHA-256 hash of a 256-bit random value
    - Email verification tokens expire after 24 hours, reset tokens after 1 hour
    - Single-use: consumed_at is set exactly once by a conditional update
    - Several outstanding tokens per user and purpose may coexist
    """

    __tablename__ = "one_time_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    purpose: OneTimeTokenPurpose
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    consumed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_one_time_token_expires_at", "expires_at"),
        Index("idx_one_time_token_user_purpose", "user_id", "purpose"),
    )
