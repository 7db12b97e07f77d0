"""
Session Entity

A login grant identified by the digest of its bearer token.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from grimoire.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - login grant for one device.

    Business Rules:
    - Only the SHA-256 digest of the bearer token is stored
    - Usable iff revoked_at is unset and expires_at is in the future
    - Expires 7 days after creation
    - Revoked sessions are kept for audit until cleanup removes expired rows
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True, ondelete="CASCADE")
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 hex

    # Client metadata
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    device_label: Optional[str] = Field(default=None, max_length=128)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_used_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_user_revoked", "user_id", "revoked_at"),
    )
