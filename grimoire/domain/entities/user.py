"""
User Entity

Represents a person with a Grimoire account.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from grimoire.domain.base import utcnow
from .enums import UserStatus


class User(SQLModel, table=True):
    """
    User entity - identity record.

    Business Rules:
    - Email is stored normalized (trimmed, lowercase) and unique
    - Password stored as Argon2id digest (legacy bcrypt digests are upgraded on login)
    - Created PENDING, becomes VERIFIED once the email is confirmed
    - Never hard-deleted by the auth core, only moved to DELETED
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=255)
    display_name: str = Field(default="", max_length=255)

    status: UserStatus = Field(default=UserStatus.PENDING)
    email_verified_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime, nullable=True)
    )

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_status", "status"),)

    @staticmethod
    def normalize_email(email: str) -> str:
        """Emails compare case-insensitively and ignore surrounding whitespace"""
        return email.strip().lower()

    def can_login(self) -> bool:
        return self.status in (UserStatus.PENDING, UserStatus.VERIFIED)
