"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from grimoire.domain.entities import User, UserStatus


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    email: str
    password: str
    display_name: str = ""


# ============================================================================
# Projections
# ============================================================================


class PublicUserView(BaseModel):
    """User profile without the password digest"""

    id: UUID
    email: str
    display_name: str
    status: UserStatus
    email_verified_at: Optional[datetime] = None
    roles: List[str] = []
    created_at: datetime
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User, roles: List[str]) -> "PublicUserView":
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            status=user.status,
            email_verified_at=user.email_verified_at,
            roles=roles,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )


class CurrentUserContext(BaseModel):
    """Authenticated caller: profile plus the session that authenticated it"""

    user: PublicUserView
    session_id: UUID


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for user registration use case"""

    user: PublicUserView


class LoginResponse(BaseModel):
    """Response for user login use case"""

    user: PublicUserView
    session_token: str
    session_id: UUID
    expires_at: datetime


class MessageResponse(BaseModel):
    """Status/message response for flows that return no data"""

    status: str
    message: str
