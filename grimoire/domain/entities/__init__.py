"""
Grimoire Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    UserStatus,
    OneTimeTokenPurpose,
    RoleName,
)

# Export all entities
from .user import User
from .role import Role, UserRole
from .session import Session
from .one_time_token import OneTimeToken

__all__ = [
    # Enums
    "UserStatus",
    "OneTimeTokenPurpose",
    "RoleName",
    # Entities
    "User",
    "Role",
    "UserRole",
    "Session",
    "OneTimeToken",
]
