"""
Grimoire Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account lifecycle status"""

    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class OneTimeTokenPurpose(str, Enum):
    """What a one-time token may be redeemed for"""

    EMAIL_VERIFICATION = "EMAIL_VERIFICATION"
    PASSWORD_RESET = "PASSWORD_RESET"


class RoleName(str, Enum):
    """Built-in roles"""

    USER = "USER"
    ADMIN = "ADMIN"
