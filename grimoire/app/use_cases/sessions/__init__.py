"""
Session Management Use Cases
"""

from .list_sessions_use_case import ListSessionsUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .cleanup_expired_use_case import CleanupExpiredUseCase
from .dtos import (
    ActiveSession,
    SessionListResponse,
    RevokeSessionResponse,
    RevokeAllSessionsResponse,
    CleanupResponse,
)

__all__ = [
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    "CleanupExpiredUseCase",
    "ActiveSession",
    "SessionListResponse",
    "RevokeSessionResponse",
    "RevokeAllSessionsResponse",
    "CleanupResponse",
]
