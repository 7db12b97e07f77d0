"""
Session Management Use Case DTOs
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel

from grimoire.app.services.session_store import SessionView


class ActiveSession(SessionView):
    """Active session as shown to its owner"""

    is_current: bool = False


class SessionListResponse(BaseModel):
    sessions: List[ActiveSession]


class RevokeSessionResponse(BaseModel):
    session_id: UUID
    revoked: bool


class RevokeAllSessionsResponse(BaseModel):
    revoked_count: int


class CleanupResponse(BaseModel):
    sessions_deleted: int
    tokens_deleted: int
