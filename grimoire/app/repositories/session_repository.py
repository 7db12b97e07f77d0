from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from grimoire.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Create a new session"""
        pass

    @abstractmethod
    async def find_usable_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[Session]:
        """Find an unrevoked session with this digest that expires after now"""
        pass

    @abstractmethod
    async def touch(self, session_id: UUID, now: datetime) -> None:
        """Set last_used_at"""
        pass

    @abstractmethod
    async def revoke_by_id(self, session_id: UUID, now: datetime) -> bool:
        """Revoke a session. Returns False if it was missing or already revoked."""
        pass

    @abstractmethod
    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke every unrevoked session for a user. Returns count of revoked sessions."""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """Usable sessions for a user, most recently used first"""
        pass

    @abstractmethod
    async def count_active(self, now: datetime) -> int:
        """Number of unrevoked sessions that expire after now"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Physically delete sessions with expires_at <= now. Returns count."""
        pass
