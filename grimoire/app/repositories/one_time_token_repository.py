from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from grimoire.domain.entities import OneTimeToken, OneTimeTokenPurpose


class IOneTimeTokenRepository(ABC):
    """OneTimeToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: OneTimeToken) -> OneTimeToken:
        """Create a new one-time token"""
        pass

    @abstractmethod
    async def find_redeemable(
        self, token_hash: str, purpose: OneTimeTokenPurpose, now: datetime
    ) -> Optional[OneTimeToken]:
        """Find an unconsumed, unexpired token with this digest and purpose"""
        pass

    @abstractmethod
    async def mark_consumed(self, token_id: UUID, now: datetime) -> bool:
        """
        Atomically consume a token.

        Must be a single conditional update on consumed_at IS NULL and
        expires_at > now. Returns True only for the caller that consumed it.
        """
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Physically delete tokens with expires_at <= now. Returns count."""
        pass
