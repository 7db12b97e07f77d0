"""
One-Time Token Store

Single-use, purpose-scoped, time-bounded tokens for email verification and
password reset.
"""

from datetime import datetime, timedelta
from typing import Callable, Dict, Optional
from uuid import UUID

from grimoire.app.errors import invalid_or_expired_token
from grimoire.app.repositories.one_time_token_repository import IOneTimeTokenRepository
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.domain.base import utcnow
from grimoire.domain.entities import OneTimeToken, OneTimeTokenPurpose
from grimoire.libs.result import Result, Return

DEFAULT_TTLS: Dict[OneTimeTokenPurpose, timedelta] = {
    OneTimeTokenPurpose.EMAIL_VERIFICATION: timedelta(hours=24),
    OneTimeTokenPurpose.PASSWORD_RESET: timedelta(hours=1),
}


class OneTimeTokenStore:
    """
    Business Rules:
    - Token is hashed with SHA-256 before storing
    - Outstanding tokens for the same user and purpose stay valid until
      consumed or expired
    - Redemption never tells unknown, wrong purpose, expired and consumed apart
    """

    def __init__(
        self,
        repository: IOneTimeTokenRepository,
        tokens: Optional[TokenGenerator] = None,
        ttls: Optional[Dict[OneTimeTokenPurpose, timedelta]] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.tokens = tokens or TokenGenerator()
        self.ttls = {**DEFAULT_TTLS, **(ttls or {})}
        self.clock = clock

    def ttl_for(self, purpose: OneTimeTokenPurpose) -> timedelta:
        _check_purpose(purpose)
        return self.ttls[purpose]

    async def issue(
        self,
        user_id: UUID,
        purpose: OneTimeTokenPurpose,
        ttl: Optional[timedelta] = None,
    ) -> str:
        _check_purpose(purpose)
        ttl = ttl if ttl is not None else self.ttls[purpose]
        raw_token = self.tokens.generate()

        await self.repository.create(
            OneTimeToken(
                user_id=user_id,
                purpose=purpose,
                token_hash=self.tokens.digest(raw_token),
                expires_at=self.clock() + ttl,
            )
        )
        return raw_token

    async def redeem(self, raw_token: str, purpose: OneTimeTokenPurpose) -> Result[UUID]:
        _check_purpose(purpose)
        now = self.clock()

        token = await self.repository.find_redeemable(
            self.tokens.digest(raw_token), purpose, now
        )
        if token is None:
            return Return.err(invalid_or_expired_token())

        # A concurrent redemption may have won between the read and this update
        if not await self.repository.mark_consumed(token.id, now):
            return Return.err(invalid_or_expired_token())

        return Return.ok(token.user_id)

    async def cleanup_expired(self) -> int:
        return await self.repository.delete_expired(self.clock())


def _check_purpose(purpose: OneTimeTokenPurpose) -> None:
    if not isinstance(purpose, OneTimeTokenPurpose):
        raise TypeError(f"Unknown one-time token purpose: {purpose!r}")
