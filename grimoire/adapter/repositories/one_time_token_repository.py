from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.app.repositories.one_time_token_repository import IOneTimeTokenRepository
from grimoire.domain.entities import OneTimeToken, OneTimeTokenPurpose


class OneTimeTokenRepository(IOneTimeTokenRepository):
    """OneTimeToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: OneTimeToken) -> OneTimeToken:
        """Create a new one-time token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def find_redeemable(
        self, token_hash: str, purpose: OneTimeTokenPurpose, now: datetime
    ) -> Optional[OneTimeToken]:
        """Get an unconsumed, unexpired token by hash and purpose"""
        stmt = select(OneTimeToken).where(
            OneTimeToken.token_hash == token_hash,
            OneTimeToken.purpose == purpose,
            col(OneTimeToken.consumed_at).is_(None),
            OneTimeToken.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_consumed(self, token_id: UUID, now: datetime) -> bool:
        """Compare-and-set on consumed_at; only one caller can win"""
        stmt = (
            update(OneTimeToken)
            .where(
                OneTimeToken.id == token_id,
                col(OneTimeToken.consumed_at).is_(None),
                OneTimeToken.expires_at > now,
            )
            .values(consumed_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens whose expiry has passed"""
        stmt = delete(OneTimeToken).where(OneTimeToken.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
