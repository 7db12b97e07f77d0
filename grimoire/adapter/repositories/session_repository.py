from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import col, func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.app.repositories.session_repository import ISessionRepository
from grimoire.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: UUID) -> Optional[Session]:
        """Get session by ID"""
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, session_obj: Session) -> Session:
        """Create a new session"""
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def find_usable_by_token_hash(
        self, token_hash: str, now: datetime
    ) -> Optional[Session]:
        """Lookup by digest; revoked and expired rows never match"""
        stmt = select(Session).where(
            Session.token_hash == token_hash,
            col(Session.revoked_at).is_(None),
            Session.expires_at > now,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def touch(self, session_id: UUID, now: datetime) -> None:
        """Set last_used_at"""
        stmt = update(Session).where(Session.id == session_id).values(last_used_at=now)
        await self.session.execute(stmt)
        await self.session.flush()

    async def revoke_by_id(self, session_id: UUID, now: datetime) -> bool:
        """Revoke a specific session by ID"""
        stmt = (
            update(Session)
            .where(Session.id == session_id, col(Session.revoked_at).is_(None))
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def revoke_all_by_user_id(self, user_id: UUID, now: datetime) -> int:
        """Revoke all active sessions for a user"""
        stmt = (
            update(Session)
            .where(Session.user_id == user_id, col(Session.revoked_at).is_(None))
            .values(revoked_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def get_active_by_user_id(self, user_id: UUID, now: datetime) -> List[Session]:
        """Usable sessions for a user, most recently used first"""
        stmt = (
            select(Session)
            .where(
                Session.user_id == user_id,
                col(Session.revoked_at).is_(None),
                Session.expires_at > now,
            )
            .order_by(col(Session.last_used_at).desc(), col(Session.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_active(self, now: datetime) -> int:
        stmt = (
            select(func.count())
            .select_from(Session)
            .where(col(Session.revoked_at).is_(None), Session.expires_at > now)
        )
        result = await self.session.exec(stmt)
        return result.one()

    async def delete_expired(self, now: datetime) -> int:
        """Delete sessions whose expiry has passed"""
        stmt = delete(Session).where(Session.expires_at <= now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
