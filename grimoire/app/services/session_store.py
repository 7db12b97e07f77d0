"""
Session Store

Issues, validates, rotates and revokes login sessions. Works on the session
repository of an already-entered UnitOfWork; committing is the caller's job.
"""

from datetime import datetime, timedelta
from typing import Callable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from grimoire.app.repositories.session_repository import ISessionRepository
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.domain.base import utcnow
from grimoire.domain.entities import Session

SESSION_TTL = timedelta(days=7)


class SessionMeta(BaseModel):
    """Client metadata recorded with a session"""

    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    device_label: Optional[str] = None


class IssuedSession(BaseModel):
    raw_token: str
    session_id: UUID
    expires_at: datetime


class SessionIdentity(BaseModel):
    user_id: UUID
    session_id: UUID


class SessionView(BaseModel):
    """Session projection without the token digest"""

    id: UUID
    created_at: datetime
    last_used_at: datetime
    expires_at: datetime
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    device_label: Optional[str] = None

    @classmethod
    def from_session(cls, session: Session) -> "SessionView":
        return cls(
            id=session.id,
            created_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at,
            user_agent=session.user_agent,
            ip_address=session.ip_address,
            device_label=session.device_label,
        )


class SessionStore:
    """
    Business Rules:
    - Sessions expire 7 days after creation
    - Only the token digest is persisted
    - validate() returns None for unknown, expired and revoked tokens alike
    """

    def __init__(
        self,
        repository: ISessionRepository,
        tokens: Optional[TokenGenerator] = None,
        ttl: timedelta = SESSION_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.tokens = tokens or TokenGenerator()
        self.ttl = ttl
        self.clock = clock

    async def create(self, user_id: UUID, meta: Optional[SessionMeta] = None) -> IssuedSession:
        meta = meta or SessionMeta()
        raw_token = self.tokens.generate()
        now = self.clock()

        session = Session(
            user_id=user_id,
            token_hash=self.tokens.digest(raw_token),
            user_agent=meta.user_agent,
            ip_address=meta.ip_address,
            device_label=meta.device_label,
            created_at=now,
            last_used_at=now,
            expires_at=now + self.ttl,
        )
        session = await self.repository.create(session)

        return IssuedSession(
            raw_token=raw_token, session_id=session.id, expires_at=session.expires_at
        )

    async def validate(self, raw_token: str) -> Optional[SessionIdentity]:
        now = self.clock()
        session = await self.repository.find_usable_by_token_hash(
            self.tokens.digest(raw_token), now
        )
        if session is None:
            return None

        await self.repository.touch(session.id, now)
        return SessionIdentity(user_id=session.user_id, session_id=session.id)

    async def revoke(self, session_id: UUID) -> None:
        await self.repository.revoke_by_id(session_id, self.clock())

    async def revoke_all_for_user(self, user_id: UUID) -> int:
        return await self.repository.revoke_all_by_user_id(user_id, self.clock())

    async def cleanup_expired(self) -> int:
        return await self.repository.delete_expired(self.clock())

    async def list_active(self, user_id: UUID) -> List[SessionView]:
        sessions = await self.repository.get_active_by_user_id(user_id, self.clock())
        return [SessionView.from_session(s) for s in sessions]
