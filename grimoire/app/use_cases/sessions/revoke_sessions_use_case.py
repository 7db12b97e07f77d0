"""
Revoke Sessions Use Case

Lets a user end one of their sessions, or all of them.
"""

import logging
from uuid import UUID

from grimoire.app.errors import SESSION_NOT_FOUND
from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.libs.result import Error, Result, Return
from .dtos import RevokeAllSessionsResponse, RevokeSessionResponse

logger = logging.getLogger(__name__)


class RevokeSessionsUseCase:
    """
    Use case for revoking user sessions.

    Business Rules:
    - Users can only revoke their own sessions
    - Someone else's session is reported exactly like a missing one
    - Revoking an already revoked session succeeds (idempotent)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def revoke_own_session(
        self, user_id: UUID, session_id: UUID
    ) -> Result[RevokeSessionResponse]:
        async with self.uow:
            session = await self.uow.sessions.get_by_id(session_id)
            if session is None or session.user_id != user_id:
                return Return.err(Error(SESSION_NOT_FOUND, "Session not found"))

            await SessionStore(self.uow.sessions).revoke(session_id)
            await self.uow.commit()

            return Return.ok(RevokeSessionResponse(session_id=session_id, revoked=True))

    async def revoke_all(self, user_id: UUID) -> Result[RevokeAllSessionsResponse]:
        async with self.uow:
            revoked_count = await SessionStore(self.uow.sessions).revoke_all_for_user(user_id)
            await self.uow.commit()

            logger.info(f"User {user_id} revoked {revoked_count} session(s)")
            return Return.ok(RevokeAllSessionsResponse(revoked_count=revoked_count))
