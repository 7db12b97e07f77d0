"""
Cleanup Expired Use Case

Deletes expired sessions and one-time tokens. Meant to be triggered on a
schedule; only touches rows that are already unusable, so it is safe to run
alongside live traffic.
"""

import logging

from grimoire.app.services.one_time_token_store import OneTimeTokenStore
from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.libs.result import Result, Return
from .dtos import CleanupResponse

logger = logging.getLogger(__name__)


class CleanupExpiredUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[CleanupResponse]:
        async with self.uow:
            sessions_deleted = await SessionStore(self.uow.sessions).cleanup_expired()
            tokens_deleted = await OneTimeTokenStore(self.uow.one_time_tokens).cleanup_expired()
            await self.uow.commit()

        logger.info(f"Cleanup removed {sessions_deleted} session(s) and {tokens_deleted} token(s)")
        return Return.ok(
            CleanupResponse(sessions_deleted=sessions_deleted, tokens_deleted=tokens_deleted)
        )
