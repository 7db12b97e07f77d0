"""
Logout Use Case

Revokes the session behind a bearer token. Idempotent and never fails.
"""

from typing import Optional

from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.libs.result import Result, Return


class LogoutUseCase:
    def __init__(self, uow: UnitOfWork, tokens: Optional[TokenGenerator] = None):
        self.uow = uow
        self.tokens = tokens or TokenGenerator()

    async def execute(self, raw_token: str) -> Result[None]:
        async with self.uow:
            sessions = SessionStore(self.uow.sessions, self.tokens)
            identity = await sessions.validate(raw_token)
            if identity is None:
                return Return.ok(None)

            await sessions.revoke(identity.session_id)
            await self.uow.commit()
            return Return.ok(None)
