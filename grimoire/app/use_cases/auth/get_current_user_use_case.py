"""
Get Current User Use Case

Resolves a bearer token to the user behind it.
"""

from typing import Optional

from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from .dtos import CurrentUserContext, PublicUserView


class GetCurrentUserUseCase:
    """
    Business Rules:
    - Unknown, expired and revoked tokens all yield None
    - Users that can no longer log in (SUSPENDED, DELETED) yield None
    - A successful lookup records last_used_at on the session
    """

    def __init__(self, uow: UnitOfWork, tokens: Optional[TokenGenerator] = None):
        self.uow = uow
        self.tokens = tokens or TokenGenerator()

    async def execute(self, raw_token: str) -> Optional[CurrentUserContext]:
        async with self.uow:
            sessions = SessionStore(self.uow.sessions, self.tokens)
            identity = await sessions.validate(raw_token)
            if identity is None:
                return None

            user = await self.uow.users.get_by_id(identity.user_id)
            if user is None or not user.can_login():
                return None

            roles = await self.uow.roles.get_names_for_user(user.id)
            context = CurrentUserContext(
                user=PublicUserView.from_user(user, roles),
                session_id=identity.session_id,
            )

            # Persist the last_used_at touch
            await self.uow.commit()

            return context
