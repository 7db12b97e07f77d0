"""
Login Use Case

Authenticates a user and issues a fresh session, revoking all others.
"""

import logging
from datetime import timedelta
from typing import Optional

from grimoire.app.errors import account_inactive, hashing_error, invalid_credentials
from grimoire.app.services.password_hasher import HashingError, PasswordHasher
from grimoire.app.services.session_store import SESSION_TTL, SessionMeta, SessionStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.base import utcnow
from grimoire.domain.entities import User
from grimoire.libs.result import Result, Return
from .dtos import LoginResponse, PublicUserView

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Unknown email and wrong password fail with the same INVALID_CREDENTIALS
    - A hash verification is spent even when the user is not found
    - Status is checked only after the password verifies (ACCOUNT_INACTIVE)
    - Every successful login revokes all existing sessions of the user and
      creates exactly one new session
    - Legacy or outdated password digests are rehashed
    - Updates user.last_login_at
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: Optional[PasswordHasher] = None,
        tokens: Optional[TokenGenerator] = None,
        session_ttl: timedelta = SESSION_TTL,
    ):
        self.uow = uow
        self.hasher = hasher or PasswordHasher()
        self.tokens = tokens or TokenGenerator()
        self.session_ttl = session_ttl

    async def execute(
        self, email: str, password: str, meta: Optional[SessionMeta] = None
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email (normalized here)
            password: Plain text password
            meta: Optional client metadata stored with the session

        Returns:
            Result with LoginResponse containing the raw session token, or Error
        """
        email = User.normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            try:
                if user is None:
                    self.hasher.dummy_verify(password)
                    return Return.err(invalid_credentials())

                if not self.hasher.verify(user.password_hash, password):
                    logger.info(f"Login failed: wrong password for user {user.id}")
                    return Return.err(invalid_credentials())

                if not user.can_login():
                    return Return.err(account_inactive())

                if self.hasher.needs_rehash(user.password_hash):
                    user.password_hash = self.hasher.hash(password)
            except HashingError:
                logger.exception("Password verification failed during login")
                return Return.err(hashing_error())

            sessions = SessionStore(self.uow.sessions, self.tokens, self.session_ttl)
            revoked_count = await sessions.revoke_all_for_user(user.id)
            issued = await sessions.create(user.id, meta)

            user.last_login_at = utcnow()
            user = await self.uow.users.update(user)
            roles = await self.uow.roles.get_names_for_user(user.id)
            response = LoginResponse(
                user=PublicUserView.from_user(user, roles),
                session_token=issued.raw_token,
                session_id=issued.session_id,
                expires_at=issued.expires_at,
            )

            await self.uow.commit()

            logger.info(f"User {response.user.id} logged in, {revoked_count} previous session(s) revoked")
            return Return.ok(response)
