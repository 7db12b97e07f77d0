"""
Reset Password Use Case

Handles password reset confirmation with a one-time token.
"""

import logging
from typing import Optional

from grimoire.app.errors import hashing_error, invalid_or_expired_token, weak_password
from grimoire.app.services.one_time_token_store import OneTimeTokenStore
from grimoire.app.services.password_hasher import HashingError, PasswordHasher
from grimoire.app.services.password_policy import PasswordPolicy
from grimoire.app.services.session_store import SessionStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.entities import OneTimeTokenPurpose, UserStatus
from grimoire.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password is checked against PasswordPolicy before the token is touched
    - Token must be an unconsumed, unexpired PASSWORD_RESET token
    - Password is hashed with Argon2id
    - All user sessions are revoked, forcing re-authentication everywhere
    """

    def __init__(
        self,
        uow: UnitOfWork,
        hasher: Optional[PasswordHasher] = None,
        policy: Optional[PasswordPolicy] = None,
        tokens: Optional[TokenGenerator] = None,
    ):
        self.uow = uow
        self.hasher = hasher or PasswordHasher()
        self.policy = policy or PasswordPolicy()
        self.tokens = tokens or TokenGenerator()

    async def execute(self, raw_token: str, new_password: str) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Errors:
            - WEAK_PASSWORD: new password fails the policy
            - INVALID_OR_EXPIRED_TOKEN: token unknown, expired, used or wrong purpose
            - HASHING_ERROR: hashing library failure
        """
        validation = self.policy.validate(new_password)
        if not validation.valid:
            return Return.err(weak_password(validation.reason))

        async with self.uow:
            store = OneTimeTokenStore(self.uow.one_time_tokens, self.tokens)
            redeemed = await store.redeem(raw_token, OneTimeTokenPurpose.PASSWORD_RESET)
            if redeemed.is_err():
                return Return.err(redeemed.error)

            user = await self.uow.users.get_by_id(redeemed.value)
            if user is None or user.status == UserStatus.DELETED:
                return Return.err(invalid_or_expired_token())

            try:
                user.password_hash = self.hasher.hash(new_password)
            except HashingError:
                logger.exception("Password hashing failed during reset")
                return Return.err(hashing_error())
            await self.uow.users.update(user)

            sessions = SessionStore(self.uow.sessions, self.tokens)
            revoked_count = await sessions.revoke_all_for_user(user.id)

            await self.uow.commit()

            logger.info(f"Password reset for user {user.id}, {revoked_count} session(s) revoked")
            return Return.ok(
                MessageResponse(status="success", message="Password has been reset successfully")
            )
