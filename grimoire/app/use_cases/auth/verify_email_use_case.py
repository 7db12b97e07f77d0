"""
Verify Email Use Case

Handles email verification via a one-time token.
"""

import logging
from typing import Optional

from grimoire.app.errors import already_verified, invalid_or_expired_token
from grimoire.app.services.one_time_token_store import OneTimeTokenStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.base import utcnow
from grimoire.domain.entities import OneTimeTokenPurpose, UserStatus
from grimoire.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must be an unconsumed, unexpired EMAIL_VERIFICATION token
    - Already verified users get ALREADY_VERIFIED
    - Sets email_verified_at and moves PENDING accounts to VERIFIED
    """

    def __init__(self, uow: UnitOfWork, tokens: Optional[TokenGenerator] = None):
        self.uow = uow
        self.tokens = tokens or TokenGenerator()

    async def execute(self, raw_token: str) -> Result[MessageResponse]:
        """
        Execute email verification use case.

        Errors:
            - INVALID_OR_EXPIRED_TOKEN: unknown, expired, consumed or wrong purpose
            - ALREADY_VERIFIED: the account already has a verification timestamp
        """
        async with self.uow:
            store = OneTimeTokenStore(self.uow.one_time_tokens, self.tokens)
            redeemed = await store.redeem(raw_token, OneTimeTokenPurpose.EMAIL_VERIFICATION)
            if redeemed.is_err():
                return Return.err(redeemed.error)

            user = await self.uow.users.get_by_id(redeemed.value)
            if user is None or user.status == UserStatus.DELETED:
                return Return.err(invalid_or_expired_token())

            if user.email_verified_at is not None:
                return Return.err(already_verified())

            user.email_verified_at = utcnow()
            if user.status == UserStatus.PENDING:
                user.status = UserStatus.VERIFIED
            await self.uow.users.update(user)

            await self.uow.commit()

            logger.info(f"Email verified for user {user.id}")
            return Return.ok(
                MessageResponse(status="verified", message="Email verified successfully")
            )
