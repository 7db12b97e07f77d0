"""
Request Password Reset Use Case

Handles generating and sending password reset tokens.
"""

import logging
from datetime import timedelta
from typing import Optional

from grimoire.app.errors import email_delivery_failed
from grimoire.app.services.auth_emails import password_reset_email
from grimoire.app.services.email_sender import EmailDeliveryError, IEmailSender
from grimoire.app.services.one_time_token_store import OneTimeTokenStore
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.domain.entities import OneTimeTokenPurpose, User, UserStatus
from grimoire.libs.result import Result, Return
from .dtos import MessageResponse

logger = logging.getLogger(__name__)

SENT = MessageResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure 256-bit token, store only its SHA-256
    - Token expires in 1 hour
    - No email enumeration (same response for valid/invalid emails)
    - Rate limiting is handled in front of the core
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        frontend_url: str,
        ttl: Optional[timedelta] = None,
        tokens: Optional[TokenGenerator] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.frontend_url = frontend_url
        self.ttl = ttl
        self.tokens = tokens or TokenGenerator()

    async def execute(self, email: str) -> Result[MessageResponse]:
        email = User.normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None or user.status == UserStatus.DELETED:
                return Return.ok(SENT)

            purpose = OneTimeTokenPurpose.PASSWORD_RESET
            store = OneTimeTokenStore(self.uow.one_time_tokens, self.tokens)
            ttl = self.ttl if self.ttl is not None else store.ttl_for(purpose)
            raw_token = await store.issue(user.id, purpose, ttl)

            message = password_reset_email(self.frontend_url, raw_token, ttl, user.display_name)
            try:
                await self.email_sender.send(user.email, message.subject, message.html_body)
            except EmailDeliveryError:
                logger.error(f"Password reset email for user {user.id} could not be sent")
                return Return.err(email_delivery_failed())

            await self.uow.commit()

            logger.info(f"Password reset requested for user {user.id}")
            return Return.ok(SENT)
