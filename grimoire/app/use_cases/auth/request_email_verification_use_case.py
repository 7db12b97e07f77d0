"""
Request Email Verification Use Case

Issues an EMAIL_VERIFICATION token and mails the verification link.
"""

import logging
from datetime import timedelta
from typing import Optional

from grimoire.app.errors import email_delivery_failed
from grimoire.app.services.auth_emails import verification_email
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
    message="If the email exists, a verification link has been sent",
)


class RequestEmailVerificationUseCase:
    """
    Use case for requesting a verification email.

    Business Rules:
    - No email enumeration: unknown (and deleted) accounts get the same
      response and nothing happens
    - Token expires in 24 hours; older outstanding tokens stay valid
    - Delivery failures are reported (EMAIL_DELIVERY_FAILED) and the token
      is not persisted
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

            purpose = OneTimeTokenPurpose.EMAIL_VERIFICATION
            store = OneTimeTokenStore(self.uow.one_time_tokens, self.tokens)
            ttl = self.ttl if self.ttl is not None else store.ttl_for(purpose)
            raw_token = await store.issue(user.id, purpose, ttl)

            message = verification_email(self.frontend_url, raw_token, ttl, user.display_name)
            try:
                await self.email_sender.send(user.email, message.subject, message.html_body)
            except EmailDeliveryError:
                logger.error(f"Verification email for user {user.id} could not be sent")
                return Return.err(email_delivery_failed())

            await self.uow.commit()
            return Return.ok(SENT)
