"""
Auth Service

Single entry point of the credential and session core for the route layer.
Each operation runs one use case against the shared UnitOfWork; the service
itself holds no mutable state beyond its collaborators.
"""

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel

from grimoire.app.services.email_sender import IEmailSender
from grimoire.app.services.one_time_token_store import DEFAULT_TTLS
from grimoire.app.services.password_hasher import PasswordHasher
from grimoire.app.services.password_policy import PasswordPolicy
from grimoire.app.services.session_store import SESSION_TTL, SessionMeta
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.app.use_cases.auth import (
    CurrentUserContext,
    GetCurrentUserUseCase,
    LoginResponse,
    LoginUseCase,
    LogoutUseCase,
    MessageResponse,
    PublicUserView,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestEmailVerificationUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    VerifyEmailUseCase,
)
from grimoire.domain.entities import OneTimeTokenPurpose
from grimoire.libs.result import Result


class AuthSettings(BaseModel):
    """Tunable lifetimes and the base URL used in emailed links"""

    session_ttl: timedelta = SESSION_TTL
    email_verification_ttl: timedelta = DEFAULT_TTLS[OneTimeTokenPurpose.EMAIL_VERIFICATION]
    password_reset_ttl: timedelta = DEFAULT_TTLS[OneTimeTokenPurpose.PASSWORD_RESET]
    frontend_url: str = "http://localhost:5173"


class AuthService:
    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: IEmailSender,
        hasher: Optional[PasswordHasher] = None,
        policy: Optional[PasswordPolicy] = None,
        tokens: Optional[TokenGenerator] = None,
        settings: Optional[AuthSettings] = None,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.hasher = hasher or PasswordHasher()
        self.policy = policy or PasswordPolicy()
        self.tokens = tokens or TokenGenerator()
        self.settings = settings or AuthSettings()

    async def register(
        self, email: str, password: str, display_name: str = ""
    ) -> Result[RegisterResponse]:
        command = RegisterCommand(email=email, password=password, display_name=display_name)
        return await RegisterUseCase(self.uow, self.hasher, self.policy).execute(command)

    async def login(
        self, email: str, password: str, meta: Optional[SessionMeta] = None
    ) -> Result[LoginResponse]:
        use_case = LoginUseCase(self.uow, self.hasher, self.tokens, self.settings.session_ttl)
        return await use_case.execute(email, password, meta)

    async def logout(self, raw_token: str) -> Result[None]:
        return await LogoutUseCase(self.uow, self.tokens).execute(raw_token)

    async def authenticate(self, raw_token: str) -> Optional[CurrentUserContext]:
        """Resolve a bearer token to the user and the session behind it"""
        return await GetCurrentUserUseCase(self.uow, self.tokens).execute(raw_token)

    async def get_current_user(self, raw_token: str) -> Optional[PublicUserView]:
        context = await self.authenticate(raw_token)
        return context.user if context else None

    async def request_email_verification(self, email: str) -> Result[MessageResponse]:
        use_case = RequestEmailVerificationUseCase(
            self.uow,
            self.email_sender,
            self.settings.frontend_url,
            self.settings.email_verification_ttl,
            self.tokens,
        )
        return await use_case.execute(email)

    async def verify_email(self, raw_token: str) -> Result[MessageResponse]:
        return await VerifyEmailUseCase(self.uow, self.tokens).execute(raw_token)

    async def request_password_reset(self, email: str) -> Result[MessageResponse]:
        use_case = RequestPasswordResetUseCase(
            self.uow,
            self.email_sender,
            self.settings.frontend_url,
            self.settings.password_reset_ttl,
            self.tokens,
        )
        return await use_case.execute(email)

    async def reset_password(self, raw_token: str, new_password: str) -> Result[MessageResponse]:
        use_case = ResetPasswordUseCase(self.uow, self.hasher, self.policy, self.tokens)
        return await use_case.execute(raw_token, new_password)
