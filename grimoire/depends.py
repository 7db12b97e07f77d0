from datetime import timedelta
from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.adapter.services.email_sender import LoggingEmailSender, SmtpEmailSender
from grimoire.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from grimoire.api.error import ClientError
from grimoire.app.services.auth_service import AuthService, AuthSettings
from grimoire.app.services.email_sender import IEmailSender
from grimoire.app.services.password_hasher import PasswordHasher
from grimoire.app.services.unit_of_work import UnitOfWork
from grimoire.app.use_cases.auth import CurrentUserContext
from grimoire.config import ApplicationConfig
from grimoire.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

password_hasher = PasswordHasher(
    memory_cost=ApplicationConfig.ARGON2_MEMORY_COST,
    time_cost=ApplicationConfig.ARGON2_TIME_COST,
    parallelism=ApplicationConfig.ARGON2_PARALLELISM,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_email_sender() -> IEmailSender:
    if not ApplicationConfig.SMTP_HOST:
        return LoggingEmailSender()
    return SmtpEmailSender(
        host=ApplicationConfig.SMTP_HOST,
        port=ApplicationConfig.SMTP_PORT,
        username=ApplicationConfig.SMTP_USER,
        password=ApplicationConfig.SMTP_PASSWORD,
        from_address=ApplicationConfig.EMAIL_FROM,
        timeout=ApplicationConfig.SMTP_TIMEOUT,
    )


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_auth_settings() -> AuthSettings:
    return AuthSettings(
        session_ttl=timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
        email_verification_ttl=timedelta(hours=ApplicationConfig.EMAIL_VERIFICATION_TTL_HOURS),
        password_reset_ttl=timedelta(hours=ApplicationConfig.PASSWORD_RESET_TTL_HOURS),
        frontend_url=ApplicationConfig.FRONTEND_URL,
    )


async def get_auth_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: IEmailSender = Depends(get_email_sender),
    hasher: PasswordHasher = Depends(get_password_hasher),
    settings: AuthSettings = Depends(get_auth_settings),
) -> AuthService:
    return AuthService(uow, email_sender, hasher=hasher, settings=settings)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    return credentials.credentials if credentials else None


async def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> CurrentUserContext:
    """
    Dependency to resolve the bearer session token to the current user.

    Returns:
        CurrentUserContext with the public user view and session id

    Raises:
        ClientError: 401 if the token is missing, unknown, expired or revoked
    """
    context = await auth_service.authenticate(token) if token else None

    if context is None:
        raise ClientError(
            Error("UNAUTHENTICATED", "Invalid or expired session"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return context
