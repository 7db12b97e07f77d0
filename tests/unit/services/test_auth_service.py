from datetime import timedelta
from uuid import uuid4

import pytest

from grimoire.app.services.auth_service import AuthService, AuthSettings
from grimoire.app.services.token_generator import TokenGenerator
from grimoire.domain.base import utcnow
from grimoire.domain.entities import Session, User, UserStatus


@pytest.fixture
def service(mock_uow, email_sender, fast_hasher):
    settings = AuthSettings(session_ttl=timedelta(days=1), frontend_url="https://grimoire.test")
    return AuthService(mock_uow, email_sender, hasher=fast_hasher, settings=settings)


@pytest.mark.asyncio
async def test_register_then_login(service, mock_uow):
    registered = await service.register("Alice@Example.com", "Str0ng!Pass", "Alice")
    assert registered.is_ok()

    mock_uow.users.get_by_email.return_value = mock_uow.users.create.call_args.args[0]
    logged_in = await service.login("alice@example.com", "Str0ng!Pass")

    assert logged_in.is_ok()
    created = mock_uow.sessions.create.call_args.args[0]
    assert created.expires_at - created.created_at == timedelta(days=1)


@pytest.mark.asyncio
async def test_get_current_user(service, mock_uow):
    user = User(id=uuid4(), email="alice@example.com", password_hash="x", status=UserStatus.VERIFIED)
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.find_usable_by_token_hash.return_value = Session(
        user_id=user.id,
        token_hash=TokenGenerator.digest("raw"),
        expires_at=utcnow() + timedelta(days=1),
    )

    view = await service.get_current_user("raw")

    assert view.id == user.id
    assert view.email == "alice@example.com"


@pytest.mark.asyncio
async def test_get_current_user_unknown_token(service):
    assert await service.get_current_user("unknown") is None


@pytest.mark.asyncio
async def test_logout_never_errors(service):
    result = await service.logout("unknown")

    assert result.is_ok()


@pytest.mark.asyncio
async def test_emails_use_configured_frontend(service, mock_uow, email_sender):
    mock_uow.users.get_by_email.return_value = User(
        id=uuid4(), email="alice@example.com", password_hash="x"
    )

    await service.request_email_verification("alice@example.com")
    await service.request_password_reset("alice@example.com")

    assert "https://grimoire.test/verify-email?token=" in email_sender.sent[0]["html_body"]
    assert "https://grimoire.test/reset-password?token=" in email_sender.sent[1]["html_body"]
