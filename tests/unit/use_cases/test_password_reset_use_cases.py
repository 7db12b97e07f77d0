import re
from datetime import timedelta
from uuid import uuid4

import pytest

from grimoire.app.services.token_generator import TokenGenerator
from grimoire.app.use_cases.auth import RequestPasswordResetUseCase, ResetPasswordUseCase
from grimoire.domain.base import utcnow
from grimoire.domain.entities import OneTimeToken, OneTimeTokenPurpose, User, UserStatus

FRONTEND_URL = "https://grimoire.test"
NEW_PASSWORD = "N3w!Password"


@pytest.fixture
def user(fast_hasher):
    return User(
        id=uuid4(),
        email="alice@example.com",
        password_hash=fast_hasher.hash("Str0ng!Pass"),
        status=UserStatus.VERIFIED,
    )


@pytest.fixture
def reset_token(user):
    return OneTimeToken(
        user_id=user.id,
        purpose=OneTimeTokenPurpose.PASSWORD_RESET,
        token_hash=TokenGenerator.digest("raw-token"),
        expires_at=utcnow() + timedelta(minutes=30),
    )


@pytest.mark.asyncio
async def test_request_reset_sends_one_hour_link(mock_uow, email_sender, user):
    mock_uow.users.get_by_email.return_value = user

    result = await RequestPasswordResetUseCase(mock_uow, email_sender, FRONTEND_URL).execute(
        user.email
    )

    assert result.is_ok()
    body = email_sender.sent[0]["html_body"]
    raw = re.search(r"reset-password\?token=([0-9a-f]{64})", body).group(1)
    saved = mock_uow.one_time_tokens.create.call_args.args[0]
    assert saved.purpose == OneTimeTokenPurpose.PASSWORD_RESET
    assert saved.token_hash == TokenGenerator.digest(raw)
    assert abs(saved.expires_at - saved.created_at - timedelta(hours=1)) < timedelta(seconds=5)
    assert "1 hour" in body
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_request_reset_same_response_for_unknown_and_deleted(mock_uow, email_sender, user):
    use_case = RequestPasswordResetUseCase(mock_uow, email_sender, FRONTEND_URL)
    unknown = await use_case.execute("nobody@example.com")

    user.status = UserStatus.DELETED
    mock_uow.users.get_by_email.return_value = user
    deleted = await use_case.execute(user.email)

    assert unknown.value == deleted.value
    assert email_sender.sent == []


@pytest.mark.asyncio
async def test_reset_password(mock_uow, fast_hasher, user, reset_token):
    mock_uow.one_time_tokens.find_redeemable.return_value = reset_token
    mock_uow.users.get_by_id.return_value = user
    mock_uow.sessions.revoke_all_by_user_id.return_value = 2

    result = await ResetPasswordUseCase(mock_uow, fast_hasher).execute("raw-token", NEW_PASSWORD)

    assert result.is_ok()
    assert result.value.status == "success"
    assert fast_hasher.verify(user.password_hash, NEW_PASSWORD)
    assert not fast_hasher.verify(user.password_hash, "Str0ng!Pass")
    mock_uow.sessions.revoke_all_by_user_id.assert_called_once()
    assert mock_uow.sessions.revoke_all_by_user_id.call_args.args[0] == user.id
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_reset_password_weak_password_keeps_token(mock_uow, fast_hasher):
    result = await ResetPasswordUseCase(mock_uow, fast_hasher).execute("raw-token", "short")

    assert result.is_err()
    assert result.error.code == "WEAK_PASSWORD"
    mock_uow.one_time_tokens.find_redeemable.assert_not_called()


@pytest.mark.asyncio
async def test_reset_password_invalid_token(mock_uow, fast_hasher):
    result = await ResetPasswordUseCase(mock_uow, fast_hasher).execute("unknown", NEW_PASSWORD)

    assert result.is_err()
    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.sessions.revoke_all_by_user_id.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_reset_password_already_used(mock_uow, fast_hasher, reset_token):
    mock_uow.one_time_tokens.find_redeemable.return_value = reset_token
    mock_uow.one_time_tokens.mark_consumed.return_value = False

    result = await ResetPasswordUseCase(mock_uow, fast_hasher).execute("raw-token", NEW_PASSWORD)

    assert result.error.code == "INVALID_OR_EXPIRED_TOKEN"
    mock_uow.users.update.assert_not_called()


@pytest.mark.asyncio
async def test_request_reset_honours_zero_ttl(mock_uow, email_sender, user):
    mock_uow.users.get_by_email.return_value = user

    await RequestPasswordResetUseCase(
        mock_uow, email_sender, FRONTEND_URL, ttl=timedelta(0)
    ).execute(user.email)

    saved = mock_uow.one_time_tokens.create.call_args.args[0]
    assert abs(saved.expires_at - saved.created_at) < timedelta(seconds=5)
