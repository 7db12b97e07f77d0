from datetime import timedelta

import pytest
import pytest_asyncio
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.adapter.repositories.one_time_token_repository import OneTimeTokenRepository
from grimoire.adapter.repositories.user_repository import UserRepository
from grimoire.app.services.one_time_token_store import OneTimeTokenStore
from grimoire.domain.base import utcnow
from grimoire.domain.entities import OneTimeTokenPurpose, User

VERIFY = OneTimeTokenPurpose.EMAIL_VERIFICATION
RESET = OneTimeTokenPurpose.PASSWORD_RESET


@pytest_asyncio.fixture
async def user(db_session):
    user = await UserRepository(db_session).create(
        User(email="alice@example.com", password_hash="x")
    )
    await db_session.commit()
    return user


def store_for(session, now=None):
    clock = (lambda: now) if now else utcnow
    return OneTimeTokenStore(OneTimeTokenRepository(session), clock=clock)


@pytest.mark.asyncio
async def test_second_redemption_fails(db_session, user):
    store = store_for(db_session)
    raw = await store.issue(user.id, VERIFY)
    await db_session.commit()

    first = await store.redeem(raw, VERIFY)
    await db_session.commit()
    second = await store.redeem(raw, VERIFY)

    assert first.is_ok()
    assert first.value == user.id
    assert second.is_err()
    assert second.error.code == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_racing_redemptions_only_one_wins(engine, db_session, user):
    raw = await store_for(db_session).issue(user.id, RESET)
    await db_session.commit()

    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session_a, Session() as session_b:
        repo_a, repo_b = OneTimeTokenRepository(session_a), OneTimeTokenRepository(session_b)
        digest = OneTimeTokenStore(repo_a).tokens.digest(raw)
        now = utcnow()

        # Both callers see the token as redeemable
        token_a = await repo_a.find_redeemable(digest, RESET, now)
        token_b = await repo_b.find_redeemable(digest, RESET, now)
        assert token_a is not None and token_b is not None

        won_a = await repo_a.mark_consumed(token_a.id, now)
        await session_a.commit()
        won_b = await repo_b.mark_consumed(token_b.id, now)
        await session_b.commit()

    assert (won_a, won_b) == (True, False)


@pytest.mark.asyncio
async def test_wrong_purpose_does_not_consume(db_session, user):
    store = store_for(db_session)
    raw = await store.issue(user.id, RESET)
    await db_session.commit()

    wrong = await store.redeem(raw, VERIFY)
    right = await store.redeem(raw, RESET)

    assert wrong.is_err()
    assert right.is_ok()


@pytest.mark.asyncio
async def test_expiry_boundary(db_session, user):
    issued_at = utcnow()
    raw = await store_for(db_session, issued_at).issue(user.id, RESET)
    await db_session.commit()
    expires_at = issued_at + timedelta(hours=1)

    at_expiry = await store_for(db_session, expires_at).redeem(raw, RESET)
    just_before = await store_for(db_session, expires_at - timedelta(microseconds=1)).redeem(
        raw, RESET
    )

    assert at_expiry.is_err()
    assert just_before.is_ok()


@pytest.mark.asyncio
async def test_cleanup_expired(db_session, user):
    now = utcnow()
    store = store_for(db_session, now - timedelta(hours=2))
    await store.issue(user.id, RESET)
    await store.issue(user.id, VERIFY)
    await db_session.commit()

    deleted = await store_for(db_session, now).cleanup_expired()
    await db_session.commit()

    assert deleted == 1
