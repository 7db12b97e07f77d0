from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlmodel import update

from grimoire.domain.base import utcnow
from grimoire.domain.entities import OneTimeToken
from tests.fixtures.auth_helpers import PASSWORD, bearer, login, register

NEW_PASSWORD = "N3w!Password"


async def request_reset(client, outbox, email="alice@example.com"):
    response = await client.post("/auth/password/reset/request", json={"email": email})
    assert response.status_code == 200
    return outbox.last_token(email, "reset-password")


@pytest.mark.asyncio
async def test_password_reset_flow(client: AsyncClient, outbox):
    await register(client)
    old_session = (await login(client))["session_token"]
    token = await request_reset(client, outbox)

    response = await client.post(
        "/auth/password/reset/confirm", json={"token": token, "new_password": NEW_PASSWORD}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "success"

    # Every session was revoked
    response = await client.get("/auth/me", headers=bearer(old_session))
    assert response.status_code == 401

    response = await client.post(
        "/auth/login", json={"email": "alice@example.com", "password": PASSWORD}
    )
    assert response.status_code == 401

    await login(client, password=NEW_PASSWORD)


@pytest.mark.asyncio
async def test_reset_token_is_single_use(client: AsyncClient, outbox):
    await register(client)
    token = await request_reset(client, outbox)

    payload = {"token": token, "new_password": NEW_PASSWORD}
    first = await client.post("/auth/password/reset/confirm", json=payload)
    second = await client.post("/auth/password/reset/confirm", json=payload)

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_weak_password_does_not_consume_token(client: AsyncClient, outbox):
    await register(client)
    token = await request_reset(client, outbox)

    response = await client.post(
        "/auth/password/reset/confirm", json={"token": token, "new_password": "weak"}
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "WEAK_PASSWORD"

    response = await client.post(
        "/auth/password/reset/confirm", json={"token": token, "new_password": NEW_PASSWORD}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_expired_reset_token(client: AsyncClient, outbox, db_session):
    await register(client)
    token = await request_reset(client, outbox)

    await db_session.execute(
        update(OneTimeToken).values(expires_at=utcnow() - timedelta(seconds=1))
    )
    await db_session.commit()

    response = await client.post(
        "/auth/password/reset/confirm", json={"token": token, "new_password": NEW_PASSWORD}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_OR_EXPIRED_TOKEN"


@pytest.mark.asyncio
async def test_reset_request_for_unknown_email(client: AsyncClient, outbox):
    await register(client)

    known = await client.post("/auth/password/reset/request", json={"email": "alice@example.com"})
    unknown = await client.post("/auth/password/reset/request", json={"email": "nobody@example.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()
    assert len(outbox.messages) == 1


@pytest.mark.asyncio
async def test_older_reset_tokens_stay_valid(client: AsyncClient, outbox):
    await register(client)
    first = await request_reset(client, outbox)
    await request_reset(client, outbox)

    response = await client.post(
        "/auth/password/reset/confirm", json={"token": first, "new_password": NEW_PASSWORD}
    )

    assert response.status_code == 200
