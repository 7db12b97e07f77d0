import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from grimoire.config import ApplicationConfig
from grimoire.depends import get_unit_of_work
from tests.fixtures.auth_helpers import bearer, login, register


@pytest_asyncio.fixture
async def unavailable_client(tmp_path):
    from grimoire.api.app import create_app

    # sqlite cannot create a file inside a directory that does not exist
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'grimoire.db'}")
    app = create_app(ApplicationConfig)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await engine.dispose()


@pytest.mark.asyncio
async def test_health_reports_counts(client: AsyncClient):
    await register(client)
    await login(client)

    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == {"connected": True, "user_count": 1, "active_sessions": 1}
    assert body["uptime_seconds"] >= 0
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_health_ignores_revoked_sessions(client: AsyncClient):
    await register(client)
    session = await login(client)
    await client.post("/auth/logout", headers=bearer(session["session_token"]))

    response = await client.get("/health")

    assert response.json()["database"]["active_sessions"] == 0


@pytest.mark.asyncio
async def test_health_database_unavailable(unavailable_client: AsyncClient):
    response = await unavailable_client.get("/health")

    assert response.status_code == 503
    body = response.json()
    assert body["status"] == "unhealthy"
    assert body["database"] == {"connected": False, "error": "OperationalError"}
    assert "uptime_seconds" in body


@pytest.mark.asyncio
async def test_ping_skips_database(unavailable_client: AsyncClient):
    response = await unavailable_client.get("/ping")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "pong"
    assert "timestamp" in body
