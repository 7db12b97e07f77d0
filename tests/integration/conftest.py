import re

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from grimoire.app.services.password_hasher import PasswordHasher
from grimoire.config import ApplicationConfig
from grimoire.depends import get_email_sender, get_password_hasher, get_unit_of_work


class EmailOutbox:
    """Email sender that keeps messages for inspection"""

    def __init__(self):
        self.messages = []

    async def send(self, to_address, subject, html_body):
        self.messages.append({"to": to_address, "subject": subject, "html_body": html_body})

    def last_token(self, to_address, path):
        for message in reversed(self.messages):
            if message["to"] == to_address:
                match = re.search(rf"{path}\?token=([0-9a-f]+)", message["html_body"])
                if match:
                    return match.group(1)
        raise AssertionError(f"No {path} email sent to {to_address}")


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def outbox():
    return EmailOutbox()


@pytest.fixture
def fast_hasher():
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1)


@pytest_asyncio.fixture
async def client(engine, outbox, fast_hasher):
    from grimoire.api.app import create_app

    app = create_app(ApplicationConfig)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: outbox
    app.dependency_overrides[get_password_hasher] = lambda: fast_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
