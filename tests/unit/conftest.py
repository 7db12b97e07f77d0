from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from grimoire.app.services.email_sender import EmailDeliveryError
from grimoire.app.services.password_hasher import PasswordHasher


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.count = AsyncMock(return_value=0)

    uow.roles = MagicMock()
    uow.roles.get_by_name = AsyncMock(return_value=None)
    uow.roles.create = AsyncMock(side_effect=lambda role: role)
    uow.roles.assign = AsyncMock()
    uow.roles.get_names_for_user = AsyncMock(return_value=["USER"])

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.find_usable_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.touch = AsyncMock()
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.get_active_by_user_id = AsyncMock(return_value=[])
    uow.sessions.delete_expired = AsyncMock(return_value=0)
    uow.sessions.count_active = AsyncMock(return_value=0)

    uow.one_time_tokens = MagicMock()
    uow.one_time_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.one_time_tokens.find_redeemable = AsyncMock(return_value=None)
    uow.one_time_tokens.mark_consumed = AsyncMock(return_value=True)
    uow.one_time_tokens.delete_expired = AsyncMock(return_value=0)

    return uow


@pytest.fixture
def fast_hasher():
    """Argon2id with minimal cost so tests stay fast"""
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1)


@pytest.fixture
def frozen_now():
    return datetime(2025, 1, 15, 12, 0, 0)


class FakeEmailSender:
    """Collects outgoing email instead of sending it"""

    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send(self, to_address, subject, html_body):
        if self.error:
            raise self.error
        self.sent.append({"to": to_address, "subject": subject, "html_body": html_body})


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def failing_email_sender():
    return FakeEmailSender(error=EmailDeliveryError("SMTP server unavailable"))
