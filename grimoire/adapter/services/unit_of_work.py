from sqlmodel.ext.asyncio.session import AsyncSession

from grimoire.adapter.repositories.one_time_token_repository import OneTimeTokenRepository
from grimoire.adapter.repositories.role_repository import RoleRepository
from grimoire.adapter.repositories.session_repository import SessionRepository
from grimoire.adapter.repositories.user_repository import UserRepository
from grimoire.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.one_time_tokens = OneTimeTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
