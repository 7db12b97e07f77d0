from abc import ABC, abstractmethod

from grimoire.app.repositories.one_time_token_repository import IOneTimeTokenRepository
from grimoire.app.repositories.role_repository import IRoleRepository
from grimoire.app.repositories.session_repository import ISessionRepository
from grimoire.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    roles: IRoleRepository
    sessions: ISessionRepository
    one_time_tokens: IOneTimeTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
