from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from grimoire.domain.entities import User


class DuplicateEmailError(Exception):
    """Raised when an insert violates the unique constraint on users.email"""


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by normalized email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user. Raises DuplicateEmailError on unique violation."""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of user rows"""
        pass
