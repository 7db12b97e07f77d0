from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from grimoire.domain.entities import Role


class IRoleRepository(ABC):
    """Role repository interface - application layer"""

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Role]:
        """Get role by its unique name"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def assign(self, user_id: UUID, role_id: UUID) -> None:
        """Assign a role to a user"""
        pass

    @abstractmethod
    async def get_names_for_user(self, user_id: UUID) -> List[str]:
        """Names of all roles assigned to a user, sorted"""
        pass
