from abc import ABC, abstractmethod
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def ensure(self, user_id: UUID) -> None:
        """Insert a bare user row for user_id unless one exists"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass
