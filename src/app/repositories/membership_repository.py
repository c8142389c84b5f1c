from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> Optional[Membership]:
        """Get the single membership a user holds, if any"""
        pass

    @abstractmethod
    async def get_by_user_and_enterprise(
        self, user_id: UUID, enterprise_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and enterprise"""
        pass

    @abstractmethod
    async def get_by_enterprise_id(self, enterprise_id: UUID) -> List[Membership]:
        """Get all memberships of an enterprise"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        pass
