from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from src.domain.entities import Enterprise


class IEnterpriseRepository(ABC):
    """Enterprise repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, enterprise_id: UUID) -> Optional[Enterprise]:
        """Get enterprise by ID, active or not"""
        pass

    @abstractmethod
    async def get_active_by_id(self, enterprise_id: UUID) -> Optional[Enterprise]:
        """Get enterprise by ID only if it is active"""
        pass

    @abstractmethod
    async def get_active_by_name(self, name: str) -> Optional[Enterprise]:
        """Get the active enterprise holding a name"""
        pass

    @abstractmethod
    async def list_active_with_member_count(self) -> List[Tuple[Enterprise, int]]:
        """List active enterprises together with their member counts"""
        pass

    @abstractmethod
    async def create(self, enterprise: Enterprise) -> Enterprise:
        """Create a new enterprise"""
        pass

    @abstractmethod
    async def update(self, enterprise: Enterprise) -> Enterprise:
        """Update existing enterprise"""
        pass
