from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities import Permission


class IPermissionRepository(ABC):
    """Permission catalog repository interface - application layer"""

    @abstractmethod
    async def count(self) -> int:
        """Number of catalog entries"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Permission]:
        """All permissions ordered by (resource, action)"""
        pass

    @abstractmethod
    async def get_by_id(self, permission_id: UUID) -> Optional[Permission]:
        """Get permission by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, permission_ids: Sequence[UUID]) -> List[Permission]:
        """Get the permissions matching the given IDs"""
        pass

    @abstractmethod
    async def bulk_create_skip_duplicates(self, permissions: Sequence[Permission]) -> int:
        """
        Insert permissions, ignoring rows that collide with an existing
        (action, resource) or name.

        Returns:
            Number of rows actually inserted
        """
        pass
