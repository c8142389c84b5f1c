from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from src.domain.entities import (
    EnterprisePermission,
    Permission,
    PermissionAction,
    ResourceType,
)


class IEnterprisePermissionRepository(ABC):
    """EnterprisePermission repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, enterprise_permission_id: UUID
    ) -> Optional[Tuple[EnterprisePermission, Permission]]:
        """Get a grant together with its catalog permission"""
        pass

    @abstractmethod
    async def get_by_enterprise_and_permission(
        self, enterprise_id: UUID, permission_id: UUID
    ) -> Optional[EnterprisePermission]:
        """Get the grant of a permission to an enterprise"""
        pass

    @abstractmethod
    async def list_by_enterprise(
        self, enterprise_id: UUID, resource: Optional[ResourceType] = None
    ) -> List[Tuple[EnterprisePermission, Permission]]:
        """Grants of an enterprise ordered by (resource, action), optionally for one resource"""
        pass

    @abstractmethod
    async def list_permission_ids(
        self, enterprise_id: UUID, permission_ids: Optional[Sequence[UUID]] = None
    ) -> List[UUID]:
        """Permission IDs granted to an enterprise, optionally restricted to a subset"""
        pass

    @abstractmethod
    async def has_active_grant(
        self,
        enterprise_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
        now: datetime,
    ) -> bool:
        """True if the enterprise holds an unexpired grant for (action, resource)"""
        pass

    @abstractmethod
    async def create(self, grant: EnterprisePermission) -> EnterprisePermission:
        """Create a new grant"""
        pass

    @abstractmethod
    async def bulk_create(self, grants: Sequence[EnterprisePermission]) -> int:
        """Create several grants, returns the number created"""
        pass

    @abstractmethod
    async def update(self, grant: EnterprisePermission) -> EnterprisePermission:
        """Update existing grant"""
        pass

    @abstractmethod
    async def delete(self, grant: EnterprisePermission) -> None:
        """Delete a grant"""
        pass
