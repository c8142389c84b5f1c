from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from src.domain.entities import (
    Permission,
    PermissionAction,
    PermissionAssignment,
    ResourceType,
    User,
)


class IPermissionAssignmentRepository(ABC):
    """PermissionAssignment repository interface - application layer"""

    @abstractmethod
    async def get_by_id(
        self, assignment_id: UUID
    ) -> Optional[Tuple[PermissionAssignment, Permission]]:
        """Get an assignment together with its catalog permission"""
        pass

    @abstractmethod
    async def get_by_user_and_permission(
        self, user_id: UUID, permission_id: UUID
    ) -> Optional[PermissionAssignment]:
        """Get the assignment of a permission to a user"""
        pass

    @abstractmethod
    async def list_by_user(
        self, user_id: UUID, active_at: Optional[datetime] = None
    ) -> List[Tuple[PermissionAssignment, Permission]]:
        """
        Assignments of a user ordered by (resource, action).

        When active_at is given, expired assignments are left out.
        """
        pass

    @abstractmethod
    async def list_permission_ids(
        self, user_id: UUID, permission_ids: Optional[Sequence[UUID]] = None
    ) -> List[UUID]:
        """Permission IDs assigned to a user, optionally restricted to a subset"""
        pass

    @abstractmethod
    async def list_holders_in_enterprise(
        self, permission_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[PermissionAssignment, User]]:
        """Direct holders of a permission among the members of an enterprise"""
        pass

    @abstractmethod
    async def has_active_assignment(
        self,
        user_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
        now: datetime,
    ) -> bool:
        """True if the user holds an unexpired assignment for (action, resource)"""
        pass

    @abstractmethod
    async def create(self, assignment: PermissionAssignment) -> PermissionAssignment:
        """Create a new assignment"""
        pass

    @abstractmethod
    async def bulk_create(self, assignments: Sequence[PermissionAssignment]) -> int:
        """Create several assignments, returns the number created"""
        pass

    @abstractmethod
    async def update(self, assignment: PermissionAssignment) -> PermissionAssignment:
        """Update existing assignment"""
        pass

    @abstractmethod
    async def delete(self, assignment: PermissionAssignment) -> None:
        """Delete an assignment"""
        pass

    @abstractmethod
    async def delete_by_user(self, user_id: UUID) -> int:
        """Delete every assignment of a user, returns the number deleted"""
        pass
