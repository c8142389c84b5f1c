from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from src.domain.entities import Permission, PermissionAction, ResourceType, Role, User


class IRoleRepository(ABC):
    """Role repository interface - application layer

    Covers the roles table and both join tables (role_permissions, user_roles).
    """

    @abstractmethod
    async def get_in_enterprise(self, role_id: UUID, enterprise_id: UUID) -> Optional[Role]:
        """Get a role only if it belongs to the given enterprise"""
        pass

    @abstractmethod
    async def get_by_name(self, enterprise_id: UUID, name: str) -> Optional[Role]:
        """Get a role of an enterprise by name"""
        pass

    @abstractmethod
    async def list_by_enterprise(self, enterprise_id: UUID) -> List[Role]:
        """Roles of an enterprise, oldest first"""
        pass

    @abstractmethod
    async def create(self, role: Role) -> Role:
        """Create a new role"""
        pass

    @abstractmethod
    async def update(self, role: Role) -> Role:
        """Update existing role"""
        pass

    @abstractmethod
    async def delete(self, role: Role) -> None:
        """Delete a role together with its permission and user links"""
        pass

    # Role <-> Permission

    @abstractmethod
    async def list_permissions(self, role_id: UUID) -> List[Permission]:
        """Permissions linked to a role"""
        pass

    @abstractmethod
    async def has_permission(self, role_id: UUID, permission_id: UUID) -> bool:
        """True if the permission is linked to the role"""
        pass

    @abstractmethod
    async def add_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        """Link permissions to a role"""
        pass

    @abstractmethod
    async def remove_permission(self, role_id: UUID, permission_id: UUID) -> None:
        """Unlink a permission from a role"""
        pass

    @abstractmethod
    async def set_permissions(self, role_id: UUID, permission_ids: Sequence[UUID]) -> None:
        """Replace the permission set of a role"""
        pass

    # User <-> Role

    @abstractmethod
    async def count_users(self, role_id: UUID) -> int:
        """Number of users holding a role"""
        pass

    @abstractmethod
    async def list_users(self, role_id: UUID) -> List[User]:
        """Users holding a role"""
        pass

    @abstractmethod
    async def user_has_role(self, user_id: UUID, role_id: UUID) -> bool:
        """True if the user holds the role"""
        pass

    @abstractmethod
    async def assign_to_user(self, user_id: UUID, role_id: UUID) -> None:
        """Give a role to a user"""
        pass

    @abstractmethod
    async def remove_from_user(self, user_id: UUID, role_id: UUID) -> None:
        """Take a role away from a user"""
        pass

    @abstractmethod
    async def remove_all_from_user(self, user_id: UUID) -> int:
        """Take every role away from a user, returns the number removed"""
        pass

    @abstractmethod
    async def list_user_roles(
        self, user_id: UUID, enterprise_id: Optional[UUID] = None
    ) -> List[Role]:
        """Roles held by a user, optionally only those of one enterprise"""
        pass

    @abstractmethod
    async def list_user_role_permissions(
        self, user_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[Role, Permission]]:
        """(role, permission) pairs reachable by a user through roles of an enterprise"""
        pass

    @abstractmethod
    async def user_has_permission(
        self,
        user_id: UUID,
        enterprise_id: UUID,
        action: PermissionAction,
        resource: ResourceType,
    ) -> bool:
        """True if any role of the enterprise held by the user carries (action, resource)"""
        pass

    @abstractmethod
    async def list_holders_of_permission(
        self, permission_id: UUID, enterprise_id: UUID
    ) -> List[Tuple[User, Role]]:
        """(user, role) pairs where a role of the enterprise carrying the permission is held"""
        pass
