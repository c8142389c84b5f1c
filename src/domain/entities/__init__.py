"""
Authorization Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    AuditAction,
    JoinRequestAction,
    JoinRequestStatus,
    PermissionAction,
    PermissionSource,
    ResourceType,
)

# Export all entities
from .user import User
from .enterprise import Enterprise
from .membership import Membership
from .join_request import JoinRequest
from .permission import Permission, permission_name
from .enterprise_permission import EnterprisePermission
from .permission_assignment import PermissionAssignment
from .role import Role, RolePermission, UserRole
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "AuditAction",
    "PermissionAction",
    "ResourceType",
    "JoinRequestStatus",
    "JoinRequestAction",
    "PermissionSource",
    # Entities
    "User",
    "Enterprise",
    "Membership",
    "JoinRequest",
    "Permission",
    "permission_name",
    "EnterprisePermission",
    "PermissionAssignment",
    "Role",
    "RolePermission",
    "UserRole",
    "AuditEvent",
]
