"""
Authorization Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class PermissionAction(str, Enum):
    """Action half of a catalog permission"""

    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    MANAGE = "MANAGE"


class ResourceType(str, Enum):
    """Resource half of a catalog permission"""

    USERS = "USERS"
    ROLES = "ROLES"
    PERMISSIONS = "PERMISSIONS"
    AUDIT_LOGS = "AUDIT_LOGS"
    SETTINGS = "SETTINGS"
    ENTERPRISE = "ENTERPRISE"
    USER_RELATIONSHIPS = "USER_RELATIONSHIPS"


class JoinRequestStatus(str, Enum):
    """Join request lifecycle state"""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class JoinRequestAction(str, Enum):
    """Owner decision on a pending join request"""

    APPROVE = "APPROVE"
    REJECT = "REJECT"


class PermissionSource(str, Enum):
    """Where an effective permission comes from"""

    direct = "direct"
    role = "role"


class AuditAction(str, Enum):
    """Audit event actions recorded by management operations"""

    ENTERPRISE_CREATE = "ENTERPRISE_CREATE"
    ENTERPRISE_UPDATE = "ENTERPRISE_UPDATE"
    ENTERPRISE_DELETE = "ENTERPRISE_DELETE"
    ENTERPRISE_JOIN_REQUEST = "ENTERPRISE_JOIN_REQUEST"
    ENTERPRISE_JOIN_CANCEL = "ENTERPRISE_JOIN_CANCEL"
    ENTERPRISE_JOIN_APPROVE = "ENTERPRISE_JOIN_APPROVE"
    ENTERPRISE_JOIN_REJECT = "ENTERPRISE_JOIN_REJECT"
    ENTERPRISE_LEAVE = "ENTERPRISE_LEAVE"
    ENTERPRISE_MEMBER_REMOVE = "ENTERPRISE_MEMBER_REMOVE"
    OWNERSHIP_TRANSFER = "OWNERSHIP_TRANSFER"

    PERMISSION_SEED = "PERMISSION_SEED"
    PERMISSION_GRANT = "PERMISSION_GRANT"
    PERMISSION_REVOKE = "PERMISSION_REVOKE"
    PERMISSION_UPDATE = "PERMISSION_UPDATE"

    ROLE_CREATE = "ROLE_CREATE"
    ROLE_UPDATE = "ROLE_UPDATE"
    ROLE_DELETE = "ROLE_DELETE"
    ROLE_ASSIGN = "ROLE_ASSIGN"
    ROLE_REMOVE = "ROLE_REMOVE"
