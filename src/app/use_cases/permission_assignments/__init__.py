from .assign_user_permission_use_case import AssignUserPermissionUseCase
from .bulk_assign_user_permissions_use_case import BulkAssignUserPermissionsUseCase
from .copy_user_permissions_use_case import CopyUserPermissionsUseCase
from .list_user_permissions_use_case import ListUserPermissionsUseCase
from .list_users_with_permission_use_case import ListUsersWithPermissionUseCase
from .revoke_all_user_permissions_use_case import RevokeAllUserPermissionsUseCase
from .revoke_user_permission_use_case import RevokeUserPermissionUseCase
from .update_user_permission_use_case import UpdateUserPermissionUseCase

__all__ = [
    "AssignUserPermissionUseCase",
    "BulkAssignUserPermissionsUseCase",
    "CopyUserPermissionsUseCase",
    "ListUserPermissionsUseCase",
    "ListUsersWithPermissionUseCase",
    "RevokeAllUserPermissionsUseCase",
    "RevokeUserPermissionUseCase",
    "UpdateUserPermissionUseCase",
]
