from .check_permission_use_case import CheckPermissionUseCase
from .get_my_permissions_use_case import GetMyPermissionsUseCase
from .list_permissions_use_case import ListPermissionsUseCase
from .seed_default_permissions_use_case import SeedDefaultPermissionsUseCase

__all__ = [
    "CheckPermissionUseCase",
    "GetMyPermissionsUseCase",
    "ListPermissionsUseCase",
    "SeedDefaultPermissionsUseCase",
]
