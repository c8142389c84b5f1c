from .assign_enterprise_permission_use_case import AssignEnterprisePermissionUseCase
from .bulk_assign_enterprise_permissions_use_case import (
    BulkAssignEnterprisePermissionsUseCase,
)
from .list_available_permissions_use_case import ListAvailablePermissionsUseCase
from .list_enterprise_permissions_by_resource_use_case import (
    ListEnterprisePermissionsByResourceUseCase,
)
from .list_enterprise_permissions_use_case import ListEnterprisePermissionsUseCase
from .revoke_enterprise_permission_use_case import RevokeEnterprisePermissionUseCase
from .update_enterprise_permission_expiration_use_case import (
    UpdateEnterprisePermissionExpirationUseCase,
)

__all__ = [
    "AssignEnterprisePermissionUseCase",
    "BulkAssignEnterprisePermissionsUseCase",
    "ListAvailablePermissionsUseCase",
    "ListEnterprisePermissionsByResourceUseCase",
    "ListEnterprisePermissionsUseCase",
    "RevokeEnterprisePermissionUseCase",
    "UpdateEnterprisePermissionExpirationUseCase",
]
