from .add_permission_to_role_use_case import AddPermissionToRoleUseCase
from .assign_role_to_user_use_case import AssignRoleToUserUseCase
from .create_role_use_case import CreateRoleUseCase
from .delete_role_use_case import DeleteRoleUseCase
from .get_my_roles_use_case import GetMyRolesUseCase
from .get_role_use_case import GetRoleUseCase
from .get_user_roles_use_case import GetUserRolesUseCase
from .list_roles_use_case import ListRolesUseCase
from .remove_permission_from_role_use_case import RemovePermissionFromRoleUseCase
from .remove_role_from_user_use_case import RemoveRoleFromUserUseCase
from .update_role_use_case import UpdateRoleUseCase

__all__ = [
    "AddPermissionToRoleUseCase",
    "AssignRoleToUserUseCase",
    "CreateRoleUseCase",
    "DeleteRoleUseCase",
    "GetMyRolesUseCase",
    "GetRoleUseCase",
    "GetUserRolesUseCase",
    "ListRolesUseCase",
    "RemovePermissionFromRoleUseCase",
    "RemoveRoleFromUserUseCase",
    "UpdateRoleUseCase",
]
