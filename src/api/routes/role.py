from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.api.utils.guards import require_permission
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.app.use_cases.roles import (
    AddPermissionToRoleUseCase,
    AssignRoleToUserUseCase,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    GetMyRolesUseCase,
    GetRoleUseCase,
    GetUserRolesUseCase,
    ListRolesUseCase,
    RemovePermissionFromRoleUseCase,
    RemoveRoleFromUserUseCase,
    UpdateRoleUseCase,
)
from src.app.use_cases.roles.dtos import RoleDetailResponse, RoleResponse, UserRolesResponse
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import PermissionAction, ResourceType

router = APIRouter(prefix="/roles", tags=["Roles"])

read_roles = require_permission(PermissionAction.READ, ResourceType.ROLES)


class CreateRoleRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    permission_ids: List[UUID] = Field(default_factory=list)


class UpdateRoleRequest(BaseModel):
    """permission_ids, when present, replaces the role's whole permission set"""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    permission_ids: Optional[List[UUID]] = None


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoleResponse)
async def create_role(
    request: CreateRoleRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Role

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: PERMISSION_NOT_FOUND
        - 409 Conflict: ROLE_NAME_TAKEN
    """
    result = await CreateRoleUseCase(uow).execute(
        user_id,
        request.name,
        description=request.description,
        permission_ids=request.permission_ids,
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("", response_model=List[RoleResponse])
async def list_roles(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListRolesUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/me", response_model=UserRolesResponse)
async def get_my_roles(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetMyRolesUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/users/{target_user_id}", response_model=UserRolesResponse)
async def get_user_roles(
    target_user_id: UUID,
    user_id: UUID = Depends(read_roles),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Roles of Another Member

    Raises:
        - 403 Forbidden: PERMISSION_DENIED (READ on ROLES) or NOT_SAME_ENTERPRISE
        - 404 Not Found: MEMBER_NOT_FOUND
    """
    result = await GetUserRolesUseCase(uow).execute(user_id, target_user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/{role_id}", response_model=RoleDetailResponse)
async def get_role(
    role_id: UUID,
    user_id: UUID = Depends(read_roles),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetRoleUseCase(uow).execute(user_id, role_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    request: UpdateRoleRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Role

    Raises:
        - 403 Forbidden: NOT_OWNER or SYSTEM_ROLE_PROTECTED
        - 404 Not Found: ROLE_NOT_FOUND or PERMISSION_NOT_FOUND
        - 409 Conflict: ROLE_NAME_TAKEN
    """
    result = await UpdateRoleUseCase(uow).execute(
        user_id,
        role_id,
        name=request.name,
        description=request.description,
        permission_ids=request.permission_ids,
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{role_id}", response_model=StatusResponse)
async def delete_role(
    role_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeleteRoleUseCase(uow).execute(user_id, role_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/{role_id}/users/{target_user_id}", response_model=UserRolesResponse)
async def assign_role_to_user(
    role_id: UUID,
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign Role to Member

    Raises:
        - 403 Forbidden: NOT_OWNER or NOT_SAME_ENTERPRISE
        - 404 Not Found: ROLE_NOT_FOUND or MEMBER_NOT_FOUND
        - 409 Conflict: ROLE_ALREADY_ASSIGNED
    """
    result = await AssignRoleToUserUseCase(uow).execute(user_id, target_user_id, role_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{role_id}/users/{target_user_id}", response_model=UserRolesResponse)
async def remove_role_from_user(
    role_id: UUID,
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RemoveRoleFromUserUseCase(uow).execute(user_id, target_user_id, role_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/{role_id}/permissions/{permission_id}", response_model=RoleResponse)
async def add_permission_to_role(
    role_id: UUID,
    permission_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await AddPermissionToRoleUseCase(uow).execute(user_id, role_id, permission_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{role_id}/permissions/{permission_id}", response_model=RoleResponse)
async def remove_permission_from_role(
    role_id: UUID,
    permission_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RemovePermissionFromRoleUseCase(uow).execute(user_id, role_id, permission_id)
    if result.is_err():
        raise_error(result.error)
    return result.value
