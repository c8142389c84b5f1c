from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.app.use_cases.permission_assignments import (
    AssignUserPermissionUseCase,
    BulkAssignUserPermissionsUseCase,
    CopyUserPermissionsUseCase,
    ListUserPermissionsUseCase,
    ListUsersWithPermissionUseCase,
    RevokeAllUserPermissionsUseCase,
    RevokeUserPermissionUseCase,
    UpdateUserPermissionUseCase,
)
from src.app.use_cases.permission_assignments.dtos import (
    CopyPermissionsResponse,
    PermissionHoldersResponse,
    RevokeAllResponse,
    UserPermissionResponse,
    UserPermissionsResponse,
)
from src.app.use_cases.permissions.dtos import BulkAssignResponse
from src.depends import get_current_user_id, get_unit_of_work

router = APIRouter(prefix="/permission-assignments", tags=["Permission Assignments"])


class AssignUserPermissionRequest(BaseModel):
    user_id: UUID
    permission_id: UUID
    expires_at: Optional[datetime] = None


class BulkAssignUserPermissionsRequest(BaseModel):
    user_id: UUID
    permission_ids: List[UUID] = Field(..., min_length=1)
    expires_at: Optional[datetime] = None


class UpdateUserPermissionRequest(BaseModel):
    expires_at: Optional[datetime] = None


class CopyUserPermissionsRequest(BaseModel):
    source_user_id: UUID
    target_user_id: UUID


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserPermissionResponse)
async def assign_user_permission(
    request: AssignUserPermissionRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Assign a Permission Directly to a Member

    Raises:
        - 403 Forbidden: NOT_OWNER or NOT_SAME_ENTERPRISE
        - 404 Not Found: MEMBER_NOT_FOUND or PERMISSION_NOT_FOUND
        - 409 Conflict: PERMISSION_ALREADY_ASSIGNED
    """
    result = await AssignUserPermissionUseCase(uow).execute(
        user_id, request.user_id, request.permission_id, expires_at=request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/bulk", status_code=status.HTTP_201_CREATED, response_model=BulkAssignResponse)
async def bulk_assign_user_permissions(
    request: BulkAssignUserPermissionsRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await BulkAssignUserPermissionsUseCase(uow).execute(
        user_id, request.user_id, request.permission_ids, expires_at=request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/copy", response_model=CopyPermissionsResponse)
async def copy_user_permissions(
    request: CopyUserPermissionsRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CopyUserPermissionsUseCase(uow).execute(
        user_id, request.source_user_id, request.target_user_id
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/users/{target_user_id}", response_model=UserPermissionsResponse)
async def list_user_permissions(
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListUserPermissionsUseCase(uow).execute(user_id, target_user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/users/{target_user_id}", response_model=RevokeAllResponse)
async def revoke_all_user_permissions(
    target_user_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RevokeAllUserPermissionsUseCase(uow).execute(user_id, target_user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/holders/{permission_id}", response_model=PermissionHoldersResponse)
async def list_users_with_permission(
    permission_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListUsersWithPermissionUseCase(uow).execute(user_id, permission_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.patch("/{assignment_id}", response_model=UserPermissionResponse)
async def update_user_permission(
    assignment_id: UUID,
    request: UpdateUserPermissionRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateUserPermissionUseCase(uow).execute(
        user_id, assignment_id, request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{assignment_id}", response_model=StatusResponse)
async def revoke_user_permission(
    assignment_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RevokeUserPermissionUseCase(uow).execute(user_id, assignment_id)
    if result.is_err():
        raise_error(result.error)
    return result.value
