from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprise_permissions import (
    AssignEnterprisePermissionUseCase,
    BulkAssignEnterprisePermissionsUseCase,
    ListAvailablePermissionsUseCase,
    ListEnterprisePermissionsByResourceUseCase,
    ListEnterprisePermissionsUseCase,
    RevokeEnterprisePermissionUseCase,
    UpdateEnterprisePermissionExpirationUseCase,
)
from src.app.use_cases.enterprise_permissions.dtos import (
    AvailablePermissionsResponse,
    EnterprisePermissionResponse,
    EnterprisePermissionsResponse,
)
from src.app.use_cases.enterprises.dtos import StatusResponse
from src.app.use_cases.permissions.dtos import BulkAssignResponse
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import ResourceType

router = APIRouter(prefix="/enterprise-permissions", tags=["Enterprise Permissions"])


class AssignEnterprisePermissionRequest(BaseModel):
    permission_id: UUID
    expires_at: Optional[datetime] = None


class BulkAssignEnterprisePermissionsRequest(BaseModel):
    permission_ids: List[UUID] = Field(..., min_length=1)
    expires_at: Optional[datetime] = None


class UpdateExpirationRequest(BaseModel):
    """expires_at=null makes the grant permanent"""

    expires_at: Optional[datetime] = None


@router.post(
    "", status_code=status.HTTP_201_CREATED, response_model=EnterprisePermissionResponse
)
async def assign_enterprise_permission(
    request: AssignEnterprisePermissionRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant a Permission to the Caller's Enterprise

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: PERMISSION_NOT_FOUND
        - 409 Conflict: PERMISSION_ALREADY_ASSIGNED
    """
    result = await AssignEnterprisePermissionUseCase(uow).execute(
        user_id, request.permission_id, expires_at=request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/bulk", status_code=status.HTTP_201_CREATED, response_model=BulkAssignResponse)
async def bulk_assign_enterprise_permissions(
    request: BulkAssignEnterprisePermissionsRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Grant Several Permissions

    Already granted ids are skipped.

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: PERMISSION_NOT_FOUND
        - 409 Conflict: PERMISSIONS_ALREADY_ASSIGNED (every id already granted)
    """
    result = await BulkAssignEnterprisePermissionsUseCase(uow).execute(
        user_id, request.permission_ids, expires_at=request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("", response_model=EnterprisePermissionsResponse)
async def list_enterprise_permissions(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListEnterprisePermissionsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/available", response_model=AvailablePermissionsResponse)
async def list_available_permissions(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListAvailablePermissionsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/resource/{resource}", response_model=List[EnterprisePermissionResponse])
async def list_enterprise_permissions_by_resource(
    resource: ResourceType,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListEnterprisePermissionsByResourceUseCase(uow).execute(user_id, resource)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.patch("/{enterprise_permission_id}", response_model=EnterprisePermissionResponse)
async def update_enterprise_permission_expiration(
    enterprise_permission_id: UUID,
    request: UpdateExpirationRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateEnterprisePermissionExpirationUseCase(uow).execute(
        user_id, enterprise_permission_id, request.expires_at
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{enterprise_permission_id}", response_model=StatusResponse)
async def revoke_enterprise_permission(
    enterprise_permission_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke an Enterprise Grant

    Raises:
        - 403 Forbidden: NOT_OWNER or NOT_SAME_ENTERPRISE
        - 404 Not Found: ENTERPRISE_PERMISSION_NOT_FOUND
    """
    result = await RevokeEnterprisePermissionUseCase(uow).execute(
        user_id, enterprise_permission_id
    )
    if result.is_err():
        raise_error(result.error)
    return result.value
