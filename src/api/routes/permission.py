from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from src.api.error import raise_error
from src.api.utils.guards import require_owner
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.permissions import (
    CheckPermissionUseCase,
    GetMyPermissionsUseCase,
    ListPermissionsUseCase,
    SeedDefaultPermissionsUseCase,
)
from src.app.use_cases.permissions.dtos import (
    CheckPermissionResponse,
    MyPermissionsResponse,
    PermissionResponse,
    SeedPermissionsResponse,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import PermissionAction, ResourceType

router = APIRouter(prefix="/permissions", tags=["Permissions"])


@router.get("", response_model=List[PermissionResponse])
async def list_permissions(
    _user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPermissionsUseCase(uow).execute()
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/seed", response_model=SeedPermissionsResponse)
async def seed_permissions(
    user_id: UUID = Depends(require_owner),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Seed Permission Catalog

    Idempotent; returns created=false when the catalog already exists.

    Raises:
        - 403 Forbidden: NOT_OWNER
    """
    result = await SeedDefaultPermissionsUseCase(uow).execute(actor_id=user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/check", response_model=CheckPermissionResponse)
async def check_permission(
    action: PermissionAction,
    resource: ResourceType,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Allow/deny for the caller across every grant channel"""
    result = await CheckPermissionUseCase(uow).execute(user_id, action, resource)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/me", response_model=MyPermissionsResponse)
async def get_my_permissions(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetMyPermissionsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value
