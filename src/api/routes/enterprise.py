from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.enterprises import (
    CancelJoinRequestUseCase,
    CreateEnterpriseUseCase,
    DeleteEnterpriseUseCase,
    GetEnterpriseUseCase,
    GetMyEnterpriseUseCase,
    HandleJoinRequestUseCase,
    LeaveEnterpriseUseCase,
    ListEnterprisesUseCase,
    ListMyJoinRequestsUseCase,
    ListPendingJoinRequestsUseCase,
    RemoveMemberUseCase,
    RequestToJoinUseCase,
    TransferOwnershipUseCase,
    UpdateEnterpriseUseCase,
)
from src.app.use_cases.enterprises.dtos import (
    CreateEnterpriseResponse,
    EnterpriseDetailResponse,
    EnterpriseResponse,
    EnterpriseSummary,
    HandleJoinRequestResponse,
    JoinRequestResponse,
    MembershipEndedResponse,
    MyEnterpriseResponse,
    StatusResponse,
    TransferOwnershipResponse,
)
from src.depends import get_current_user_id, get_unit_of_work
from src.domain.entities import JoinRequestAction

router = APIRouter(prefix="/enterprises", tags=["Enterprise"])


class CreateEnterpriseRequest(BaseModel):
    """
    Create enterprise HTTP request payload

    The caller becomes the owner.
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    logo: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=500)


class UpdateEnterpriseRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    logo: Optional[str] = Field(None, max_length=500)
    website: Optional[str] = Field(None, max_length=500)


class HandleJoinRequestRequest(BaseModel):
    action: JoinRequestAction


class TransferOwnershipRequest(BaseModel):
    new_owner_id: UUID


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateEnterpriseResponse)
async def create_enterprise(
    request: CreateEnterpriseRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Enterprise

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: ALREADY_IN_ENTERPRISE or ENTERPRISE_NAME_TAKEN
    """
    result = await CreateEnterpriseUseCase(uow).execute(
        user_id,
        request.name,
        description=request.description,
        logo=request.logo,
        website=request.website,
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("", response_model=List[EnterpriseSummary])
async def list_enterprises(
    _user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListEnterprisesUseCase(uow).execute()
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/me", response_model=MyEnterpriseResponse)
async def get_my_enterprise(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetMyEnterpriseUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/join-requests/me", response_model=List[JoinRequestResponse])
async def list_my_join_requests(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListMyJoinRequestsUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post(
    "/join-requests/{request_id}/handle", response_model=HandleJoinRequestResponse
)
async def handle_join_request(
    request_id: UUID,
    request: HandleJoinRequestRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Approve or Reject a Join Request

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: JOIN_REQUEST_NOT_FOUND
        - 409 Conflict: REQUEST_ALREADY_PROCESSED or ALREADY_IN_ENTERPRISE
    """
    result = await HandleJoinRequestUseCase(uow).execute(user_id, request_id, request.action)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/join-requests/{request_id}", response_model=StatusResponse)
async def cancel_join_request(
    request_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await CancelJoinRequestUseCase(uow).execute(user_id, request_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/leave", response_model=MembershipEndedResponse)
async def leave_enterprise(
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Leave Enterprise

    Raises:
        - 403 Forbidden: OWNER_CANNOT_LEAVE
        - 404 Not Found: NO_ENTERPRISE
    """
    result = await LeaveEnterpriseUseCase(uow).execute(user_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post("/transfer-ownership", response_model=TransferOwnershipResponse)
async def transfer_ownership(
    request: TransferOwnershipRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Transfer Ownership

    Raises:
        - 403 Forbidden: NOT_OWNER
        - 404 Not Found: MEMBER_NOT_FOUND
        - 409 Conflict: ALREADY_OWNER
    """
    result = await TransferOwnershipUseCase(uow).execute(user_id, request.new_owner_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/members/{member_id}", response_model=MembershipEndedResponse)
async def remove_member(
    member_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await RemoveMemberUseCase(uow).execute(user_id, member_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/{enterprise_id}", response_model=EnterpriseDetailResponse)
async def get_enterprise(
    enterprise_id: UUID,
    _user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetEnterpriseUseCase(uow).execute(enterprise_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.patch("/{enterprise_id}", response_model=EnterpriseResponse)
async def update_enterprise(
    enterprise_id: UUID,
    request: UpdateEnterpriseRequest,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await UpdateEnterpriseUseCase(uow).execute(
        user_id,
        enterprise_id,
        name=request.name,
        description=request.description,
        logo=request.logo,
        website=request.website,
    )
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.delete("/{enterprise_id}", response_model=EnterpriseResponse)
async def delete_enterprise(
    enterprise_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete: the enterprise is deactivated, rows are kept"""
    result = await DeleteEnterpriseUseCase(uow).execute(user_id, enterprise_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.post(
    "/{enterprise_id}/join-requests",
    status_code=status.HTTP_201_CREATED,
    response_model=JoinRequestResponse,
)
async def request_to_join(
    enterprise_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Request to Join an Enterprise

    Raises:
        - 404 Not Found: ENTERPRISE_NOT_FOUND (missing or inactive)
        - 409 Conflict: ALREADY_IN_ENTERPRISE or REQUEST_ALREADY_PENDING
    """
    result = await RequestToJoinUseCase(uow).execute(user_id, enterprise_id)
    if result.is_err():
        raise_error(result.error)
    return result.value


@router.get("/{enterprise_id}/join-requests", response_model=List[JoinRequestResponse])
async def list_pending_join_requests(
    enterprise_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListPendingJoinRequestsUseCase(uow).execute(user_id, enterprise_id)
    if result.is_err():
        raise_error(result.error)
    return result.value
