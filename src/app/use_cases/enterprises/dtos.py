"""
Enterprise Use Case DTOs (Data Transfer Objects)

Response classes for the enterprise lifecycle and join-request workflow.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.domain.entities import JoinRequestStatus


class EnterpriseResponse(BaseModel):
    """Enterprise as returned to callers"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: Optional[str] = None
    logo: Optional[str] = None
    website: Optional[str] = None
    is_active: bool
    created_at: datetime


class EnterpriseSummary(EnterpriseResponse):
    """Enterprise listing entry"""

    member_count: int


class MemberInfo(BaseModel):
    """Membership row of an enterprise"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    enterprise_id: UUID
    is_owner: bool
    joined_at: datetime


class EnterpriseDetailResponse(BaseModel):
    """Enterprise with its members"""

    enterprise: EnterpriseResponse
    members: List[MemberInfo]
    member_count: int


class CreateEnterpriseResponse(BaseModel):
    """Response for create enterprise use case"""

    enterprise: EnterpriseResponse
    membership: MemberInfo


class MyEnterpriseResponse(BaseModel):
    """Response for get my enterprise use case"""

    has_enterprise: bool
    is_owner: bool = False
    enterprise: Optional[EnterpriseResponse] = None
    joined_at: Optional[datetime] = None


class JoinRequestResponse(BaseModel):
    """Join request as returned to callers"""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    enterprise_id: UUID
    status: JoinRequestStatus
    requested_at: datetime
    processed_at: Optional[datetime] = None
    processed_by: Optional[UUID] = None


class HandleJoinRequestResponse(BaseModel):
    """Response for approve / reject"""

    status: str
    request: JoinRequestResponse
    membership: Optional[MemberInfo] = None


class TransferOwnershipResponse(BaseModel):
    """Response for transfer ownership use case"""

    status: str
    enterprise_id: UUID
    previous_owner_id: UUID
    new_owner_id: UUID


class MembershipEndedResponse(BaseModel):
    """Response for leave / remove member use cases"""

    status: str
    user_id: UUID
    enterprise_id: UUID
    revoked_permissions: int
    removed_roles: int


class StatusResponse(BaseModel):
    """Plain status response"""

    status: str
