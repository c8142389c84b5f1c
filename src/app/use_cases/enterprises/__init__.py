from .cancel_join_request_use_case import CancelJoinRequestUseCase
from .create_enterprise_use_case import CreateEnterpriseUseCase
from .delete_enterprise_use_case import DeleteEnterpriseUseCase
from .get_enterprise_use_case import GetEnterpriseUseCase
from .get_my_enterprise_use_case import GetMyEnterpriseUseCase
from .handle_join_request_use_case import HandleJoinRequestUseCase
from .leave_enterprise_use_case import LeaveEnterpriseUseCase
from .list_enterprises_use_case import ListEnterprisesUseCase
from .list_my_join_requests_use_case import ListMyJoinRequestsUseCase
from .list_pending_join_requests_use_case import ListPendingJoinRequestsUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .request_to_join_use_case import RequestToJoinUseCase
from .transfer_ownership_use_case import TransferOwnershipUseCase
from .update_enterprise_use_case import UpdateEnterpriseUseCase

__all__ = [
    "CancelJoinRequestUseCase",
    "CreateEnterpriseUseCase",
    "DeleteEnterpriseUseCase",
    "GetEnterpriseUseCase",
    "GetMyEnterpriseUseCase",
    "HandleJoinRequestUseCase",
    "LeaveEnterpriseUseCase",
    "ListEnterprisesUseCase",
    "ListMyJoinRequestsUseCase",
    "ListPendingJoinRequestsUseCase",
    "RemoveMemberUseCase",
    "RequestToJoinUseCase",
    "TransferOwnershipUseCase",
    "UpdateEnterpriseUseCase",
]
