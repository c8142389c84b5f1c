from abc import ABC, abstractmethod

from src.app.repositories.audit_event_repository import IAuditEventRepository
from src.app.repositories.enterprise_permission_repository import (
    IEnterprisePermissionRepository,
)
from src.app.repositories.enterprise_repository import IEnterpriseRepository
from src.app.repositories.join_request_repository import IJoinRequestRepository
from src.app.repositories.membership_repository import IMembershipRepository
from src.app.repositories.permission_assignment_repository import (
    IPermissionAssignmentRepository,
)
from src.app.repositories.permission_repository import IPermissionRepository
from src.app.repositories.role_repository import IRoleRepository
from src.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    enterprises: IEnterpriseRepository
    memberships: IMembershipRepository
    join_requests: IJoinRequestRepository
    permissions: IPermissionRepository
    enterprise_permissions: IEnterprisePermissionRepository
    permission_assignments: IPermissionAssignmentRepository
    roles: IRoleRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
