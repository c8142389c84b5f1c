from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.audit_event_repository import AuditEventRepository
from src.adapter.repositories.enterprise_permission_repository import (
    EnterprisePermissionRepository,
)
from src.adapter.repositories.enterprise_repository import EnterpriseRepository
from src.adapter.repositories.join_request_repository import JoinRequestRepository
from src.adapter.repositories.membership_repository import MembershipRepository
from src.adapter.repositories.permission_assignment_repository import (
    PermissionAssignmentRepository,
)
from src.adapter.repositories.permission_repository import PermissionRepository
from src.adapter.repositories.role_repository import RoleRepository
from src.adapter.repositories.user_repository import UserRepository
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.enterprises = EnterpriseRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.join_requests = JoinRequestRepository(self.session)
        self.permissions = PermissionRepository(self.session)
        self.enterprise_permissions = EnterprisePermissionRepository(self.session)
        self.permission_assignments = PermissionAssignmentRepository(self.session)
        self.roles = RoleRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
