from unittest.mock import AsyncMock, MagicMock

import pytest

REPOSITORIES = (
    "users",
    "enterprises",
    "memberships",
    "join_requests",
    "permissions",
    "enterprise_permissions",
    "permission_assignments",
    "roles",
    "audit_events",
)


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable
    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())

    return uow
