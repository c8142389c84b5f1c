from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.enterprises import CreateEnterpriseUseCase
from src.domain.entities import AuditAction, Enterprise
from src.domain.errors import Conflict
from tests.utils.factories import make_membership


@pytest.fixture
def ready_uow(mock_uow):
    mock_uow.memberships.get_by_user_id.return_value = None
    mock_uow.enterprises.get_active_by_name.return_value = None
    mock_uow.enterprises.create.side_effect = lambda enterprise: enterprise
    mock_uow.memberships.create.side_effect = lambda membership: membership
    return mock_uow


@pytest.mark.asyncio
async def test_creator_becomes_owner(ready_uow):
    user_id = uuid4()

    result = await CreateEnterpriseUseCase(ready_uow).execute(
        user_id, "Acme", description="Widgets"
    )

    assert result.is_ok()
    assert result.value.enterprise.name == "Acme"
    assert result.value.enterprise.is_active is True
    assert result.value.membership.user_id == user_id
    assert result.value.membership.is_owner is True
    assert result.value.membership.enterprise_id == result.value.enterprise.id
    ready_uow.users.ensure.assert_called_once_with(user_id)

    audit = ready_uow.audit_events.record.call_args.args[0]
    assert audit.action == AuditAction.ENTERPRISE_CREATE.value
    ready_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_user_with_membership_cannot_create(ready_uow):
    ready_uow.memberships.get_by_user_id.return_value = make_membership()

    result = await CreateEnterpriseUseCase(ready_uow).execute(uuid4(), "Acme")

    assert isinstance(result.error, Conflict)
    assert result.error.code == "ALREADY_IN_ENTERPRISE"
    ready_uow.enterprises.create.assert_not_called()
    ready_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_active_name_clash_is_conflict(ready_uow):
    ready_uow.enterprises.get_active_by_name.return_value = Enterprise(name="Acme")

    result = await CreateEnterpriseUseCase(ready_uow).execute(uuid4(), "Acme")

    assert isinstance(result.error, Conflict)
    assert result.error.code == "ENTERPRISE_NAME_TAKEN"


@pytest.mark.asyncio
async def test_unique_index_race_on_name_becomes_conflict(ready_uow):
    ready_uow.enterprises.get_active_by_name.side_effect = [None, Enterprise(name="Acme")]
    ready_uow.enterprises.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("uq_enterprise_active_name")
    )

    result = await CreateEnterpriseUseCase(ready_uow).execute(uuid4(), "Acme")

    assert isinstance(result.error, Conflict)
    assert result.error.code == "ENTERPRISE_NAME_TAKEN"
    ready_uow.rollback.assert_called_once()
    ready_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unique_index_race_on_membership_becomes_conflict(ready_uow):
    ready_uow.memberships.get_by_user_id.side_effect = [None, make_membership()]
    ready_uow.memberships.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("uq_membership_user")
    )

    result = await CreateEnterpriseUseCase(ready_uow).execute(uuid4(), "Acme")

    assert result.error.code == "ALREADY_IN_ENTERPRISE"
    ready_uow.rollback.assert_called_once()


@pytest.mark.asyncio
async def test_integrity_error_without_colliding_row_propagates(ready_uow):
    ready_uow.memberships.create.side_effect = IntegrityError(
        "INSERT", {}, Exception("FOREIGN KEY constraint failed")
    )

    with pytest.raises(IntegrityError):
        await CreateEnterpriseUseCase(ready_uow).execute(uuid4(), "Acme")

    ready_uow.rollback.assert_called_once()
    ready_uow.commit.assert_not_called()
