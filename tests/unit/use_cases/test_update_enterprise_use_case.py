import logging
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from src.app.use_cases.enterprises import UpdateEnterpriseUseCase
from src.domain.entities import AuditAction, Enterprise
from src.domain.errors import Conflict
from tests.utils.factories import make_membership


@pytest.fixture
def enterprise():
    return Enterprise(id=uuid4(), name="Acme")


@pytest.fixture
def owner(enterprise):
    return make_membership(enterprise_id=enterprise.id, is_owner=True)


@pytest.fixture
def ready_uow(mock_uow, enterprise, owner):
    mock_uow.memberships.get_by_user_id.return_value = owner
    mock_uow.enterprises.get_by_id.return_value = enterprise
    mock_uow.enterprises.get_active_by_name.return_value = None
    mock_uow.enterprises.update.side_effect = lambda e: e
    return mock_uow


@pytest.mark.asyncio
async def test_owner_renames_enterprise(ready_uow, enterprise, owner, caplog):
    with caplog.at_level(logging.INFO):
        result = await UpdateEnterpriseUseCase(ready_uow).execute(
            owner.user_id, enterprise.id, name="Globex"
        )

    assert result.value.name == "Globex"
    audit = ready_uow.audit_events.record.call_args.args[0]
    assert audit.action == AuditAction.ENTERPRISE_UPDATE.value
    assert audit.changes["name"] == {"old": "Acme", "new": "Globex"}
    ready_uow.commit.assert_called_once()
    assert f"Enterprise {enterprise.id} updated by owner {owner.user_id}" in caplog.messages


@pytest.mark.asyncio
async def test_rename_race_with_taken_name_is_conflict(ready_uow, enterprise, owner):
    ready_uow.enterprises.get_active_by_name.side_effect = [None, Enterprise(name="Globex")]
    ready_uow.enterprises.update.side_effect = IntegrityError(
        "UPDATE", {}, Exception("uq_enterprise_active_name")
    )

    result = await UpdateEnterpriseUseCase(ready_uow).execute(
        owner.user_id, enterprise.id, name="Globex"
    )

    assert isinstance(result.error, Conflict)
    assert result.error.code == "ENTERPRISE_NAME_TAKEN"
    ready_uow.rollback.assert_called_once()


@pytest.mark.asyncio
async def test_integrity_error_on_details_only_propagates(ready_uow, enterprise, owner):
    ready_uow.enterprises.update.side_effect = IntegrityError(
        "UPDATE", {}, Exception("NOT NULL constraint failed")
    )

    with pytest.raises(IntegrityError):
        await UpdateEnterpriseUseCase(ready_uow).execute(
            owner.user_id, enterprise.id, description="Widgets"
        )

    ready_uow.commit.assert_not_called()
