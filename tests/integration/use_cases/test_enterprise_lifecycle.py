from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

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
    RemoveMemberUseCase,
    RequestToJoinUseCase,
    TransferOwnershipUseCase,
)
from src.app.use_cases.permission_assignments import (
    AssignUserPermissionUseCase,
    ListUserPermissionsUseCase,
)
from src.app.use_cases.roles import (
    AssignRoleToUserUseCase,
    CreateRoleUseCase,
    GetRoleUseCase,
)
from src.domain.entities import JoinRequestAction, JoinRequestStatus
from src.domain.errors import Conflict, Forbidden, NotFound
from tests.utils.failing_uow import FailingUnitOfWork


@pytest.mark.asyncio
async def test_create_makes_creator_the_owner(uow, create_user):
    user_id = await create_user("founder@acme.test")

    result = await CreateEnterpriseUseCase(uow).execute(user_id, "Acme", description="Widgets")

    assert result.is_ok()
    assert result.value.membership.is_owner is True
    mine = await GetMyEnterpriseUseCase(uow).execute(user_id)
    assert mine.value.has_enterprise is True
    assert mine.value.is_owner is True
    assert mine.value.enterprise.name == "Acme"


@pytest.mark.asyncio
async def test_user_can_belong_to_one_enterprise_only(uow, build_team):
    team = await build_team()

    result = await CreateEnterpriseUseCase(uow).execute(team.member_ids[0], "Second")

    assert isinstance(result.error, Conflict)
    assert result.error.code == "ALREADY_IN_ENTERPRISE"


@pytest.mark.asyncio
async def test_enterprise_names_are_unique(uow, build_team, create_user):
    await build_team("Acme", members=0)
    user_id = await create_user("copycat@acme.test")

    result = await CreateEnterpriseUseCase(uow).execute(user_id, "Acme")

    assert isinstance(result.error, Conflict)
    mine = await GetMyEnterpriseUseCase(uow).execute(user_id)
    assert mine.value.has_enterprise is False


@pytest.mark.asyncio
async def test_detail_lists_members(uow, build_team):
    team = await build_team(members=2)

    detail = await GetEnterpriseUseCase(uow).execute(team.enterprise_id)

    assert detail.value.member_count == 3
    owners = [m.user_id for m in detail.value.members if m.is_owner]
    assert owners == [team.owner_id]


@pytest.mark.asyncio
async def test_deleted_enterprise_is_hidden_from_listing_and_joins(uow, build_team, create_user):
    team = await build_team(members=0)
    await DeleteEnterpriseUseCase(uow).execute(team.owner_id, team.enterprise_id)
    newcomer = await create_user("late@acme.test")

    listing = await ListEnterprisesUseCase(uow).execute()
    joined = await RequestToJoinUseCase(uow).execute(newcomer, team.enterprise_id)

    assert listing.value == []
    assert isinstance(joined.error, NotFound)


@pytest.mark.asyncio
async def test_rejected_request_is_reused_on_resubmit(uow, build_team, create_user):
    team = await build_team(members=0)
    user_id = await create_user("applicant@acme.test")

    first = await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)
    request_id = first.value.id
    rejected = await HandleJoinRequestUseCase(uow).execute(
        team.owner_id, request_id, JoinRequestAction.REJECT
    )
    again = await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)

    assert rejected.value.status == JoinRequestStatus.REJECTED.value
    assert again.value.id == request_id
    assert again.value.status == JoinRequestStatus.PENDING
    assert again.value.processed_by is None


@pytest.mark.asyncio
async def test_pending_request_cannot_be_duplicated(uow, build_team, create_user):
    team = await build_team(members=0)
    user_id = await create_user("eager@acme.test")
    await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)

    result = await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)

    assert result.error.code == "REQUEST_ALREADY_PENDING"


@pytest.mark.asyncio
async def test_processed_request_cannot_be_handled_twice(uow, build_team, create_user):
    team = await build_team(members=0)
    user_id = await create_user("twice@acme.test")
    request = await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)
    handle = HandleJoinRequestUseCase(uow)
    await handle.execute(team.owner_id, request.value.id, JoinRequestAction.APPROVE)

    result = await handle.execute(team.owner_id, request.value.id, JoinRequestAction.REJECT)

    assert result.error.code == "REQUEST_ALREADY_PROCESSED"


@pytest.mark.asyncio
async def test_requester_cancels_pending_request(uow, build_team, create_user):
    team = await build_team(members=0)
    user_id = await create_user("undecided@acme.test")
    request = await RequestToJoinUseCase(uow).execute(user_id, team.enterprise_id)

    cancelled = await CancelJoinRequestUseCase(uow).execute(user_id, request.value.id)
    handled = await HandleJoinRequestUseCase(uow).execute(
        team.owner_id, request.value.id, JoinRequestAction.APPROVE
    )

    assert cancelled.value.status == "cancelled"
    assert isinstance(handled.error, NotFound)


@pytest.mark.asyncio
async def test_transfer_ownership_swaps_owner(uow, build_team):
    team = await build_team()
    member_id = team.member_ids[0]

    result = await TransferOwnershipUseCase(uow).execute(team.owner_id, member_id)

    assert result.value.status == "transferred"
    previous = await GetMyEnterpriseUseCase(uow).execute(team.owner_id)
    current = await GetMyEnterpriseUseCase(uow).execute(member_id)
    assert previous.value.is_owner is False
    assert current.value.is_owner is True


@pytest.mark.asyncio
async def test_transfer_to_outsider_changes_nothing(uow, build_team):
    acme = await build_team("Acme")
    globex = await build_team("Globex")

    result = await TransferOwnershipUseCase(uow).execute(acme.owner_id, globex.member_ids[0])

    assert isinstance(result.error, NotFound)
    mine = await GetMyEnterpriseUseCase(uow).execute(acme.owner_id)
    assert mine.value.is_owner is True


@pytest.mark.asyncio
async def test_owner_must_transfer_before_leaving(uow, build_team):
    team = await build_team()

    blocked = await LeaveEnterpriseUseCase(uow).execute(team.owner_id)
    await TransferOwnershipUseCase(uow).execute(team.owner_id, team.member_ids[0])
    left = await LeaveEnterpriseUseCase(uow).execute(team.owner_id)

    assert isinstance(blocked.error, Forbidden)
    assert left.value.status == "left"
    mine = await GetMyEnterpriseUseCase(uow).execute(team.owner_id)
    assert mine.value.has_enterprise is False


@pytest.mark.asyncio
async def test_leaving_drops_direct_permissions_and_roles(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    await AssignUserPermissionUseCase(uow).execute(
        team.owner_id, member_id, catalog["READ_USERS"]
    )
    role = await CreateRoleUseCase(uow).execute(team.owner_id, "Reader")
    role_id = role.value.id
    await AssignRoleToUserUseCase(uow).execute(team.owner_id, member_id, role_id)

    left = await LeaveEnterpriseUseCase(uow).execute(member_id)

    assert left.value.revoked_permissions == 1
    assert left.value.removed_roles == 1
    detail = await GetRoleUseCase(uow).execute(team.owner_id, role_id)
    assert detail.value.users == []


@pytest.mark.asyncio
async def test_removed_member_can_join_elsewhere(uow, build_team):
    acme = await build_team("Acme")
    globex = await build_team("Globex", members=0)
    member_id = acme.member_ids[0]

    removed = await RemoveMemberUseCase(uow).execute(acme.owner_id, member_id)
    request = await RequestToJoinUseCase(uow).execute(member_id, globex.enterprise_id)

    assert removed.value.status == "removed"
    assert request.is_ok()
    listing = await ListUserPermissionsUseCase(uow).execute(acme.owner_id, member_id)
    assert isinstance(listing.error, NotFound)


@pytest.mark.asyncio
async def test_owner_cannot_remove_themselves(uow, build_team):
    team = await build_team()

    result = await RemoveMemberUseCase(uow).execute(team.owner_id, team.owner_id)

    assert isinstance(result.error, Forbidden)
    assert result.error.code == "CANNOT_REMOVE_OWNER"


@pytest.mark.asyncio
async def test_former_owner_loses_owner_rights(uow, build_team):
    team = await build_team()
    await TransferOwnershipUseCase(uow).execute(team.owner_id, team.member_ids[0])

    result = await RemoveMemberUseCase(uow).execute(team.owner_id, team.member_ids[0])

    assert isinstance(result.error, Forbidden)
    assert result.error.code == "NOT_OWNER"


def _write_failure(statement: str) -> OperationalError:
    return OperationalError(statement, {}, Exception("disk I/O error"))


@pytest.mark.asyncio
async def test_failed_promotion_keeps_the_old_owner(uow, db_session, build_team):
    team = await build_team()
    failing = FailingUnitOfWork(
        db_session,
        "memberships",
        "update",
        _write_failure("UPDATE memberships"),
        on_call=2,
    )

    with pytest.raises(OperationalError):
        await TransferOwnershipUseCase(failing).execute(team.owner_id, team.member_ids[0])

    detail = await GetEnterpriseUseCase(uow).execute(team.enterprise_id)
    owners = [m.user_id for m in detail.value.members if m.is_owner]
    assert owners == [team.owner_id]


@pytest.mark.asyncio
async def test_failed_approval_leaves_request_pending(uow, db_session, build_team):
    team = await build_team(members=0)
    applicant_id = uuid4()
    request = await RequestToJoinUseCase(uow).execute(applicant_id, team.enterprise_id)
    request_id = request.value.id
    failing = FailingUnitOfWork(
        db_session, "join_requests", "update", _write_failure("UPDATE join_requests")
    )

    with pytest.raises(OperationalError):
        await HandleJoinRequestUseCase(failing).execute(
            team.owner_id, request_id, JoinRequestAction.APPROVE
        )

    detail = await GetEnterpriseUseCase(uow).execute(team.enterprise_id)
    assert detail.value.member_count == 1
    mine = await GetMyEnterpriseUseCase(uow).execute(applicant_id)
    assert mine.value.has_enterprise is False
    requests = await ListMyJoinRequestsUseCase(uow).execute(applicant_id)
    assert [(r.id, r.status) for r in requests.value] == [
        (request_id, JoinRequestStatus.PENDING)
    ]
