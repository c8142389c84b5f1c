import pytest

from src.app.use_cases.enterprise_permissions import (
    AssignEnterprisePermissionUseCase,
    BulkAssignEnterprisePermissionsUseCase,
    ListAvailablePermissionsUseCase,
    ListEnterprisePermissionsUseCase,
    RevokeEnterprisePermissionUseCase,
)
from src.app.use_cases.permission_assignments import (
    AssignUserPermissionUseCase,
    BulkAssignUserPermissionsUseCase,
    CopyUserPermissionsUseCase,
    ListUsersWithPermissionUseCase,
    RevokeAllUserPermissionsUseCase,
)
from src.app.use_cases.permissions import (
    GetMyPermissionsUseCase,
    SeedDefaultPermissionsUseCase,
)
from src.app.use_cases.roles import AssignRoleToUserUseCase, CreateRoleUseCase
from src.domain.entities import PermissionSource
from src.domain.errors import Conflict, Forbidden


@pytest.mark.asyncio
async def test_seeding_twice_keeps_one_catalog(uow):
    first = await SeedDefaultPermissionsUseCase(uow).execute()
    second = await SeedDefaultPermissionsUseCase(uow).execute()

    assert first.value.created is True
    assert first.value.count == 35
    assert second.value.created is False
    assert second.value.count == 35


@pytest.mark.asyncio
async def test_enterprise_bulk_assign_skips_granted(uow, build_team, catalog):
    team = await build_team(members=0)
    await AssignEnterprisePermissionUseCase(uow).execute(team.owner_id, catalog["READ_USERS"])
    requested = [catalog["READ_USERS"], catalog["READ_ROLES"], catalog["UPDATE_USERS"]]

    result = await BulkAssignEnterprisePermissionsUseCase(uow).execute(team.owner_id, requested)
    repeated = await BulkAssignEnterprisePermissionsUseCase(uow).execute(
        team.owner_id, requested
    )

    assert result.value.assigned == 2
    assert result.value.skipped == 1
    assert isinstance(repeated.error, Conflict)
    listing = await ListEnterprisePermissionsUseCase(uow).execute(team.owner_id)
    assert listing.value.total == 3


@pytest.mark.asyncio
async def test_available_splits_catalog_by_grant(uow, build_team, catalog):
    team = await build_team()
    await AssignEnterprisePermissionUseCase(uow).execute(team.owner_id, catalog["READ_USERS"])

    result = await ListAvailablePermissionsUseCase(uow).execute(team.member_ids[0])

    assert [p.name for p in result.value.assigned] == ["READ_USERS"]
    assert len(result.value.available) == 34


@pytest.mark.asyncio
async def test_grant_of_other_enterprise_cannot_be_revoked(uow, build_team, catalog):
    acme = await build_team("Acme", members=0)
    globex = await build_team("Globex", members=0)
    grant = await AssignEnterprisePermissionUseCase(uow).execute(
        acme.owner_id, catalog["READ_USERS"]
    )

    result = await RevokeEnterprisePermissionUseCase(uow).execute(globex.owner_id, grant.value.id)

    assert isinstance(result.error, Forbidden)


@pytest.mark.asyncio
async def test_user_bulk_assign_skips_held(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    await AssignUserPermissionUseCase(uow).execute(team.owner_id, member_id, catalog["READ_USERS"])
    requested = [catalog["READ_USERS"], catalog["READ_ROLES"], catalog["CREATE_ROLES"]]

    result = await BulkAssignUserPermissionsUseCase(uow).execute(
        team.owner_id, member_id, requested
    )
    repeated = await BulkAssignUserPermissionsUseCase(uow).execute(
        team.owner_id, member_id, requested
    )

    assert (result.value.assigned, result.value.skipped) == (2, 1)
    assert repeated.error.code == "PERMISSIONS_ALREADY_ASSIGNED"


@pytest.mark.asyncio
async def test_copy_brings_target_up_to_source(uow, build_team, catalog):
    team = await build_team(members=2)
    source, target = team.member_ids
    await BulkAssignUserPermissionsUseCase(uow).execute(
        team.owner_id, source, [catalog["READ_USERS"], catalog["READ_ROLES"]]
    )
    await AssignUserPermissionUseCase(uow).execute(team.owner_id, target, catalog["READ_USERS"])

    result = await CopyUserPermissionsUseCase(uow).execute(team.owner_id, source, target)

    assert (result.value.copied, result.value.skipped) == (1, 1)
    mine = await GetMyPermissionsUseCase(uow).execute(target)
    assert mine.value.total == 2


@pytest.mark.asyncio
async def test_direct_assignment_wins_over_role_in_my_permissions(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    role = await CreateRoleUseCase(uow).execute(
        team.owner_id, "Reader", permission_ids=[catalog["READ_USERS"], catalog["READ_ROLES"]]
    )
    await AssignRoleToUserUseCase(uow).execute(team.owner_id, member_id, role.value.id)
    await AssignUserPermissionUseCase(uow).execute(team.owner_id, member_id, catalog["READ_USERS"])

    result = await GetMyPermissionsUseCase(uow).execute(member_id)

    assert result.value.total == 2
    users = result.value.permissions["USERS"]
    assert [p.source for p in users] == [PermissionSource.direct]
    roles = result.value.permissions["ROLES"]
    assert roles[0].source == PermissionSource.role
    assert roles[0].role_name == "Reader"


@pytest.mark.asyncio
async def test_holders_lists_both_channels(uow, build_team, catalog):
    team = await build_team(members=2)
    direct_holder, role_holder = team.member_ids
    await AssignUserPermissionUseCase(uow).execute(
        team.owner_id, direct_holder, catalog["READ_USERS"]
    )
    role = await CreateRoleUseCase(uow).execute(
        team.owner_id, "Reader", permission_ids=[catalog["READ_USERS"]]
    )
    await AssignRoleToUserUseCase(uow).execute(team.owner_id, role_holder, role.value.id)

    result = await ListUsersWithPermissionUseCase(uow).execute(
        team.owner_id, catalog["READ_USERS"]
    )

    assert [h.user_id for h in result.value.direct] == [direct_holder]
    assert [h.user_id for h in result.value.via_roles] == [role_holder]


@pytest.mark.asyncio
async def test_revoke_all_clears_direct_assignments(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    await BulkAssignUserPermissionsUseCase(uow).execute(
        team.owner_id, member_id, [catalog["READ_USERS"], catalog["READ_ROLES"]]
    )

    result = await RevokeAllUserPermissionsUseCase(uow).execute(team.owner_id, member_id)

    assert result.value.revoked == 2
    mine = await GetMyPermissionsUseCase(uow).execute(member_id)
    assert mine.value.total == 0
