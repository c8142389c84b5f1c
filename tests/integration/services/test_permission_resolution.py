from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.permission_resolver import PermissionResolver
from src.app.use_cases.enterprise_permissions import AssignEnterprisePermissionUseCase
from src.app.use_cases.permission_assignments import AssignUserPermissionUseCase
from src.app.use_cases.roles import AssignRoleToUserUseCase, CreateRoleUseCase
from src.domain.base import utc_now
from src.domain.entities import PermissionAction, ResourceType

READ, USERS = PermissionAction.READ, ResourceType.USERS


async def check(uow, user_id, action=READ, resource=USERS, clock=utc_now):
    async with uow:
        return await PermissionResolver(uow, clock).check_permission(user_id, action, resource)


@pytest.mark.asyncio
async def test_user_without_enterprise_is_denied(uow, catalog):
    assert await check(uow, uuid4()) is False


@pytest.mark.asyncio
async def test_owner_is_allowed_everything(uow, build_team, catalog):
    team = await build_team(members=0)

    assert await check(uow, team.owner_id, PermissionAction.DELETE, ResourceType.SETTINGS)


@pytest.mark.asyncio
async def test_member_without_grants_is_denied(uow, build_team, catalog):
    team = await build_team()

    assert await check(uow, team.member_ids[0]) is False


@pytest.mark.asyncio
async def test_enterprise_grant_allows_every_member(uow, build_team, catalog):
    team = await build_team(members=2)
    await AssignEnterprisePermissionUseCase(uow).execute(team.owner_id, catalog["READ_USERS"])

    for member_id in team.member_ids:
        assert await check(uow, member_id)
    assert await check(uow, team.member_ids[0], PermissionAction.UPDATE) is False


@pytest.mark.asyncio
async def test_enterprise_grant_stops_at_expiry(uow, build_team, catalog):
    team = await build_team()
    expires_at = utc_now() + timedelta(hours=1)
    await AssignEnterprisePermissionUseCase(uow).execute(
        team.owner_id, catalog["READ_USERS"], expires_at=expires_at
    )
    member_id = team.member_ids[0]

    assert await check(uow, member_id)
    assert await check(uow, member_id, clock=lambda: expires_at) is False
    assert await check(uow, member_id, clock=lambda: expires_at + timedelta(days=1)) is False


@pytest.mark.asyncio
async def test_direct_assignment_allows_only_its_holder(uow, build_team, catalog):
    team = await build_team(members=2)
    holder, other = team.member_ids
    await AssignUserPermissionUseCase(uow).execute(
        team.owner_id, holder, catalog["READ_USERS"]
    )

    assert await check(uow, holder)
    assert await check(uow, other) is False


@pytest.mark.asyncio
async def test_expired_direct_assignment_is_denied(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    await AssignUserPermissionUseCase(uow).execute(
        team.owner_id,
        member_id,
        catalog["READ_USERS"],
        expires_at=utc_now() - timedelta(minutes=1),
    )

    assert await check(uow, member_id) is False


@pytest.mark.asyncio
async def test_role_permission_allows_holder(uow, build_team, catalog):
    team = await build_team(members=2)
    holder, other = team.member_ids
    role = await CreateRoleUseCase(uow).execute(
        team.owner_id, "Reader", permission_ids=[catalog["READ_USERS"]]
    )
    await AssignRoleToUserUseCase(uow).execute(team.owner_id, holder, role.value.id)

    assert await check(uow, holder)
    assert await check(uow, other) is False


@pytest.mark.asyncio
async def test_any_channel_is_enough(uow, build_team, catalog):
    team = await build_team()
    member_id = team.member_ids[0]
    await AssignEnterprisePermissionUseCase(uow).execute(
        team.owner_id, catalog["READ_USERS"], expires_at=utc_now() - timedelta(minutes=1)
    )
    role = await CreateRoleUseCase(uow).execute(
        team.owner_id, "Reader", permission_ids=[catalog["READ_USERS"]]
    )
    await AssignRoleToUserUseCase(uow).execute(team.owner_id, member_id, role.value.id)

    assert await check(uow, member_id)


@pytest.mark.asyncio
async def test_grants_do_not_leak_across_enterprises(uow, build_team, catalog):
    acme = await build_team("Acme")
    globex = await build_team("Globex")
    await AssignEnterprisePermissionUseCase(uow).execute(acme.owner_id, catalog["READ_USERS"])

    assert await check(uow, acme.member_ids[0])
    assert await check(uow, globex.member_ids[0]) is False
