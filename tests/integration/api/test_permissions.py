import pytest
from httpx import AsyncClient

from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_check_reports_decision(client: AsyncClient, build_team, catalog):
    team = await build_team()

    owner = await client.get(
        "/api/permissions/check",
        params={"action": "DELETE", "resource": "SETTINGS"},
        headers=auth_headers(team.owner_id),
    )
    member = await client.get(
        "/api/permissions/check",
        params={"action": "DELETE", "resource": "SETTINGS"},
        headers=auth_headers(team.member_ids[0]),
    )

    assert owner.json() == {"action": "DELETE", "resource": "SETTINGS", "allowed": True}
    assert member.json()["allowed"] is False


@pytest.mark.asyncio
async def test_check_rejects_unknown_action(client: AsyncClient, create_user):
    user_id = await create_user("typo@acme.test")

    response = await client.get(
        "/api/permissions/check",
        params={"action": "FLY", "resource": "USERS"},
        headers=auth_headers(user_id),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_seed_requires_owner(client: AsyncClient, build_team):
    team = await build_team()

    denied = await client.post("/api/permissions/seed", headers=auth_headers(team.member_ids[0]))
    seeded = await client.post("/api/permissions/seed", headers=auth_headers(team.owner_id))
    again = await client.post("/api/permissions/seed", headers=auth_headers(team.owner_id))

    assert denied.status_code == 403
    assert seeded.json() == {"created": True, "count": 35}
    assert again.json() == {"created": False, "count": 35}


@pytest.mark.asyncio
async def test_enterprise_grant_over_http(client: AsyncClient, build_team, catalog):
    team = await build_team()

    granted = await client.post(
        "/api/enterprise-permissions",
        json={"permission_id": str(catalog["READ_USERS"])},
        headers=auth_headers(team.owner_id),
    )
    duplicate = await client.post(
        "/api/enterprise-permissions",
        json={"permission_id": str(catalog["READ_USERS"])},
        headers=auth_headers(team.owner_id),
    )
    check = await client.get(
        "/api/permissions/check",
        params={"action": "READ", "resource": "USERS"},
        headers=auth_headers(team.member_ids[0]),
    )

    assert granted.status_code == 201
    assert duplicate.status_code == 409
    assert check.json()["allowed"] is True
