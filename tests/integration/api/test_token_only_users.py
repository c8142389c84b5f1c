from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError

from src.depends import get_unit_of_work
from tests.utils.auth import auth_headers
from tests.utils.failing_uow import FailingUnitOfWork


async def _team_from_tokens(client: AsyncClient):
    """Owner and one member known only by their bearer tokens"""
    owner_id, member_id = uuid4(), uuid4()

    created = await client.post(
        "/api/enterprises", json={"name": "Acme"}, headers=auth_headers(owner_id)
    )
    assert created.status_code == 201
    enterprise_id = created.json()["enterprise"]["id"]

    requested = await client.post(
        f"/api/enterprises/{enterprise_id}/join-requests", headers=auth_headers(member_id)
    )
    assert requested.status_code == 201

    handled = await client.post(
        f"/api/enterprises/join-requests/{requested.json()['id']}/handle",
        json={"action": "APPROVE"},
        headers=auth_headers(owner_id),
    )
    assert handled.status_code == 200

    return owner_id, member_id


@pytest.mark.asyncio
async def test_role_listings_include_members_without_email(client: AsyncClient, catalog):
    owner_id, member_id = await _team_from_tokens(client)
    read_users = catalog["READ_USERS"]

    role = await client.post(
        "/api/roles",
        json={"name": "Auditor", "permission_ids": [str(read_users)]},
        headers=auth_headers(owner_id),
    )
    role_id = role.json()["id"]
    assigned = await client.post(
        f"/api/roles/{role_id}/users/{member_id}", headers=auth_headers(owner_id)
    )

    check = await client.get(
        "/api/permissions/check",
        params={"action": "READ", "resource": "USERS"},
        headers=auth_headers(member_id),
    )
    detail = await client.get(f"/api/roles/{role_id}", headers=auth_headers(owner_id))
    holders = await client.get(
        f"/api/permission-assignments/holders/{read_users}", headers=auth_headers(owner_id)
    )

    assert assigned.status_code == 200
    assert check.json()["allowed"] is True
    assert detail.json()["users"] == [{"id": str(member_id), "email": None}]
    assert [h["user_id"] for h in holders.json()["via_roles"]] == [str(member_id)]


@pytest.mark.asyncio
async def test_direct_grant_to_token_only_member(client: AsyncClient, catalog):
    owner_id, member_id = await _team_from_tokens(client)

    granted = await client.post(
        "/api/permission-assignments",
        json={"user_id": str(member_id), "permission_id": str(catalog["UPDATE_USERS"])},
        headers=auth_headers(owner_id),
    )
    holders = await client.get(
        f"/api/permission-assignments/holders/{catalog['UPDATE_USERS']}",
        headers=auth_headers(owner_id),
    )

    assert granted.status_code == 201
    assert [h["user_id"] for h in holders.json()["direct"]] == [str(member_id)]


@pytest.mark.asyncio
async def test_second_enterprise_for_token_only_user_is_conflict(client: AsyncClient):
    user_id = uuid4()
    await client.post("/api/enterprises", json={"name": "Acme"}, headers=auth_headers(user_id))

    response = await client.post(
        "/api/enterprises", json={"name": "Globex"}, headers=auth_headers(user_id)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_IN_ENTERPRISE"


@pytest.mark.asyncio
async def test_integrity_error_without_collision_is_database_error(
    app, client: AsyncClient, db_session
):
    async def override_get_unit_of_work():
        yield FailingUnitOfWork(
            db_session,
            "memberships",
            "create",
            IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed")),
        )

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    response = await client.post(
        "/api/enterprises", json={"name": "Acme"}, headers=auth_headers(uuid4())
    )

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "DATABASE_ERROR", "message": "Internal server error"}
    }
