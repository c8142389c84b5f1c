import pytest
from httpx import AsyncClient

from tests.utils.auth import auth_headers


@pytest.mark.asyncio
async def test_join_flow_over_http(client: AsyncClient, create_user):
    owner_id = await create_user("owner@acme.test")
    applicant_id = await create_user("applicant@acme.test")

    created = await client.post(
        "/api/enterprises", json={"name": "Acme"}, headers=auth_headers(owner_id)
    )
    assert created.status_code == 201
    enterprise_id = created.json()["enterprise"]["id"]
    assert created.json()["membership"]["is_owner"] is True

    requested = await client.post(
        f"/api/enterprises/{enterprise_id}/join-requests", headers=auth_headers(applicant_id)
    )
    assert requested.status_code == 201
    request_id = requested.json()["id"]

    pending = await client.get(
        f"/api/enterprises/{enterprise_id}/join-requests", headers=auth_headers(owner_id)
    )
    assert [r["id"] for r in pending.json()] == [request_id]

    handled = await client.post(
        f"/api/enterprises/join-requests/{request_id}/handle",
        json={"action": "APPROVE"},
        headers=auth_headers(owner_id),
    )
    assert handled.status_code == 200
    assert handled.json()["status"] == "APPROVED"

    mine = await client.get("/api/enterprises/me", headers=auth_headers(applicant_id))
    assert mine.json()["has_enterprise"] is True
    assert mine.json()["is_owner"] is False

    detail = await client.get(f"/api/enterprises/{enterprise_id}", headers=auth_headers(owner_id))
    assert detail.json()["member_count"] == 2


@pytest.mark.asyncio
async def test_unknown_enterprise_returns_error_body(client: AsyncClient, create_user):
    user_id = await create_user("lost@acme.test")

    response = await client.get(
        "/api/enterprises/00000000-0000-0000-0000-000000000000", headers=auth_headers(user_id)
    )

    assert response.status_code == 404
    assert response.json() == {
        "error": {"code": "ENTERPRISE_NOT_FOUND", "message": "Enterprise not found"}
    }


@pytest.mark.asyncio
async def test_second_enterprise_is_conflict(client: AsyncClient, create_user):
    user_id = await create_user("busy@acme.test")
    await client.post("/api/enterprises", json={"name": "Acme"}, headers=auth_headers(user_id))

    response = await client.post(
        "/api/enterprises", json={"name": "Globex"}, headers=auth_headers(user_id)
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_IN_ENTERPRISE"


@pytest.mark.asyncio
async def test_owner_leave_is_forbidden(client: AsyncClient, create_user):
    user_id = await create_user("captain@acme.test")
    await client.post("/api/enterprises", json={"name": "Acme"}, headers=auth_headers(user_id))

    response = await client.post("/api/enterprises/leave", headers=auth_headers(user_id))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "OWNER_CANNOT_LEAVE"


@pytest.mark.asyncio
async def test_requests_without_token_are_rejected(client: AsyncClient):
    response = await client.get("/api/enterprises/me")

    assert response.status_code in (401, 403)


@pytest.mark.asyncio
async def test_invalid_token_is_unauthorized(client: AsyncClient):
    response = await client.get(
        "/api/enterprises/me", headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401
