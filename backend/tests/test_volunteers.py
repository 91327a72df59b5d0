"""Volunteer sign-up, profile access and admin review tests."""

import uuid

from httpx import AsyncClient

from charity_api.db.session import async_session_factory
from charity_api.models.user import User
from tests.helpers import auth_headers, make_admin, unique_identity

VOLUNTEER = {
    "first_name": "Kavya",
    "last_name": "Menon",
    "email": "Kavya.Menon@Example.com",
    "phone": "+91 99000 11223",
    "city": "Kochi",
    "country": "India",
    "skills": ["first aid", "  photography ", ""],
    "interests": ["Education", "Event Support", "Education"],
    "availability": "weekends",
    "motivation": "I want to help with literacy camps.",
}


async def _register(client: AsyncClient, **overrides) -> dict:
    resp = await client.post("/api/volunteers/register", json={**VOLUNTEER, **overrides})
    assert resp.status_code == 201, resp.text
    return resp.json()["volunteer"]


async def test_register_is_public(client: AsyncClient):
    resp = await client.post("/api/volunteers/register", json=VOLUNTEER)
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "Volunteer registration successful"
    volunteer = data["volunteer"]
    assert volunteer["email"] == "kavya.menon@example.com"
    assert volunteer["status"] == "pending"
    assert volunteer["skills"] == ["first aid", "photography"]
    assert volunteer["interests"] == ["Education", "Event Support"]
    assert volunteer["hours_completed"] == 0
    assert volunteer["user_id"] is None


async def test_register_duplicate_email(client: AsyncClient):
    await _register(client)
    resp = await client.post(
        "/api/volunteers/register", json={**VOLUNTEER, "email": "kavya.menon@example.com"}
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Volunteer with this email already exists"


async def test_register_validation(client: AsyncClient):
    for patch in (
        {"availability": "evenings"},
        {"interests": ["Knitting"]},
        {"phone": "555"},
        {"motivation": ""},
        {"status": "active"},
    ):
        resp = await client.post("/api/volunteers/register", json={**VOLUNTEER, **patch})
        assert resp.status_code == 422, patch


async def test_register_links_existing_account(client: AsyncClient):
    sub, email = unique_identity()
    async with async_session_factory() as session:
        session.add(User(auth_sub=sub, email=email, full_name="Kavya Menon"))
        await session.commit()

    volunteer = await _register(client, email=email)
    assert volunteer["user_id"] is not None

    resp = await client.get("/api/volunteers/my-profile", headers=auth_headers(sub, email))
    assert resp.status_code == 200
    assert resp.json()["id"] == volunteer["id"]


async def test_my_profile_by_email_and_missing(client: AsyncClient):
    sub, email = unique_identity()
    headers = auth_headers(sub, email)

    resp = await client.get("/api/volunteers/my-profile", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Volunteer profile not found"

    volunteer = await _register(client, email=email)
    resp = await client.get("/api/volunteers/my-profile", headers=headers)
    assert resp.json()["id"] == volunteer["id"]

    resp = await client.get("/api/volunteers/my-profile")
    assert resp.status_code == 401


async def test_volunteer_visible_to_self_and_admin_only(client: AsyncClient):
    sub, email = unique_identity()
    volunteer = await _register(client, email=email)
    url = f"/api/volunteers/{volunteer['id']}"

    resp = await client.get(url, headers=auth_headers(sub, email))
    assert resp.status_code == 200

    resp = await client.get(url, headers=auth_headers(*unique_identity()))
    assert resp.status_code == 403

    resp = await client.get(url, headers=await make_admin())
    assert resp.status_code == 200

    resp = await client.get(f"/api/volunteers/{uuid.uuid4()}", headers=await make_admin())
    assert resp.status_code == 404


async def test_admin_review_flow(client: AsyncClient):
    admin = await make_admin()
    first = await _register(client, email="one@example.com")
    await _register(client, email="two@example.com")

    resp = await client.get("/api/volunteers", headers=admin)
    assert resp.status_code == 200
    assert len(resp.json()) == 2

    resp = await client.put(
        f"/api/volunteers/{first['id']}/status", json={"status": "active"}, headers=admin
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "active"

    resp = await client.get("/api/volunteers", params={"status": "active"}, headers=admin)
    assert [v["id"] for v in resp.json()] == [first["id"]]

    resp = await client.put(
        f"/api/volunteers/{first['id']}/status", json={"status": "retired"}, headers=admin
    )
    assert resp.status_code == 422


async def test_listing_and_status_require_admin(client: AsyncClient):
    volunteer = await _register(client)
    user = auth_headers(*unique_identity())

    resp = await client.get("/api/volunteers", headers=user)
    assert resp.status_code == 403
    resp = await client.put(
        f"/api/volunteers/{volunteer['id']}/status", json={"status": "active"}, headers=user
    )
    assert resp.status_code == 403


async def test_certificate_placeholder(client: AsyncClient):
    sub, email = unique_identity()
    volunteer = await _register(client, email=email)

    resp = await client.get(
        f"/api/volunteers/{volunteer['id']}/certificate", headers=auth_headers(sub, email)
    )
    assert resp.status_code == 200
    assert "not implemented" in resp.json()["message"]
    assert resp.json()["volunteer"]["id"] == volunteer["id"]

    resp = await client.get(
        f"/api/volunteers/{volunteer['id']}/certificate",
        headers=auth_headers(*unique_identity()),
    )
    assert resp.status_code == 403
