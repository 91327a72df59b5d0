"""Contact form tests."""

import uuid

from httpx import AsyncClient

from tests.helpers import auth_headers, make_admin, unique_identity

CONTACT = {
    "first_name": "Meera",
    "last_name": "Iyer",
    "email": "Meera@Example.com",
    "phone": "+91 98765 43210",
    "subject": "Volunteering",
    "message": "How can I help on weekends?",
}


async def test_submit_contact_is_public(client: AsyncClient):
    resp = await client.post("/api/contacts", json=CONTACT)
    assert resp.status_code == 201
    data = resp.json()
    assert data["status"] == "new"
    assert data["email"] == "meera@example.com"


async def test_submit_contact_validation(client: AsyncClient):
    resp = await client.post("/api/contacts", json={**CONTACT, "phone": "123"})
    assert resp.status_code == 422
    resp = await client.post("/api/contacts", json={**CONTACT, "subject": ""})
    assert resp.status_code == 422


async def test_admin_triage_flow(client: AsyncClient):
    admin = await make_admin()
    created = (await client.post("/api/contacts", json=CONTACT)).json()
    await client.post("/api/contacts", json={**CONTACT, "subject": "Other"})

    resp = await client.get("/api/contacts", params={"status": "new"}, headers=admin)
    assert len(resp.json()) == 2

    resp = await client.put(
        f"/api/contacts/{created['id']}", json={"status": "replied"}, headers=admin
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "replied"

    resp = await client.get("/api/contacts", params={"status": "replied"}, headers=admin)
    assert [c["id"] for c in resp.json()] == [created["id"]]

    resp = await client.get(f"/api/contacts/{created['id']}", headers=admin)
    assert resp.json()["subject"] == "Volunteering"

    resp = await client.delete(f"/api/contacts/{created['id']}", headers=admin)
    assert resp.status_code == 204
    resp = await client.get(f"/api/contacts/{created['id']}", headers=admin)
    assert resp.status_code == 404


async def test_status_update_rejects_unknown_status(client: AsyncClient):
    admin = await make_admin()
    created = (await client.post("/api/contacts", json=CONTACT)).json()
    resp = await client.put(
        f"/api/contacts/{created['id']}", json={"status": "spam"}, headers=admin
    )
    assert resp.status_code == 422


async def test_listing_requires_admin(client: AsyncClient):
    sub, email = unique_identity()
    resp = await client.get("/api/contacts", headers=auth_headers(sub, email))
    assert resp.status_code == 403


async def test_unknown_submission_returns_404(client: AsyncClient):
    admin = await make_admin()
    resp = await client.delete(f"/api/contacts/{uuid.uuid4()}", headers=admin)
    assert resp.status_code == 404
