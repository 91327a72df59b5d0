"""Admin dashboard, donor summary and transaction feed tests."""

from datetime import UTC, datetime

from httpx import AsyncClient

from charity_api.api.admin import _month_keys
from charity_api.services.payments import RazorpayGateway
from tests.helpers import (
    as_decimal,
    create_donation,
    create_event,
    create_project,
    make_admin,
    verify_donation,
)


async def _completed(client: AsyncClient, **overrides) -> dict:
    created = await create_donation(client, **overrides)
    resp = await verify_donation(client, created["donation"]["razorpay_order_id"])
    assert resp.status_code == 200
    return resp.json()


def test_month_keys_wrap_year():
    keys = _month_keys(datetime(2026, 2, 15, tzinfo=UTC), 6)
    assert keys == ["2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02"]


async def test_dashboard_counts_only_completed_donations(
    client: AsyncClient, gateway: RazorpayGateway
):
    admin = await make_admin()
    await create_project(client, admin, category="water", status="active")
    await create_project(client, admin, category="education", status="draft")
    await _completed(client, amount="1500")
    await _completed(client, amount="500")
    await create_donation(client, amount="9999")
    await client.post(
        "/api/contacts",
        json={
            "first_name": "A",
            "last_name": "B",
            "email": "ab@example.com",
            "subject": "Hi",
            "message": "Hello",
        },
    )
    await client.post("/api/newsletters/subscribe", json={"email": "n@example.com"})
    await create_event(client, admin, status="upcoming")
    await create_event(client, admin, status="completed")
    for email in ("v1@example.com", "v2@example.com"):
        volunteer = await client.post(
            "/api/volunteers/register",
            json={
                "first_name": "V",
                "last_name": "Olunteer",
                "email": email,
                "phone": "9876543210",
                "availability": "flexible",
                "motivation": "Help out",
            },
        )
    await client.put(
        f"/api/volunteers/{volunteer.json()['volunteer']['id']}/status",
        json={"status": "active"},
        headers=admin,
    )

    resp = await client.get("/api/admin/dashboard", headers=admin)
    assert resp.status_code == 200
    data = resp.json()
    assert as_decimal(data["total_donations"]) == as_decimal("2000")
    assert data["total_donations_count"] == 2
    assert data["active_projects"] == 1
    assert data["total_projects"] == 2
    assert data["new_contacts"] == 1
    assert data["total_newsletters"] == 1
    assert data["total_volunteers"] == 2
    assert data["active_volunteers"] == 1
    assert data["total_events"] == 2
    assert data["upcoming_events"] == 1

    monthly = data["monthly_donations"]
    assert len(monthly) == 6
    assert monthly[-1]["month"] == datetime.now(UTC).strftime("%Y-%m")
    assert sum(as_decimal(m["amount"]) for m in monthly) == as_decimal("2000")

    distribution = {c["name"]: c["value"] for c in data["project_distribution"]}
    assert distribution == {"education": 1, "water": 1}


async def test_dashboard_empty_state(client: AsyncClient):
    admin = await make_admin()
    resp = await client.get("/api/admin/dashboard", headers=admin)
    data = resp.json()
    assert as_decimal(data["total_donations"]) == as_decimal("0")
    assert data["total_donations_count"] == 0
    assert data["total_volunteers"] == 0
    assert data["total_events"] == 0
    assert all(as_decimal(m["amount"]) == 0 for m in data["monthly_donations"])
    assert data["project_distribution"] == []


async def test_donors_grouped_and_ranked(client: AsyncClient, gateway: RazorpayGateway):
    admin = await make_admin()
    await _completed(client, amount="100", donor_name="Small", donor_email="small@example.com")
    await _completed(client, amount="300", donor_name="Big", donor_email="big@example.com")
    await _completed(client, amount="400", donor_name="Big", donor_email="big@example.com")
    await create_donation(client, amount="5000", donor_name="Small", donor_email="small@example.com")

    resp = await client.get("/api/admin/donors", headers=admin)
    assert resp.status_code == 200
    donors = resp.json()
    assert [d["email"] for d in donors] == ["big@example.com", "small@example.com"]
    assert as_decimal(donors[0]["total_donated"]) == as_decimal("700")
    assert donors[0]["donation_count"] == 2
    assert donors[1]["donation_count"] == 1


async def test_transactions_feed_includes_every_status(
    client: AsyncClient, gateway: RazorpayGateway
):
    admin = await make_admin()
    await _completed(client)
    await create_donation(client)

    resp = await client.get("/api/admin/transactions", headers=admin)
    assert resp.status_code == 200
    assert sorted(d["status"] for d in resp.json()) == ["completed", "pending"]
