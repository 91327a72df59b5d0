"""Shared helpers for API tests."""

import uuid
from decimal import Decimal

from httpx import AsyncClient
from sqlalchemy import select

from charity_api.core.security import create_access_token
from charity_api.db.session import async_session_factory
from charity_api.models.donation import Donation
from charity_api.models.project import Project
from charity_api.models.user import User
from charity_api.services.payments import compute_signature

GATEWAY_KEY_ID = "rzp_test_key"
GATEWAY_SECRET = "test-secret"


def auth_headers(sub: str = "test-sub", email: str = "test@example.com") -> dict:
    """Return Authorization headers with a signed access token."""
    token = create_access_token(sub=sub, email=email)
    return {"Authorization": f"Bearer {token}"}


def unique_identity(prefix: str = "user") -> tuple[str, str]:
    unique = uuid.uuid4().hex[:8]
    return f"{prefix}-sub-{unique}", f"{prefix}-{unique}@example.com"


async def make_admin() -> dict:
    """Insert an admin user and return headers authenticating as them."""
    sub, email = unique_identity("admin")
    async with async_session_factory() as session:
        session.add(User(auth_sub=sub, email=email, full_name="Admin User", role="admin"))
        await session.commit()
    return auth_headers(sub=sub, email=email)


def sign(order_id: str, payment_id: str, secret: str = GATEWAY_SECRET) -> str:
    return compute_signature(secret, order_id, payment_id)


async def create_project(client: AsyncClient, admin: dict, **overrides) -> dict:
    body = {
        "title": "Clean Water for Village Schools",
        "description": "Borewells and filters for five schools",
        "category": "water",
        "location": "Pune",
        "target_amount": "500000.00",
        "status": "active",
    }
    body.update(overrides)
    resp = await client.post("/api/projects", json=body, headers=admin)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def create_donation(client: AsyncClient, **overrides) -> dict:
    """POST a donation (gateway fixture must be active) and return the response body."""
    body = {"amount": 1000, "donor_name": "Asha Rao", "donor_email": "asha@example.com"}
    body.update(overrides)
    resp = await client.post("/api/donations", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def verify_donation(client: AsyncClient, order_id: str, payment_id: str = "pay_1"):
    return await client.post(
        "/api/donations/verify-payment",
        json={
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": sign(order_id, payment_id),
        },
    )


async def fetch_project(project_id: str) -> Project:
    async with async_session_factory() as session:
        return await session.get(Project, uuid.UUID(project_id))


async def count_donations() -> int:
    async with async_session_factory() as session:
        result = await session.execute(select(Donation))
        return len(result.scalars().all())


def as_decimal(value) -> Decimal:
    return Decimal(str(value))


class FakeOrderResource:
    """Stands in for ``razorpay.Client().order``; records every create call."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[dict] = []
        self.error = error

    def create(self, data: dict) -> dict:
        self.calls.append(data)
        if self.error is not None:
            raise self.error
        return {
            "id": f"order_{uuid.uuid4().hex[:14]}",
            "entity": "order",
            "amount": data["amount"],
            "currency": data["currency"],
            "receipt": data["receipt"],
            "notes": data["notes"],
            "status": "created",
        }


class FakeRazorpayClient:
    def __init__(self, error: Exception | None = None):
        self.order = FakeOrderResource(error)


async def insert_donations(count: int, status: str = "completed") -> None:
    """Bulk-insert donations straight into the database, bypassing the gateway."""
    async with async_session_factory() as session:
        for i in range(count):
            session.add(
                Donation(
                    transaction_id=f"TXNSEED{i:06d}",
                    donor_name="Seed Donor",
                    donor_email="seed@example.com",
                    amount=Decimal("10"),
                    status=status,
                    razorpay_order_id=f"order_seed_{i}",
                )
            )
        await session.commit()


async def create_event(client: AsyncClient, admin: dict, **overrides) -> dict:
    body = {
        "title": "Riverbank Clean-up Drive",
        "description": "Half-day clean-up along the Mula river",
        "event_date": "2026-12-05T07:00:00+05:30",
        "event_time": "7:00 AM - 12:00 PM",
        "location": "Pune",
        "category": "community",
        "event_type": "volunteer",
        "max_participants": 5,
    }
    body.update(overrides)
    resp = await client.post("/api/events", json=body, headers=admin)
    assert resp.status_code == 201, resp.text
    return resp.json()
