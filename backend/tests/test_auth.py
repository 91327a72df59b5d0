"""Authentication and role tests."""

from httpx import AsyncClient
from jose import jwt

from charity_api.core.config import settings
from tests.helpers import auth_headers, make_admin, unique_identity


async def test_me_without_token_returns_401(client: AsyncClient):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.headers["content-type"].startswith("application/problem+json")


async def test_me_with_garbage_token_returns_401(client: AsyncClient):
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


async def test_me_rejects_non_access_token(client: AsyncClient):
    token = jwt.encode(
        {"sub": "x", "email": "x@example.com", "token_use": "id"},
        settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


async def test_me_auto_provisions_plain_user(client: AsyncClient):
    sub, email = unique_identity()
    resp = await client.get("/api/auth/me", headers=auth_headers(sub=sub, email=email.upper()))
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == email
    assert data["role"] == "user"

    # Second call resolves the same row
    again = await client.get("/api/auth/me", headers=auth_headers(sub=sub, email=email))
    assert again.json()["id"] == data["id"]


async def test_admin_route_forbidden_for_plain_user(client: AsyncClient):
    sub, email = unique_identity()
    resp = await client.get("/api/admin/dashboard", headers=auth_headers(sub=sub, email=email))
    assert resp.status_code == 403


async def test_admin_route_allowed_for_admin(client: AsyncClient):
    admin = await make_admin()
    resp = await client.get("/api/admin/dashboard", headers=admin)
    assert resp.status_code == 200
