"""FastAPI dependency chain: DB session, JWT → User, role checks, payment gateway."""

from collections.abc import AsyncGenerator

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from charity_api.core.exceptions import GatewayUnconfiguredError
from charity_api.core.security import decode_access_token
from charity_api.db.session import async_session_factory
from charity_api.models.user import User
from charity_api.services.payments import RazorpayGateway

bearer_scheme = HTTPBearer(auto_error=False)

ROLE_HIERARCHY = {"admin": 2, "user": 1}


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session. Commits on success, rolls back on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_current_user_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict:
    """Extract and verify the Bearer token, returning JWT claims."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    try:
        claims = decode_access_token(credentials.credentials)
    except JWTError as e:
        raise HTTPException(status_code=401, detail=f"Invalid token: {e}") from e

    return claims


async def get_current_user(
    claims: dict = Depends(get_current_user_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the JWT ``sub`` claim to a User row.

    Auto-provisions a plain ``user`` the first time a subject is seen.
    """
    sub = claims.get("sub")
    if not sub:
        raise HTTPException(status_code=401, detail="Token missing sub claim")

    result = await db.execute(select(User).where(User.auth_sub == sub))
    user = result.scalar_one_or_none()

    if user is None:
        email = claims.get("email", f"{sub}@placeholder.local").lower()
        full_name = claims.get("name", claims.get("email", "Unknown"))
        user = User(auth_sub=sub, email=email, full_name=full_name, role="user")
        db.add(user)
        await db.flush()
        await db.refresh(user)

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is deactivated")

    return user


def require_role(min_role: str, user: User) -> User:
    """Raise 403 unless the user has at least min_role. Call from route handlers."""
    if ROLE_HIERARCHY.get(user.role, 0) < ROLE_HIERARCHY.get(min_role, 0):
        raise HTTPException(status_code=403, detail=f"Requires {min_role} role")
    return user


async def get_admin_user(user: User = Depends(get_current_user)) -> User:
    return require_role("admin", user)


def get_payment_gateway(request: Request) -> RazorpayGateway | None:
    """The gateway built at startup, or None when credentials are absent."""
    return getattr(request.app.state, "payment_gateway", None)


def require_payment_gateway(
    gateway: RazorpayGateway | None = Depends(get_payment_gateway),
) -> RazorpayGateway:
    if gateway is None:
        raise GatewayUnconfiguredError()
    return gateway
