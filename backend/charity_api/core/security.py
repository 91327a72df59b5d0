"""Bearer JWT verification (HS256, signed with SECRET_KEY)."""

import time

from jose import JWTError, jwt

from charity_api.core.config import settings


def decode_access_token(token: str) -> dict:
    """Decode and verify an access token. Returns the claims dict."""
    claims = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"verify_aud": False, "verify_iss": False},
    )
    if claims.get("token_use", "access") != "access":
        raise JWTError("Not an access token")
    return claims


def create_access_token(
    sub: str,
    email: str,
    name: str | None = None,
    expires_in: int = 900,
) -> str:
    """Mint an access token. Issuance normally happens outside this service."""
    payload = {
        "sub": sub,
        "email": email,
        "token_use": "access",
        "iat": int(time.time()),
        "exp": int(time.time()) + expires_in,
    }
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
