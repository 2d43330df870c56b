# app/core/security.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional
from uuid import uuid4

from fastapi import Request
from jose import JWTError, jwt

from app.core.config import settings
from app.core.exceptions import AuthenticationError


# ---------------------------------------------------------------------------
# JWT helpers
# ---------------------------------------------------------------------------

def create_access_token(
    subject: str,
    zone_id: str,
    scopes: Iterable[str],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint an access token carrying the claims this service reads:

    - sub:   principal id
    - zid:   identity zone the token was issued in
    - scope: granted scopes, e.g. ["zones.acme.admin"]

    Issuing tokens belongs to the authorization server; this helper
    exists for local runs and tests.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {
        "sub": subject,
        "zid": zone_id,
        "scope": list(scopes),
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
        "jti": str(uuid4()),
    }
    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_token(token: str, verify_exp: bool = True) -> Optional[Dict[str, Any]]:
    """
    Decode a JWT and optionally verify exp.

    Returns the payload dict on success, or None on failure.
    """
    options = {"verify_exp": verify_exp}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options=options,
        )
    except JWTError:
        return None


# ---------------------------------------------------------------------------
# Authorization header helpers
# ---------------------------------------------------------------------------

def get_bearer_token(request: Request) -> str:
    """
    Extract Bearer token from Authorization header.

    This is synchronous; do *not* "await" it.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise AuthenticationError("Missing Authorization header")

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationError("Invalid authorization header format")

    return parts[1]
