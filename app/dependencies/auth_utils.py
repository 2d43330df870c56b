# app/dependencies/auth_utils.py

"""
Turns the bearer token of a request into a Principal.

Used by:
- zone dependencies (own zone + scopes for delegation checks)
"""

from typing import Any, Dict

from fastapi import Request

from app.core.exceptions import AuthenticationError
from app.core.security import decode_token, get_bearer_token
from app.modules.zones.schemas import Principal


def _decode_request_token(request: Request) -> Dict[str, Any]:
    """
    Internal helper:
    - read Bearer token from Authorization header
    - decode JWT
    - raise 401 if anything is wrong
    """
    token = get_bearer_token(request)
    payload = decode_token(token)

    if not payload:
        raise AuthenticationError("Invalid token")

    return payload


def _normalize_scopes(raw) -> frozenset:
    # "scope" is a list in our tokens; some issuers send a space separated string
    if not raw:
        return frozenset()
    if isinstance(raw, str):
        raw = raw.split()
    return frozenset(str(s) for s in raw)


def get_current_principal(request: Request) -> Principal:
    """
    FastAPI dependency returning the authenticated caller.

    Example:
        def some_route(principal: Principal = Depends(get_current_principal)):
            ...
    """
    payload = _decode_request_token(request)

    subject = payload.get("sub")
    zone_id = payload.get("zid")
    if not subject or not zone_id:
        raise AuthenticationError("Malformed token")

    return Principal(
        subject=str(subject),
        zone_id=str(zone_id),
        scopes=_normalize_scopes(payload.get("scope")),
    )
