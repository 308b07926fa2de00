"""Auth dependencies for FastAPI route injection."""

import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends, Request

from events_api.auth.jwt import verify_token
from events_api.utils.errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

ROLE_ADMIN = "admin"


@dataclass
class CurrentUser:
    username: str
    role: str


def _extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization", "").strip()
    if auth[:7].lower() == "bearer ":
        return auth[7:].strip() or None
    return None


async def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency: authenticate via a Bearer token."""
    token = _extract_bearer_token(request)
    if not token:
        raise Unauthorized("Authentication required.")

    try:
        payload = verify_token(token)
    except jwt.ExpiredSignatureError:
        logger.warning("Rejected expired token on %s", request.url.path)
        raise Unauthorized("Session expired.")
    except jwt.InvalidTokenError as exc:
        logger.warning("Rejected invalid token on %s: %s", request.url.path, exc)
        raise Unauthorized("Invalid token.")

    username = payload.get("username") or payload.get("sub")
    if not username:
        raise Unauthorized("Invalid token.")
    return CurrentUser(username=username, role=payload.get("role") or "")


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if user.role != ROLE_ADMIN:
        raise Forbidden("Admin privileges required.")
    return user
