"""Bearer token creation and verification."""

import hashlib
import secrets
import time
from datetime import datetime, timedelta, timezone

import jwt

from events_api.config.settings import get_settings

STRATEGY_JWT = "jwt"
STRATEGY_OPAQUE = "opaque"


def create_access_token(username: str, role: str) -> str:
    settings = get_settings()
    payload = {
        "sub": username,
        "username": username,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
        "iat": datetime.now(timezone.utc),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")


def create_opaque_token(username: str) -> str:
    """Random token with no embedded claims and no server-side record."""
    seed = f"{username}:{time.time_ns()}:{secrets.token_hex(16)}"
    return hashlib.sha256(seed.encode()).hexdigest()


def issue_token(username: str, role: str) -> str:
    if get_settings().AUTH_STRATEGY == STRATEGY_OPAQUE:
        return create_opaque_token(username)
    return create_access_token(username, role)


def verify_token(token: str) -> dict:
    """Decode and validate a JWT. Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError."""
    settings = get_settings()
    return jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
