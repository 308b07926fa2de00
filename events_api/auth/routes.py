"""Auth endpoints: login."""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from events_api.auth.jwt import issue_token
from events_api.auth.users import UserDirectory, UserDirectoryError
from events_api.config.settings import get_settings
from events_api.utils.errors import AppError, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


def get_user_directory() -> UserDirectory:
    return UserDirectory(get_settings().users_path)


@router.post("/login", summary="Login", description="Authenticate with username and password, returns a bearer token.")
async def login(body: LoginRequest, users: UserDirectory = Depends(get_user_directory)):
    if not body.username or not body.password:
        raise ValidationError("Username and password are required.")

    try:
        user = users.authenticate(body.username, body.password)
    except UserDirectoryError:
        logger.exception("Authentication failed")
        raise AppError("Authentication failed.")

    if user is None:
        logger.warning("Failed login for %r", body.username)
        raise Unauthorized("Invalid credentials.")

    return {
        "token": issue_token(user.username, user.role),
        "user": {"username": user.username, "role": user.role},
    }
