"""Flat JSON user directory."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "admin"


@dataclass
class User:
    username: str
    role: str


class UserDirectoryError(RuntimeError):
    pass


def normalize_username(value: str | None) -> str:
    return (value or "").strip().lower()


class UserDirectory:
    """Users stored as a JSON array of ``{username, password, role}``.

    Passwords are compared in clear text, matching the stored format.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def load(self) -> list[dict]:
        if not self._path.is_file():
            raise UserDirectoryError(f"User store is missing. Seed {self._path}.")
        try:
            parsed = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise UserDirectoryError(f"Invalid auth users file: {exc}") from exc
        if not isinstance(parsed, list):
            raise UserDirectoryError("Users file must contain an array.")
        return parsed

    def authenticate(self, username: str, password: str) -> User | None:
        normalized = normalize_username(username)
        for entry in self.load():
            if not isinstance(entry, dict):
                continue
            stored_password = entry.get("password")
            if (
                normalize_username(entry.get("username")) == normalized
                and isinstance(stored_password, str)
                and stored_password == password
            ):
                role = entry.get("role")
                return User(username=entry["username"], role=DEFAULT_ROLE if role is None else role)
        return None
