"""Application settings loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Storage
    DATA_DIR: Path = BASE_DIR / "data"
    PUBLIC_DIR: Path = BASE_DIR / "public"

    # Auth
    JWT_SECRET: str = "change-me"
    JWT_EXPIRE_MINUTES: int = 120
    AUTH_STRATEGY: str = "jwt"

    # Uploads
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5001
    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def users_path(self) -> Path:
        return self.DATA_DIR / "users.json"

    @property
    def inquiries_path(self) -> Path:
        return self.DATA_DIR / "event_inquiries.csv"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
