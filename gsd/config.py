"""GSD Configuration Settings."""

import re
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

_DURATION_PATTERN = re.compile(r"^(\d+)([smhd])?$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 60 * 60, "d": 24 * 60 * 60}


def parse_duration(duration: str) -> int:
    """Convert ``"7d"``, ``"24h"``, ``"60m"``, ``"3600s"`` or ``"3600"`` to seconds."""
    match = _DURATION_PATTERN.match((duration or "").strip())
    if not match:
        raise ValueError(
            f'Invalid duration format: "{duration}". '
            'Expected formats: "7d", "24h", "60m", "3600s", or "3600"'
        )

    seconds = int(match.group(1)) * _UNIT_SECONDS[match.group(2) or "s"]
    if seconds <= 0:
        raise ValueError("Token expiration must be positive")
    return seconds


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Database
    DATABASE_URL: Optional[str] = None

    # JWT session
    JWT_SECRET_KEY: str = Field(default="dev-secret-key-change-me")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: str = "7d"
    AUTH_COOKIE_NAME: str = "access_token"
    COOKIE_SECURE: bool = False
    DEV_AUTH_ENABLED: bool = False

    # Application
    APP_NAME: str = "GSD"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # Maintenance
    RETENTION_JOB_ENABLED: bool = True
    RETENTION_JOB_HOUR: int = 2

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def cors_origins_list(self) -> List[str]:
        """Return the configured CORS origins as a sanitized list."""

        if not self.CORS_ORIGINS:
            return []

        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def jwt_expires_seconds(self) -> int:
        return parse_duration(self.JWT_EXPIRES_IN)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


settings = Settings()
