"""Application settings loaded from environment variables."""

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class DatabaseSettings(BaseModel):
    url: str = "sqlite+aiosqlite:///./sunboard.db"
    echo: bool = False


class APISettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = False
    # Base URL the HTTP client and the reviewer CLI talk to
    url: str = "http://localhost:8000/api/v1"


class SecuritySettings(BaseModel):
    api_key: str = ""
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    rate_limit_default: int = 120
    rate_limit_strict: int = 30


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_output: bool = True


class Settings(BaseModel):
    """Top-level settings container."""

    environment: str = Field(default="development", pattern="^(development|production|test)$")
    debug: bool = False
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        return cls(
            environment=os.getenv("SUNBOARD_ENV", "development"),
            debug=_env_bool("SUNBOARD_DEBUG"),
            database=DatabaseSettings(
                url=os.getenv("DATABASE_URL", DatabaseSettings().url),
                echo=_env_bool("DATABASE_ECHO"),
            ),
            api=APISettings(
                host=os.getenv("API_HOST", "127.0.0.1"),
                port=int(os.getenv("API_PORT", "8000")),
                reload=_env_bool("API_RELOAD"),
                url=os.getenv("SUNBOARD_API_URL", APISettings().url),
            ),
            security=SecuritySettings(
                api_key=os.getenv("SUNBOARD_API_KEY", ""),
                cors_origins=_env_list("CORS_ORIGINS", ["http://localhost:3000"]),
                rate_limit_default=int(os.getenv("RATE_LIMIT_DEFAULT", "120")),
                rate_limit_strict=int(os.getenv("RATE_LIMIT_STRICT", "30")),
            ),
            logging=LoggingSettings(
                level=os.getenv("LOG_LEVEL", "INFO"),
                json_output=_env_bool("LOG_JSON", default=True),
            ),
        )


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings (cached)."""
    return Settings.from_env()
