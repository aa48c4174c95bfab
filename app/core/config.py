"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"
    CORS_ORIGINS: list[str] = ["*"]

    # SQLite file by default; point at Postgres in production
    DATABASE_URL: str = "sqlite:///./database.sqlite"

    # JWT authentication. Rotating JWT_SECRET invalidates every issued token.
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # How often the in-memory refresh token registry drops expired entries
    REFRESH_SWEEP_INTERVAL_SEC: int = 300

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL "
                "(e.g. sqlite:///./database.sqlite or postgresql://...)"
            )
        return v.strip()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/' (e.g. /api)")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith("HS"):
            raise ValueError("JWT_ALGORITHM must be a symmetric HMAC algorithm (HS256, HS384, HS512)")
        return v

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def validate_access_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 1440:
            raise ValueError(
                "ACCESS_TOKEN_EXPIRE_MINUTES must be between 1 and 1440 (1 min to 1 day)"
            )
        return v

    @field_validator("REFRESH_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def validate_refresh_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 129600:
            raise ValueError(
                "REFRESH_TOKEN_EXPIRE_MINUTES must be between 1 and 129600 (1 min to 90 days)"
            )
        return v

    @field_validator("REFRESH_SWEEP_INTERVAL_SEC")
    @classmethod
    def validate_sweep_interval(cls, v: int) -> int:
        if v < 1 or v > 86400:
            raise ValueError("REFRESH_SWEEP_INTERVAL_SEC must be between 1 and 86400")
        return v

    @model_validator(mode="after")
    def validate_token_lifetimes(self) -> "Settings":
        if self.REFRESH_TOKEN_EXPIRE_MINUTES < self.ACCESS_TOKEN_EXPIRE_MINUTES:
            raise ValueError(
                "REFRESH_TOKEN_EXPIRE_MINUTES must not be shorter than ACCESS_TOKEN_EXPIRE_MINUTES"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
