"""
Application Settings for Team Billing

Centralized configuration using Pydantic Settings with .env support.
All environment variables are validated at startup and the resulting
object is immutable for the lifetime of the process.
"""

from functools import lru_cache
from pydantic import ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.infrastructure.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    JWT_SECRET is required; everything else has a development default.
    """

    # Token signing
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Session cookies
    access_cookie_name: str = "access_token"
    refresh_cookie_name: str = "refresh_token"

    # Application Settings
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS Configuration
    allowed_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ]

    # Billing rules
    proration_cycle_days: int = 30  # applied to month and year plans alike
    max_verification_attempts: int = 5

    # Database Configuration (SQLModel/SQLAlchemy)
    database_url: str = "sqlite+aiosqlite:///./billing.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: int = 30
    database_echo: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="after")
    def validate_secrets(self) -> "Settings":
        """Refuse to start with an empty signing secret."""
        if not self.jwt_secret.strip():
            raise ValueError("JWT_SECRET must not be empty")

        if self.is_production and self.jwt_secret == "change-me":
            raise ValueError("JWT_SECRET must be changed in production")

        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment.lower() == "development"

    @property
    def async_database_url(self) -> str:
        """Database URL rewritten for the async driver of its dialect."""
        url = self.database_url
        if url.startswith("postgresql://"):
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("sqlite://"):
            return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return url

    @property
    def is_sqlite(self) -> bool:
        return self.async_database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Raises:
        ConfigurationError: a required variable is missing or a value is invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        missing = [
            str(error["loc"][0]).upper()
            for error in e.errors()
            if error["type"] == "missing" and error["loc"]
        ]
        raise ConfigurationError(
            "Invalid application settings",
            missing_keys=missing,
            original_error=e,
        ) from e


# Convenience export for direct import
settings = get_settings()
