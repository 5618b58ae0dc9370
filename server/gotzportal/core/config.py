"""Configuration settings for the FastAPI application."""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings

# Token accepted by the admin gate when no ADMIN_PASSWORD is configured.
DEV_ADMIN_TOKEN = "dev-token"
DEFAULT_ADMIN_EMAIL = "admin@gotzportal.local"


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

    # Database settings (unset means every read uses fallback data)
    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "POSTGRES_URL"),
        description="PostgreSQL connection string; absent switches to fallback storage"
    )

    # Environment settings
    environment: str = Field(
        default="development",
        description="Application environment"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Application log level"
    )

    # Admin credentials
    admin_password: str = Field(
        default="",
        description="Shared admin secret; doubles as the admin bearer token"
    )

    admin_email: str = Field(
        default=DEFAULT_ADMIN_EMAIL,
        description="Email accepted by the legacy single-password login"
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"],
        description="Allowed CORS origins"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Server host"
    )

    port: int = Field(
        default=8000,
        description="Server port"
    )

    # Observability settings
    otlp_endpoint: Optional[str] = Field(
        default=None,
        description="OTLP gRPC endpoint for traces and metrics"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "test", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, v: Optional[str]) -> Optional[str]:
        """Map plain Postgres URLs onto the asyncpg driver; blank means unset."""
        if v is None or not v.strip():
            return None
        v = v.strip()
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return "postgresql+asyncpg://" + v[len(prefix):]
        return v

    @model_validator(mode="after")
    def require_admin_secret_in_production(self) -> "Settings":
        """Refuse to start a production process with the development token."""
        if self.is_production and not self.admin_password:
            raise ValueError("ADMIN_PASSWORD must be set when ENVIRONMENT=production")
        return self

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    @property
    def admin_token(self) -> str:
        """Bearer token every admin request must present."""
        return self.admin_password or DEV_ADMIN_TOKEN

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }


# Global settings instance
settings = Settings()
