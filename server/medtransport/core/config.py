"""Configuration settings for the reconciliation service."""

from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


def resolve_timezone(name: str) -> tzinfo:
    """Resolve a timezone name, short-circuiting UTC so no tz database is needed for it."""
    if name.upper() in ("UTC", "Z", "ETC/UTC"):
        return timezone.utc
    return ZoneInfo(name)


class Settings(BaseSettings):
    """Application settings with Pydantic validation."""

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

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
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

    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC endpoint for traces and metrics"
    )

    # Tariff settings
    tariff_rate_per_km: float = Field(
        default=1000,
        ge=0,
        description="Currency units charged per great-circle kilometer"
    )

    earth_radius_km: float = Field(
        default=6371.0,
        gt=0,
        description="Sphere radius used by the haversine distance"
    )

    currency: str = Field(
        default="INR",
        min_length=3,
        max_length=3,
        description="ISO 4217 code reported alongside monetary totals"
    )

    # Temporal settings
    timezone: str = Field(
        default="UTC",
        description="Timezone the external preferred_date/preferred_time fields are expressed in"
    )

    revenue_window_months: int = Field(
        default=6,
        ge=1,
        le=24,
        description="Number of calendar months in the revenue-by-month breakdown"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_environments = ["development", "staging", "production"]
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

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        return v.upper()

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject timezone names that cannot be resolved."""
        try:
            resolve_timezone(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def debug(self) -> bool:
        """Return True if in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Return True if in production mode."""
        return self.environment == "production"

    @property
    def tzinfo(self) -> tzinfo:
        """Timezone object for the configured timezone name."""
        return resolve_timezone(self.timezone)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Global settings instance
settings = Settings()
