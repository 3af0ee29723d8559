"""Configuration management using pydantic-settings."""

import threading
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

# Valid log levels
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_TIMEZONE = "Asia/Tokyo"


def _require_non_blank(v: str, what: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{what} cannot be empty")
    return v.strip()


class OuraSettings(BaseSettings):
    """Oura v2 API settings."""

    model_config = SettingsConfigDict(
        env_prefix="OURA_", env_file=".env", extra="ignore", frozen=True
    )

    api_token: str = Field(description="Oura personal access token")
    base_url: str = Field(
        default="https://api.ouraring.com/v2/usercollection",
        description="Base URL of the usercollection endpoints",
    )
    timeout_seconds: float = Field(default=10.0, description="Per-request timeout in seconds")

    @field_validator("api_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is not empty."""
        return _require_non_blank(v, "Oura API token")

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v


class LineSettings(BaseSettings):
    """LINE Messaging API settings."""

    model_config = SettingsConfigDict(
        env_prefix="LINE_",
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    api_token: str = Field(description="LINE channel access token")
    recipient_id: str = Field(
        validation_alias="TO_LINE_USER",
        description="LINE user ID that receives the digest",
    )
    push_url: str = Field(
        default="https://api.line.me/v2/bot/message/push",
        description="Push message endpoint",
    )

    @field_validator("api_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate token is not empty."""
        return _require_non_blank(v, "LINE API token")

    @field_validator("recipient_id")
    @classmethod
    def validate_recipient(cls, v: str) -> str:
        """Validate recipient is not empty."""
        return _require_non_blank(v, "LINE recipient")


class AppSettings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="APP_", env_file=".env", extra="ignore", frozen=True
    )

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or console")
    timezone: str = Field(
        default=DEFAULT_TIMEZONE, description="Timezone used to compute calendar dates"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        normalized = v.upper()
        if normalized not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return normalized

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is valid."""
        normalized = v.lower()
        if normalized not in ("json", "console"):
            raise ValueError(f"Invalid log format '{v}'. Must be 'json' or 'console'")
        return normalized

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate the timezone exists in the tz database."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone '{v}'") from e
        return v


class MetricsSettings(BaseSettings):
    """Prometheus Pushgateway settings."""

    model_config = SettingsConfigDict(
        env_prefix="METRICS_", env_file=".env", extra="ignore", frozen=True
    )

    pushgateway_url: str | None = Field(
        default=None, description="Pushgateway address; metrics are not pushed when unset"
    )
    job_name: str = Field(default="oura_digest", description="Pushgateway job label")


class TracingSettings(BaseSettings):
    """OpenTelemetry tracing settings."""

    model_config = SettingsConfigDict(
        env_prefix="TRACING_", env_file=".env", extra="ignore", frozen=True
    )

    enabled: bool = Field(default=False, description="Export spans via OTLP")
    service_name: str = Field(default="oura-digest", description="service.name resource")
    endpoint: str | None = Field(
        default=None, description="OTLP/HTTP traces endpoint, e.g. http://collector:4318/v1/traces"
    )


class Settings(BaseSettings):
    """Combined application settings."""

    model_config = SettingsConfigDict(frozen=True)

    oura: OuraSettings
    line: LineSettings
    app: AppSettings = Field(default_factory=AppSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    tracing: TracingSettings = Field(default_factory=TracingSettings)

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables and ``.env``.

        Raises:
            ConfigError: If a required value is missing or invalid.
        """
        try:
            return cls(
                oura=OuraSettings(),
                line=LineSettings(),
                app=AppSettings(),
                metrics=MetricsSettings(),
                tracing=TracingSettings(),
            )
        except ValidationError as e:
            raise ConfigError(_describe_validation_error(e)) from e


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        field_name = f"{error.title}.{location}" if location else error.title
        problems.append(f"{field_name}: {detail['msg']}")
    return "Invalid configuration: " + "; ".join(problems)


# Global settings instance with thread-safe initialization
_settings: Settings | None = None
_settings_lock = threading.Lock()


def get_settings() -> Settings:
    """Get or create the global settings instance.

    Thread-safe singleton pattern using double-checked locking.
    """
    global _settings
    if _settings is None:
        with _settings_lock:
            # Double-check after acquiring lock
            if _settings is None:
                _settings = Settings.load()
    return _settings
