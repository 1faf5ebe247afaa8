"""Runtime settings using pydantic-settings.

Knobs that are not action inputs: retry schedule, timeouts and log level
read from COMMIT_STATUS_* variables, plus the API and web hosts the runner
exposes as GITHUB_API_URL and GITHUB_SERVER_URL (GitHub Enterprise sets
these to its own hosts).
"""

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActionSettings(BaseSettings):
    """Action runtime configuration from environment variables.

    Every field has a default, so an empty environment is valid.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMMIT_STATUS_",
        case_sensitive=False,
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Retry Configuration
    # -------------------------------------------------------------------------
    # Retries after the first attempt; 0 means a single attempt
    max_retries: int = 5

    # Seconds for the first fibonacci backoff step
    retry_base_delay: float = 1.0

    # -------------------------------------------------------------------------
    # HTTP Configuration
    # -------------------------------------------------------------------------
    timeout: float = 30.0

    api_url: str = Field(
        default="https://api.github.com",
        validation_alias=AliasChoices("GITHUB_API_URL", "COMMIT_STATUS_API_URL"),
    )

    server_url: str = Field(
        default="https://github.com",
        validation_alias=AliasChoices("GITHUB_SERVER_URL", "COMMIT_STATUS_SERVER_URL"),
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("max_retries")
    @classmethod
    def validate_max_retries(cls, v: int) -> int:
        """Validate that max retries is not negative."""
        if v < 0:
            raise ValueError("max_retries must be at least 0")
        return v

    @field_validator("retry_base_delay", "timeout")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("api_url", "server_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate that URLs are http(s) and drop trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


def get_settings() -> ActionSettings:
    """Create and return an ActionSettings instance.

    Raises:
        pydantic.ValidationError: If a variable is set to an invalid value.
    """
    return ActionSettings()
