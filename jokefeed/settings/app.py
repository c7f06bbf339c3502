"""Application settings powered by Pydantic BaseSettings."""

from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from jokefeed.features.fetch.config import (
    ApiEndpoints,
    ClientConfig,
    validate_http_url,
)
from jokefeed.features.fetch.constants import (
    CATEGORY_ITEM_TEMPLATE,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from jokefeed.screens.category.view_model import DEFAULT_ITEM_COUNT


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="JOKEFEED_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = DEFAULT_BASE_URL
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    user_agent: str = DEFAULT_USER_AGENT
    category_item_template: str = CATEGORY_ITEM_TEMPLATE
    item_count: Annotated[int, Field(ge=1, le=50)] = DEFAULT_ITEM_COUNT
    discard_stale_results: bool = False
    log_level: LogLevel = "INFO"
    json_logs: bool = False

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Require an absolute http(s) API base URL."""
        return validate_http_url(v)

    def client_config(self) -> ClientConfig:
        """Build the HTTP client configuration."""
        return ClientConfig(
            base_url=self.api_base_url,
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
        )

    def endpoints(self) -> ApiEndpoints:
        """Build the API endpoint templates."""
        return ApiEndpoints(
            base_url=self.api_base_url,
            category_item_template=self.category_item_template,
        )


def get_settings(**overrides: object) -> AppSettings:
    """Get a settings instance.

    Args:
        **overrides: Values taking precedence over the environment.
    """
    return AppSettings(**overrides)  # type: ignore[arg-type]
