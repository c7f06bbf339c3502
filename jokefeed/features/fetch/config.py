"""Configuration models for the HTTP fetch layer."""

from typing import Annotated
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jokefeed.features.fetch.constants import (
    CATEGORIES_PATH,
    CATEGORY_ITEM_TEMPLATE,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    RANDOM_ITEM_PATH,
)


def validate_http_url(value: str) -> str:
    """Require an absolute http(s) URL and strip any trailing slash."""
    if not value.startswith(("http://", "https://")):
        msg = f"URL must use http or https: {value}"
        raise ValueError(msg)
    return value.rstrip("/")


class ClientConfig(BaseModel):
    """Configuration for the HTTP client.

    A single instance is shared by every caller of the client.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = DEFAULT_BASE_URL
    timeout_seconds: Annotated[float, Field(ge=1.0, le=300.0)] = (
        DEFAULT_TIMEOUT_SECONDS
    )
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] = (
        DEFAULT_USER_AGENT
    )
    follow_redirects: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) base URL without a trailing slash."""
        return validate_http_url(v)


class ApiEndpoints(BaseModel):
    """Endpoint templates for the remote API.

    The category template must contain a ``{category}`` placeholder; the
    category name is percent-encoded before substitution.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: Annotated[str, Field(min_length=1)] = DEFAULT_BASE_URL
    random_item_path: str = RANDOM_ITEM_PATH
    category_item_template: str = CATEGORY_ITEM_TEMPLATE
    categories_path: str = CATEGORIES_PATH

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) base URL without a trailing slash."""
        return validate_http_url(v)

    @field_validator("category_item_template")
    @classmethod
    def validate_category_placeholder(cls, v: str) -> str:
        """Ensure the category template can be parameterized."""
        if "{category}" not in v:
            msg = "category_item_template must contain '{category}'"
            raise ValueError(msg)
        try:
            v.format(category="x")
        except (KeyError, IndexError, ValueError) as e:
            msg = f"category_item_template may only use '{{category}}': {v}"
            raise ValueError(msg) from e
        return v

    def random_item_url(self, category: str | None = None) -> str:
        """Build the URL for a single random item.

        Args:
            category: Restrict the item to this category when given.

        Returns:
            Absolute URL.
        """
        if category is None:
            return f"{self.base_url}{self.random_item_path}"
        path = self.category_item_template.format(category=quote(category, safe=""))
        return f"{self.base_url}{path}"

    def categories_url(self) -> str:
        """Build the URL for the list of all categories."""
        return f"{self.base_url}{self.categories_path}"
