"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from jokefeed.settings.app import AppSettings, get_settings


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: object) -> None:
    """Run each test without JOKEFEED_ variables or a .env file."""
    monkeypatch.chdir(tmp_path)  # type: ignore[arg-type]
    for name in (
        "JOKEFEED_API_BASE_URL",
        "JOKEFEED_TIMEOUT_SECONDS",
        "JOKEFEED_ITEM_COUNT",
        "JOKEFEED_DISCARD_STALE_RESULTS",
        "JOKEFEED_LOG_LEVEL",
        "JOKEFEED_JSON_LOGS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self) -> None:
        """Test default settings."""
        settings = AppSettings()

        assert settings.api_base_url == "https://api.chucknorris.io"
        assert settings.item_count == 5
        assert settings.discard_stale_results is False
        assert settings.log_level == "INFO"
        assert settings.json_logs is False

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test JOKEFEED_ variables override defaults."""
        monkeypatch.setenv("JOKEFEED_API_BASE_URL", "https://mirror.test")
        monkeypatch.setenv("JOKEFEED_ITEM_COUNT", "3")
        monkeypatch.setenv("JOKEFEED_DISCARD_STALE_RESULTS", "true")

        settings = AppSettings()

        assert settings.api_base_url == "https://mirror.test"
        assert settings.item_count == 3
        assert settings.discard_stale_results is True

    def test_reads_dotenv(self, tmp_path: object) -> None:
        """Test values are loaded from a .env file in the working directory."""
        with open(".env", "w", encoding="utf-8") as handle:
            handle.write("JOKEFEED_ITEM_COUNT=7\n")

        assert AppSettings().item_count == 7

    @pytest.mark.parametrize("count", ["0", "51"])
    def test_item_count_bounds(self, monkeypatch: pytest.MonkeyPatch, count: str) -> None:
        """Test item counts outside 1..50 are rejected."""
        monkeypatch.setenv("JOKEFEED_ITEM_COUNT", count)

        with pytest.raises(ValidationError):
            AppSettings()

    def test_invalid_log_level(self) -> None:
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            get_settings(log_level="LOUD")

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test explicit overrides take precedence over the environment."""
        monkeypatch.setenv("JOKEFEED_LOG_LEVEL", "DEBUG")

        assert get_settings(log_level="ERROR").log_level == "ERROR"


class TestDerivedConfig:
    """Tests for building fetch configuration from settings."""

    def test_client_config(self) -> None:
        """Test the client configuration mirrors the settings."""
        settings = get_settings(api_base_url="https://api.test/", timeout_seconds=5)

        config = settings.client_config()

        assert config.base_url == "https://api.test"
        assert config.timeout_seconds == 5.0

    def test_endpoints(self) -> None:
        """Test endpoints are rooted at the configured base URL."""
        endpoints = get_settings(api_base_url="https://api.test").endpoints()

        assert endpoints.categories_url() == "https://api.test/jokes/categories"

    def test_category_template_override(self) -> None:
        """Test a path-style category template can be configured."""
        settings = get_settings(
            api_base_url="https://api.test", category_item_template="/c/{category}"
        )

        assert settings.endpoints().random_item_url("dev") == "https://api.test/c/dev"

    def test_invalid_base_url_rejected(self) -> None:
        """Test a base URL without http(s) scheme is rejected."""
        with pytest.raises(ValidationError):
            get_settings(api_base_url="not-a-url")
