"""Unit tests for the CLI commands."""

import json
from collections.abc import Callable, Iterator

import httpx
import pytest
import structlog
from click.testing import CliRunner

from jokefeed.cli import main as cli_main
from jokefeed.cli.main import cli
from jokefeed.features.fetch.client import HttpClient
from jokefeed.settings.app import AppSettings


Handler = Callable[[httpx.Request], httpx.Response]


def item_payload(text: str) -> dict[str, str]:
    return {
        "icon_url": "https://api.test/img/avatar.png",
        "id": f"id-{text}",
        "url": f"https://api.test/jokes/id-{text}",
        "value": text,
    }


def api_handler(request: httpx.Request) -> httpx.Response:
    """Serve the random item, category item and category list endpoints."""
    if request.url.path == "/jokes/categories":
        return httpx.Response(200, json=["animal", "dev", "devops"])
    category = request.url.params.get("category")
    if category is None:
        return httpx.Response(200, json=item_payload("uncategorized"))
    if category == "missing":
        return httpx.Response(404, json={"status": 404})
    return httpx.Response(200, json=item_payload(f"{category} joke"))


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep the logging configuration from leaking between tests."""
    monkeypatch.delenv("JOKEFEED_API_BASE_URL", raising=False)
    monkeypatch.delenv("JOKEFEED_ITEM_COUNT", raising=False)
    yield
    structlog.reset_defaults()


def use_transport(monkeypatch: pytest.MonkeyPatch, handler: Handler) -> None:
    """Route every client the CLI builds through a mock transport."""

    def build_client(settings: AppSettings) -> HttpClient:
        return HttpClient(settings.client_config(), transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli_main, "build_client", build_client)


def invoke(*args: str) -> tuple[int, str]:
    runner = CliRunner()
    result = runner.invoke(cli, ["--log-level", "CRITICAL", *args])
    return result.exit_code, result.stdout


class TestDashboardCommand:
    """Tests for the dashboard command."""

    def test_prints_settled_state(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the dashboard prints the item and categories."""
        use_transport(monkeypatch, api_handler)

        exit_code, output = invoke("dashboard")

        assert exit_code == 0
        payload = json.loads(output)
        assert payload["settled"] is True
        assert payload["primary_item_text"] == "uncategorized"
        assert payload["categories"] == ["animal", "dev", "devops"]
        assert payload["action_disabled"] is False
        assert payload["navigation"] == []

    def test_filter_and_select(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test filtering and selecting after load."""
        use_transport(monkeypatch, api_handler)

        exit_code, output = invoke("dashboard", "--filter", "^dev", "--select", "dev")

        assert exit_code == 0
        payload = json.loads(output)
        assert payload["categories"] == ["dev", "devops"]
        assert payload["navigation"] == [{"kind": "category", "name": "dev"}]

    def test_server_error_reported_in_state(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test request failures are shown in the state, not as exit codes."""
        use_transport(monkeypatch, lambda _: httpx.Response(500))

        exit_code, output = invoke("dashboard")

        assert exit_code == 0
        payload = json.loads(output)
        assert payload["primary_item_error"] == "A data request error occurred. (code: 500)"
        assert payload["categories_error"] == "A data request error occurred. (code: 500)"
        assert payload["categories"] == []


class TestCategoryCommand:
    """Tests for the category command."""

    def test_prints_deduplicated_items(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test repeated items collapse into one entry."""
        use_transport(monkeypatch, api_handler)

        exit_code, output = invoke("category", "dev", "--count", "3")

        assert exit_code == 0
        payload = json.loads(output)
        assert payload["category_name"] == "dev"
        assert payload["items"] == ["dev joke"]
        assert payload["is_loading"] is False
        assert payload["error_message"] is None

    def test_failure_reported(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a failed category shows the server response message."""
        use_transport(monkeypatch, api_handler)

        exit_code, output = invoke("category", "missing")

        assert exit_code == 0
        payload = json.loads(output)
        assert payload["error_message"] == "A data request error occurred. (code: 404)"
        assert payload["items"] == []

    def test_count_bounds(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test counts outside 1..50 are rejected by the option parser."""
        use_transport(monkeypatch, api_handler)

        exit_code, _ = invoke("category", "dev", "--count", "0")

        assert exit_code == 2


class TestConfigurationErrors:
    """Tests for invalid configuration."""

    def test_invalid_environment_exits_1(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test invalid settings exit with status 1."""
        monkeypatch.setenv("JOKEFEED_ITEM_COUNT", "0")
        runner = CliRunner()

        result = runner.invoke(cli, ["dashboard"])

        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output

    def test_version(self) -> None:
        """Test the version option."""
        result = CliRunner().invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output
