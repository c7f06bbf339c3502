"""CLI commands for jokefeed."""

import asyncio
import json
import sys
import uuid
from typing import Any

import click
import structlog
from pydantic import ValidationError

from jokefeed import __version__
from jokefeed.features.fetch.client import HttpClient
from jokefeed.features.navigation.router import Router
from jokefeed.features.observability.logging import configure_logging, screen_context
from jokefeed.screens.category.view_model import CategoryViewModel
from jokefeed.screens.dashboard.view_model import (
    DashboardViewModel,
    FilterTextChanged,
    SelectCategory,
)
from jokefeed.settings.app import AppSettings, get_settings


logger = structlog.get_logger()

COMPONENT_CLI = "cli"

# Extra time granted on top of the request timeouts before giving up on a screen.
SETTLE_GRACE_SECONDS = 1.0


def build_client(settings: AppSettings) -> HttpClient:
    """Create the HTTP client shared by the screens of one command."""
    return HttpClient(settings.client_config())


def _load_settings(overrides: dict[str, Any]) -> AppSettings:
    """Load settings, exit on validation failure.

    Args:
        overrides: Values given on the command line.

    Returns:
        Validated settings.
    """
    try:
        return get_settings(**overrides)
    except ValidationError as e:
        click.echo("Configuration validation failed:", err=True)
        for error in e.errors():
            loc = ".".join(str(part) for part in error["loc"])
            click.echo(f"  - {loc}: {error['msg']}", err=True)
        sys.exit(1)


def _echo_json(payload: dict[str, Any]) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


async def _run_dashboard(
    settings: AppSettings,
    filter_text: str | None,
    select: str | None,
) -> dict[str, Any]:
    router = Router()
    async with build_client(settings) as client:
        view_model = DashboardViewModel(
            client,
            router,
            endpoints=settings.endpoints(),
            discard_stale_results=settings.discard_stale_results,
        )
        view_model.activate()
        settled = await view_model.wait_until_idle(
            settings.timeout_seconds + SETTLE_GRACE_SECONDS
        )

    if filter_text is not None:
        view_model.send(FilterTextChanged(filter_text))
    if select is not None:
        view_model.send(SelectCategory(select))

    state = view_model.state
    return {
        "settled": settled,
        "primary_item_text": state.primary_item_text,
        "primary_item_error": state.primary_item_error,
        "categories": list(state.filtered_categories or ()),
        "categories_error": state.categories_error,
        "action_disabled": state.action_disabled,
        "navigation": [route.model_dump(mode="json") for route in router.state.path],
    }


async def _run_category(settings: AppSettings, name: str, count: int) -> dict[str, Any]:
    async with build_client(settings) as client:
        view_model = CategoryViewModel(
            name,
            client,
            endpoints=settings.endpoints(),
            item_count=count,
            discard_stale_results=settings.discard_stale_results,
        )
        view_model.activate()
        settled = await view_model.wait_until_idle(
            settings.timeout_seconds * count + SETTLE_GRACE_SECONDS
        )

    payload: dict[str, Any] = view_model.state.model_dump(mode="json")
    payload["settled"] = settled
    return payload


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Log level (overrides JOKEFEED_LOG_LEVEL)",
)
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Output logs in JSON format (overrides JOKEFEED_JSON_LOGS)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, json_logs: bool | None) -> None:
    """Browse random items and their categories from the command line."""
    overrides: dict[str, Any] = {}
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if json_logs is not None:
        overrides["json_logs"] = json_logs

    settings = _load_settings(overrides)
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
    )
    ctx.obj = settings


@cli.command()
@click.option(
    "--filter",
    "filter_text",
    default=None,
    help="Search text applied to the category list after loading",
)
@click.option(
    "--select",
    default=None,
    help="Category to navigate to after loading",
)
@click.pass_obj
def dashboard(settings: AppSettings, filter_text: str | None, select: str | None) -> None:
    """Load a random item and the category list."""
    session_id = uuid.uuid4().hex[:8]
    log = logger.bind(component=COMPONENT_CLI, command="dashboard")
    with screen_context("dashboard", session_id):
        log.info("command_started", api_base_url=settings.api_base_url)
        payload = asyncio.run(_run_dashboard(settings, filter_text, select))
        log.info("command_complete", settled=payload["settled"])

    _echo_json(payload)


@cli.command()
@click.argument("name")
@click.option(
    "--count",
    type=click.IntRange(1, 50),
    default=None,
    help="Number of items to fetch (overrides JOKEFEED_ITEM_COUNT)",
)
@click.pass_obj
def category(settings: AppSettings, name: str, count: int | None) -> None:
    """Load several distinct items from one category."""
    session_id = uuid.uuid4().hex[:8]
    log = logger.bind(component=COMPONENT_CLI, command="category", category=name)
    item_count = count if count is not None else settings.item_count
    with screen_context("category", session_id):
        log.info("command_started", item_count=item_count)
        payload = asyncio.run(_run_category(settings, name, item_count))
        log.info("command_complete", settled=payload["settled"])

    _echo_json(payload)


if __name__ == "__main__":
    cli()
