"""Observability module for structured logging."""

from jokefeed.features.observability.logging import (
    bind_screen_context,
    clear_screen_context,
    configure_logging,
    get_logger,
    resolve_level,
    screen_context,
)


__all__ = [
    "bind_screen_context",
    "clear_screen_context",
    "configure_logging",
    "get_logger",
    "resolve_level",
    "screen_context",
]
