"""Structured logging setup for jokefeed."""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import structlog


# Standard library loggers of the HTTP stack; they log every request at INFO.
HTTP_LIBRARY_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: int | str) -> int:
    """Turn a level name such as ``"warning"`` into its numeric value.

    Args:
        level: Numeric level or level name.

    Returns:
        Numeric logging level.

    Raises:
        ValueError: If the name is not a known level.
    """
    if isinstance(level, int):
        return level
    numeric = logging.getLevelNamesMapping().get(level.upper())
    if numeric is None:
        msg = f"Unknown log level: {level}"
        raise ValueError(msg)
    return numeric


def configure_logging(
    level: int | str = logging.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> None:
    """Configure structlog and the standard library loggers.

    Screens and the fetch layer log through structlog; the HTTP stack
    logs through the standard library and is held at WARNING unless
    DEBUG was requested.

    Args:
        level: Minimum level, numeric or by name (default: INFO).
        output: Output stream (default: stderr at call time).
        json_format: Render JSON lines instead of console output.
    """
    numeric_level = resolve_level(level)
    stream = output if output is not None else sys.stderr

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_format:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=stream, level=numeric_level)
    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a bound logger instance.

    Args:
        name: Optional logger name.

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger


def bind_screen_context(screen: str, session_id: str) -> None:
    """Attach the active screen to every subsequent log event.

    Args:
        screen: Screen name, e.g. ``dashboard``.
        session_id: Identifier of the screen activation.
    """
    structlog.contextvars.bind_contextvars(screen=screen, session_id=session_id)


def clear_screen_context() -> None:
    """Detach the screen context."""
    structlog.contextvars.unbind_contextvars("screen", "session_id")


@contextmanager
def screen_context(screen: str, session_id: str) -> Iterator[None]:
    """Bind screen context for the duration of a block."""
    bind_screen_context(screen, session_id)
    try:
        yield
    finally:
        clear_screen_context()
