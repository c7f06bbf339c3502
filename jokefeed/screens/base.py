"""Building blocks shared by the screen view models."""

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

import structlog

from jokefeed.features.fetch.errors import RequestError
from jokefeed.features.fetch.protocols import JsonClient
from jokefeed.features.fetch.result import Failure, Result


logger = structlog.get_logger()

T = TypeVar("T")
S_co = TypeVar("S_co", covariant=True)
Ev_contra = TypeVar("Ev_contra", contravariant=True)


@dataclass(frozen=True)
class Refresh:
    """The user asked to reload the screen."""


class ViewModel(Protocol[S_co, Ev_contra]):
    """Interface the presentation layer talks to.

    The presentation layer reads ``state`` (or subscribes to the view
    model's store) and reports user intent with ``send``. It never
    writes state directly.
    """

    @property
    def state(self) -> S_co:
        """Current state snapshot."""
        ...

    def activate(self) -> None:
        """Start the initial fetches for the screen."""
        ...

    def send(self, event: Ev_contra) -> None:
        """Handle a user intent.

        Args:
            event: The intent that occurred.
        """
        ...


async def fetch_result(client: JsonClient, url: str, model: type[T] | Any) -> Result[T]:
    """Call the client and fold any escaping exception into a Failure.

    Args:
        client: Client to call.
        url: URL to fetch.
        model: Type to decode into.

    Returns:
        The client's result, or Failure(UNEXPECTED) if it raised.
    """
    try:
        return await client.get(url, model)
    except Exception as e:  # noqa: BLE001
        logger.warning("client_raised", url=url, error_type=type(e).__name__)
        return Failure(RequestError.from_exception(e))


class FetchGeneration:
    """Counter identifying the latest fetch cycle of a screen."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        """Generation of the most recent cycle."""
        return self._current

    def advance(self) -> int:
        """Start a new cycle and return its generation."""
        self._current += 1
        return self._current

    def is_current(self, generation: int) -> bool:
        """Check whether a cycle is still the most recent one."""
        return generation == self._current


class ScreenTasks:
    """Tracks the fetch tasks a screen has in flight.

    Tasks are never cancelled by the screen; a crashed task is logged
    and otherwise ignored so one failure cannot take down the others.
    """

    def __init__(self, screen: str) -> None:
        """Initialize the tracker.

        Args:
            screen: Screen name used in log events.
        """
        self._pending: set[asyncio.Task[None]] = set()
        self._log = logger.bind(component=screen)

    @property
    def pending_count(self) -> int:
        """Number of tasks still running."""
        return len(self._pending)

    def spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        """Schedule a coroutine on the running loop.

        Args:
            coro: Unit of work to run.
            name: Task name for debugging.

        Returns:
            The created task.
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._pending.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def wait_until_idle(self, timeout: float = 5.0) -> bool:
        """Wait for every tracked task, including ones spawned meanwhile.

        Args:
            timeout: Maximum time to wait in seconds.

        Returns:
            True if all tasks completed, False if the timeout was reached.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self._pending:
            remaining = deadline - loop.time()
            if remaining <= 0:
                self._log.warning("wait_until_idle_timeout", pending=len(self._pending))
                return False
            await asyncio.wait(set(self._pending), timeout=remaining)
        return True

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self._log.error(
                "screen_task_crashed",
                task=task.get_name(),
                error=str(exc),
                error_type=type(exc).__name__,
            )
