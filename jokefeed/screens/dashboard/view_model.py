"""Dashboard view model: concurrent item and category fetches."""

import uuid
from dataclasses import dataclass

import structlog

from jokefeed.features.fetch.config import ApiEndpoints
from jokefeed.features.fetch.models import Item
from jokefeed.features.fetch.protocols import JsonClient
from jokefeed.features.navigation.router import CategoryRoute, NavigationRouting
from jokefeed.features.store.store import StateStore
from jokefeed.screens.base import FetchGeneration, Refresh, ScreenTasks, fetch_result
from jokefeed.screens.dashboard.state import (
    DashboardEffect,
    DashboardState,
    FilterChanged,
    ItemFetched,
    ListFetched,
    StartedLoading,
    reduce_dashboard,
)


logger = structlog.get_logger()


@dataclass(frozen=True)
class SelectCategory:
    """The user picked a category from the list."""

    name: str


@dataclass(frozen=True)
class FilterTextChanged:
    """The user edited the category search text."""

    text: str


DashboardEvent = Refresh | SelectCategory | FilterTextChanged


class DashboardViewModel:
    """Drives the dashboard screen.

    Activation and refresh launch two independent fetches, one for a
    random item and one for the category list. Each settles into exactly
    one effect, whatever the other one does.
    """

    def __init__(  # noqa: PLR0913
        self,
        client: JsonClient,
        router: NavigationRouting,
        endpoints: ApiEndpoints | None = None,
        state: DashboardState | None = None,
        discard_stale_results: bool = False,
    ) -> None:
        """Initialize the view model.

        Args:
            client: Shared JSON client.
            router: Navigation router receiving category selections.
            endpoints: API endpoint templates.
            state: Initial state (defaults to the loading state).
            discard_stale_results: Drop results of superseded refresh cycles.
        """
        self._client = client
        self._router = router
        self._endpoints = endpoints or ApiEndpoints()
        self._discard_stale_results = discard_stale_results
        self._store: StateStore[DashboardState, DashboardEffect] = StateStore(
            state or DashboardState(), reduce_dashboard, name="dashboard"
        )
        self._tasks = ScreenTasks("dashboard")
        self._generation = FetchGeneration()
        self._log = logger.bind(component="dashboard", session_id=uuid.uuid4().hex[:8])

    @property
    def state(self) -> DashboardState:
        """Current state snapshot."""
        return self._store.state

    @property
    def store(self) -> StateStore[DashboardState, DashboardEffect]:
        """Observable store for subscribers."""
        return self._store

    def activate(self) -> None:
        """Start the initial fetches. Must be called on the event loop."""
        self._fetch_data()

    def send(self, event: DashboardEvent) -> None:
        """Handle a user intent.

        Args:
            event: The intent that occurred.
        """
        match event:
            case Refresh():
                self._fetch_data()
            case SelectCategory(name=""):
                self._log.warning("empty_category_selected")
            case SelectCategory(name=name):
                self._router.push(CategoryRoute(name=name))
            case FilterTextChanged(text=text):
                self._store.dispatch(FilterChanged(text))
            case _:
                msg = f"Unsupported dashboard event: {type(event).__name__}"
                raise TypeError(msg)

    async def wait_until_idle(self, timeout: float = 5.0) -> bool:
        """Wait for in-flight fetches to settle.

        Args:
            timeout: Maximum time to wait in seconds.

        Returns:
            True if every fetch settled in time.
        """
        return await self._tasks.wait_until_idle(timeout)

    def _fetch_data(self) -> None:
        generation = self._generation.advance()
        self._log.info("fetch_cycle_started", generation=generation)
        self._store.dispatch(StartedLoading())

        # Both requests run concurrently and report independently.
        self._tasks.spawn(
            self._load_primary_item(generation), name=f"dashboard-item-{generation}"
        )
        self._tasks.spawn(
            self._load_categories(generation),
            name=f"dashboard-categories-{generation}",
        )

    async def _load_primary_item(self, generation: int) -> None:
        url = self._endpoints.random_item_url()
        result = await fetch_result(self._client, url, Item)
        self._apply(generation, ItemFetched(result))

    async def _load_categories(self, generation: int) -> None:
        url = self._endpoints.categories_url()
        result = await fetch_result(self._client, url, list[str])
        self._apply(generation, ListFetched(result))

    def _apply(self, generation: int, effect: DashboardEffect) -> None:
        if self._discard_stale_results and not self._generation.is_current(generation):
            self._log.info(
                "stale_result_discarded",
                effect=type(effect).__name__,
                generation=generation,
                current_generation=self._generation.current,
            )
            return
        self._store.dispatch(effect)
