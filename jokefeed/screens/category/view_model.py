"""Category view model: a burst of sequential item fetches."""

import uuid

import structlog

from jokefeed.features.fetch.config import ApiEndpoints
from jokefeed.features.fetch.models import Item
from jokefeed.features.fetch.protocols import JsonClient
from jokefeed.features.fetch.result import Failure, Success
from jokefeed.features.store.store import StateStore
from jokefeed.screens.base import FetchGeneration, Refresh, ScreenTasks, fetch_result
from jokefeed.screens.category.state import (
    CategoryEffect,
    CategoryState,
    ItemsFetched,
    StartedLoading,
    reduce_category,
)


logger = structlog.get_logger()

DEFAULT_ITEM_COUNT = 5

CategoryEvent = Refresh


class CategoryViewModel:
    """Drives the screen listing items of one category.

    Each cycle fetches up to ``item_count`` random items one after the
    other, skipping items whose text was already seen. The first failure
    stops the cycle. Only the settled outcome reaches the state, so there
    is never a partially filled list.
    """

    def __init__(
        self,
        category_name: str,
        client: JsonClient,
        endpoints: ApiEndpoints | None = None,
        item_count: int = DEFAULT_ITEM_COUNT,
        discard_stale_results: bool = False,
    ) -> None:
        """Initialize the view model.

        Args:
            category_name: Category whose items are shown.
            client: Shared JSON client.
            endpoints: API endpoint templates.
            item_count: Number of fetches per cycle.
            discard_stale_results: Drop results of superseded refresh cycles.

        Raises:
            ValueError: If item_count is smaller than 1.
        """
        if item_count < 1:
            msg = f"item_count must be at least 1, got {item_count}"
            raise ValueError(msg)

        self._category_name = category_name
        self._client = client
        self._endpoints = endpoints or ApiEndpoints()
        self._item_count = item_count
        self._discard_stale_results = discard_stale_results
        self._store: StateStore[CategoryState, CategoryEffect] = StateStore(
            CategoryState(category_name=category_name),
            reduce_category,
            name="category",
        )
        self._tasks = ScreenTasks("category")
        self._generation = FetchGeneration()
        self._log = logger.bind(
            component="category",
            category=category_name,
            session_id=uuid.uuid4().hex[:8],
        )

    @property
    def category_name(self) -> str:
        """Category shown by this screen."""
        return self._category_name

    @property
    def item_count(self) -> int:
        """Number of fetches per cycle."""
        return self._item_count

    @property
    def state(self) -> CategoryState:
        """Current state snapshot."""
        return self._store.state

    @property
    def store(self) -> StateStore[CategoryState, CategoryEffect]:
        """Observable store for subscribers."""
        return self._store

    def activate(self) -> None:
        """Start the initial fetch cycle. Must be called on the event loop."""
        self._fetch_data()

    def send(self, event: CategoryEvent) -> None:
        """Handle a user intent.

        Args:
            event: The intent that occurred.
        """
        match event:
            case Refresh():
                self._fetch_data()
            case _:
                msg = f"Unsupported category event: {type(event).__name__}"
                raise TypeError(msg)

    async def wait_until_idle(self, timeout: float = 5.0) -> bool:
        """Wait for in-flight fetch cycles to settle.

        Args:
            timeout: Maximum time to wait in seconds.

        Returns:
            True if every cycle settled in time.
        """
        return await self._tasks.wait_until_idle(timeout)

    def _fetch_data(self) -> None:
        generation = self._generation.advance()
        self._log.info(
            "fetch_cycle_started", generation=generation, item_count=self._item_count
        )
        self._store.dispatch(StartedLoading())
        self._tasks.spawn(
            self._load_items(generation), name=f"category-items-{generation}"
        )

    async def _load_items(self, generation: int) -> None:
        url = self._endpoints.random_item_url(self._category_name)
        collected: dict[str, Item] = {}

        for attempt in range(1, self._item_count + 1):
            result = await fetch_result(self._client, url, Item)
            if isinstance(result, Failure):
                self._log.warning(
                    "fetch_cycle_aborted",
                    generation=generation,
                    attempt=attempt,
                    **result.error.to_dict(),
                )
                self._apply(generation, ItemsFetched(result))
                return
            # Repeated texts are skipped; the first occurrence wins.
            collected.setdefault(result.value.text, result.value)

        self._log.info(
            "fetch_cycle_complete",
            generation=generation,
            unique_items=len(collected),
        )
        self._apply(generation, ItemsFetched(Success(tuple(collected.values()))))

    def _apply(self, generation: int, effect: CategoryEffect) -> None:
        if self._discard_stale_results and not self._generation.is_current(generation):
            self._log.info(
                "stale_result_discarded",
                effect=type(effect).__name__,
                generation=generation,
                current_generation=self._generation.current,
            )
            return
        self._store.dispatch(effect)
