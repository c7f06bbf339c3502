"""Navigation path state shared by all screens."""

from dataclasses import dataclass
from typing import Annotated, Literal, Protocol, runtime_checkable

import structlog
from pydantic import Field

from jokefeed.data_model.base import StrictBaseModel
from jokefeed.features.store.store import StateStore


logger = structlog.get_logger()


class CategoryRoute(StrictBaseModel):
    """Destination showing the items of one category."""

    kind: Literal["category"] = "category"
    name: Annotated[str, Field(min_length=1)]


# Single variant for now; extend with a discriminated union when screens are added.
Route = CategoryRoute


class NavigationState(StrictBaseModel):
    """Ordered stack of routes pushed on top of the root screen."""

    path: tuple[Route, ...] = ()

    @property
    def depth(self) -> int:
        """Number of routes above the root screen."""
        return len(self.path)

    @property
    def top(self) -> Route | None:
        """The route currently shown, or None at the root."""
        return self.path[-1] if self.path else None


@dataclass(frozen=True)
class Push:
    """Append a route to the path."""

    route: Route


@dataclass(frozen=True)
class ReplacePath:
    """Replace the whole path, e.g. after the presentation layer pops."""

    path: tuple[Route, ...]


NavigationEffect = Push | ReplacePath


def reduce_navigation(state: NavigationState, effect: NavigationEffect) -> NavigationState:
    """Compute the next navigation state.

    Args:
        state: Current navigation state.
        effect: Navigation effect.

    Returns:
        New navigation state.
    """
    match effect:
        case Push(route=route):
            return state.evolve(path=(*state.path, route))
        case ReplacePath(path=path):
            return state.evolve(path=tuple(path))
        case _:
            msg = f"Unsupported navigation effect: {type(effect).__name__}"
            raise TypeError(msg)


@runtime_checkable
class NavigationRouting(Protocol):
    """Protocol for navigation routers.

    Screens only push; popping is owned by the presentation layer, which
    observes the path and truncates it with ``replace_path``.
    """

    @property
    def state(self) -> NavigationState:
        """Current navigation state."""
        ...

    def push(self, route: Route) -> None:
        """Append a route to the navigation path."""
        ...


class Router:
    """Process-wide navigation router backed by an observable store."""

    def __init__(self, initial: NavigationState | None = None) -> None:
        """Initialize the router.

        Args:
            initial: Starting navigation state (defaults to the root screen).
        """
        self._store: StateStore[NavigationState, NavigationEffect] = StateStore(
            initial or NavigationState(), reduce_navigation, name="navigation"
        )
        self._log = logger.bind(component="navigation")

    @property
    def store(self) -> StateStore[NavigationState, NavigationEffect]:
        """Observable store holding the navigation state."""
        return self._store

    @property
    def state(self) -> NavigationState:
        """Current navigation state."""
        return self._store.state

    def push(self, route: Route) -> None:
        """Append a route to the navigation path.

        Args:
            route: Route to show next.
        """
        self._log.info("route_pushed", route=route.kind, name=route.name)
        self._store.dispatch(Push(route))

    def replace_path(self, path: tuple[Route, ...]) -> None:
        """Replace the navigation path.

        Args:
            path: New path, typically a prefix of the current one.
        """
        self._store.dispatch(ReplacePath(tuple(path)))
