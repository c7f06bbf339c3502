"""Dashboard view state and its reducer.

The dashboard shows one random item plus the filterable list of all
categories. The two halves are loaded independently, so every effect
touches only the fields it owns.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from jokefeed.data_model.base import StrictBaseModel
from jokefeed.features.fetch.models import Item
from jokefeed.features.fetch.result import Failure, Result, Success


class DashboardState(StrictBaseModel):
    """Values that drive the dashboard.

    The defaults are the state shown before anything has loaded.
    """

    # Kept so the item can be handed to another screen; views read the text.
    primary_item: Item | None = None
    primary_item_error: str | None = None
    all_categories: tuple[str, ...] = ()
    filtered_categories: tuple[str, ...] | None = None
    categories_error: str | None = None
    action_disabled: bool = True

    @property
    def primary_item_text(self) -> str | None:
        """Text of the random item, or None while loading or after a failure."""
        return self.primary_item.text if self.primary_item is not None else None


@dataclass(frozen=True)
class StartedLoading:
    """The random item is being fetched."""


@dataclass(frozen=True)
class ItemFetched:
    """The random item request settled."""

    result: Result[Item]


@dataclass(frozen=True)
class ListFetched:
    """The categories request settled."""

    result: Result[Sequence[str]]


@dataclass(frozen=True)
class FilterChanged:
    """The category search text changed."""

    text: str


DashboardEffect = StartedLoading | ItemFetched | ListFetched | FilterChanged


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Drop repeated values, keeping the first occurrence of each."""
    return tuple(dict.fromkeys(values))


def filter_categories(categories: Sequence[str], search_text: str) -> tuple[str, ...]:
    """Select the categories matching a search text.

    The text is treated as a case-insensitive regular expression. Text
    that does not compile falls back to a case-insensitive substring
    match. Empty text matches everything.

    Args:
        categories: Candidate category names.
        search_text: Text entered by the user.

    Returns:
        Matching categories in their original order.
    """
    if not search_text:
        return tuple(categories)

    try:
        pattern = re.compile(search_text, re.IGNORECASE)
    except re.error:
        needle = search_text.casefold()
        return tuple(name for name in categories if needle in name.casefold())

    return tuple(name for name in categories if pattern.search(name))


def reduce_dashboard(state: DashboardState, effect: DashboardEffect) -> DashboardState:
    """Compute the next dashboard state.

    Args:
        state: Current state.
        effect: Why the state should change.

    Returns:
        New state; ``state`` itself is never modified.
    """
    match effect:
        case StartedLoading():
            return state.evolve(
                primary_item=None,
                primary_item_error=None,
                action_disabled=True,
            )

        case ItemFetched(result=Success(value=item)):
            return state.evolve(
                primary_item=item,
                primary_item_error=None,
                action_disabled=False,
            )

        case ItemFetched(result=Failure(error=error)):
            return state.evolve(
                primary_item=None,
                primary_item_error=error.message,
                action_disabled=False,
            )

        case ListFetched(result=Success(value=categories)):
            names = unique_in_order(categories)
            return state.evolve(
                all_categories=names,
                filtered_categories=names,
                categories_error=None,
            )

        case ListFetched(result=Failure(error=error)):
            return state.evolve(
                all_categories=(),
                filtered_categories=(),
                categories_error=error.message,
            )

        case FilterChanged(text=text):
            return state.evolve(
                filtered_categories=filter_categories(state.all_categories, text)
            )

        case _:
            msg = f"Unsupported dashboard effect: {type(effect).__name__}"
            raise TypeError(msg)
