"""Category view state.

State changes can be expressed two equivalent ways: by calling the
``handle_*`` methods directly, or by dispatching effects through
``reduce_category``. Both produce the same states for the same inputs.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from jokefeed.data_model.base import StrictBaseModel
from jokefeed.features.fetch.models import Item
from jokefeed.features.fetch.result import Failure, Result, Success


class CategoryState(StrictBaseModel):
    """Values that drive the category screen.

    The defaults are the loading state shown on first activation.
    """

    category_name: str
    is_loading: bool = True
    items: tuple[str, ...] = ()
    error_message: str | None = None
    action_disabled: bool = True

    def handle_loading(self) -> "CategoryState":
        """Return the state representing a fetch in progress."""
        return self.evolve(
            is_loading=True,
            items=(),
            error_message=None,
            action_disabled=True,
        )

    def handle_items_result(self, result: Result[Sequence[Item]]) -> "CategoryState":
        """Return the state representing a settled fetch.

        Args:
            result: The accumulated items, or the error that stopped the fetch.
        """
        if isinstance(result, Success):
            return self.evolve(
                is_loading=False,
                items=tuple(item.text for item in result.value),
                error_message=None,
                action_disabled=False,
            )

        return self.evolve(
            is_loading=False,
            error_message=result.error.message,
            action_disabled=False,
        )


@dataclass(frozen=True)
class StartedLoading:
    """A new fetch cycle started."""


@dataclass(frozen=True)
class ItemsFetched:
    """The fetch cycle settled with all items or the first error."""

    result: Result[Sequence[Item]]


CategoryEffect = StartedLoading | ItemsFetched


def reduce_category(state: CategoryState, effect: CategoryEffect) -> CategoryState:
    """Compute the next category state.

    Args:
        state: Current state.
        effect: Why the state should change.

    Returns:
        New state; ``state`` itself is never modified.
    """
    match effect:
        case StartedLoading():
            return state.evolve(
                is_loading=True,
                items=(),
                error_message=None,
                action_disabled=True,
            )

        case ItemsFetched(result=Success(value=items)):
            return state.evolve(
                is_loading=False,
                items=tuple(item.text for item in items),
                error_message=None,
                action_disabled=False,
            )

        case ItemsFetched(result=Failure(error=error)):
            return state.evolve(
                is_loading=False,
                error_message=error.message,
                action_disabled=False,
            )

        case _:
            msg = f"Unsupported category effect: {type(effect).__name__}"
            raise TypeError(msg)
