"""Category screen: items belonging to one category."""

from jokefeed.screens.category.state import (
    CategoryEffect,
    CategoryState,
    ItemsFetched,
    StartedLoading,
    reduce_category,
)
from jokefeed.screens.category.view_model import (
    DEFAULT_ITEM_COUNT,
    CategoryEvent,
    CategoryViewModel,
)


__all__ = [
    "DEFAULT_ITEM_COUNT",
    "CategoryEffect",
    "CategoryEvent",
    "CategoryState",
    "CategoryViewModel",
    "ItemsFetched",
    "StartedLoading",
    "reduce_category",
]
