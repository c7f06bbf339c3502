"""Dashboard screen: a random item plus the category list."""

from jokefeed.screens.dashboard.state import (
    DashboardEffect,
    DashboardState,
    FilterChanged,
    ItemFetched,
    ListFetched,
    StartedLoading,
    filter_categories,
    reduce_dashboard,
    unique_in_order,
)
from jokefeed.screens.dashboard.view_model import (
    DashboardEvent,
    DashboardViewModel,
    FilterTextChanged,
    SelectCategory,
)


__all__ = [
    "DashboardEffect",
    "DashboardEvent",
    "DashboardState",
    "DashboardViewModel",
    "FilterChanged",
    "FilterTextChanged",
    "ItemFetched",
    "ListFetched",
    "SelectCategory",
    "StartedLoading",
    "filter_categories",
    "reduce_dashboard",
    "unique_in_order",
]
