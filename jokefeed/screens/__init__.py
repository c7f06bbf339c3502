"""Screen state and view models."""

from jokefeed.screens.base import (
    FetchGeneration,
    Refresh,
    ScreenTasks,
    ViewModel,
    fetch_result,
)


__all__ = [
    "FetchGeneration",
    "Refresh",
    "ScreenTasks",
    "ViewModel",
    "fetch_result",
]
