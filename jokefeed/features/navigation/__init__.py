"""Navigation routing."""

from jokefeed.features.navigation.router import (
    CategoryRoute,
    NavigationEffect,
    NavigationRouting,
    NavigationState,
    Push,
    ReplacePath,
    Route,
    Router,
    reduce_navigation,
)


__all__ = [
    "CategoryRoute",
    "NavigationEffect",
    "NavigationRouting",
    "NavigationState",
    "Push",
    "ReplacePath",
    "Route",
    "Router",
    "reduce_navigation",
]
