"""Observable state containers."""

from jokefeed.features.store.store import Reducer, StateStore, Subscriber, Unsubscribe


__all__ = ["Reducer", "StateStore", "Subscriber", "Unsubscribe"]
