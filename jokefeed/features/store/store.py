"""Observable, single-writer state container.

A store owns exactly one immutable state value. The only way to change
it is ``dispatch(effect)``, which runs the pure reducer under a lock and
swaps in the result. Subscribers are notified after the lock is
released, and only when the new state differs from the old one.
"""

import asyncio
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

import structlog


logger = structlog.get_logger()

S = TypeVar("S")
E = TypeVar("E")

Reducer = Callable[[S, E], S]
Subscriber = Callable[[S], None]
Unsubscribe = Callable[[], None]


class StateStore(Generic[S, E]):
    """Holds one state value and publishes every change.

    Usage:
        store = StateStore(DashboardState(), reduce_dashboard, name="dashboard")
        unsubscribe = store.subscribe(render)
        store.dispatch(StartedLoading())
    """

    def __init__(self, initial: S, reducer: Reducer[S, E], name: str) -> None:
        """Initialize the store.

        Args:
            initial: Initial state value.
            reducer: Pure function computing the next state.
            name: Store name used in log events.
        """
        self._state = initial
        self._reducer = reducer
        self._name = name
        self._version = 0
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber[S]] = []
        self._log = logger.bind(component="store", store=name)

    @property
    def state(self) -> S:
        """Get the current state snapshot."""
        return self._state

    @property
    def version(self) -> int:
        """Get the number of changes applied so far."""
        return self._version

    @property
    def name(self) -> str:
        """Get the store name."""
        return self._name

    def dispatch(self, effect: E) -> S:
        """Apply an effect and publish the resulting state.

        Args:
            effect: Effect describing why the state changes.

        Returns:
            The state after the effect was applied.
        """
        with self._lock:
            old_state = self._state
            new_state = self._reducer(old_state, effect)
            changed = new_state != old_state
            if changed:
                self._state = new_state
                self._version += 1
            version = self._version

        self._log.debug(
            "state_transition",
            effect=type(effect).__name__,
            changed=changed,
            version=version,
        )

        if changed:
            self._notify(new_state)
        return new_state

    def subscribe(
        self,
        callback: Subscriber[S],
        emit_current: bool = False,
    ) -> Unsubscribe:
        """Register a callback for state changes.

        Args:
            callback: Called with each new state.
            emit_current: Also call it immediately with the current state.

        Returns:
            Function that removes the subscription.
        """
        with self._lock:
            self._subscribers.append(callback)
            current = self._state

        if emit_current:
            callback(current)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    async def wait_for(
        self,
        predicate: Callable[[S], bool],
        timeout: float = 1.0,
    ) -> S:
        """Wait until the state satisfies a predicate.

        Args:
            predicate: Condition evaluated against each published state.
            timeout: Maximum time to wait in seconds.

        Returns:
            The first state that satisfied the predicate.

        Raises:
            TimeoutError: If the predicate is not satisfied in time.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[S] = loop.create_future()

        def resolve(state: S) -> None:
            if not future.done():
                future.set_result(state)

        def check(state: S) -> None:
            if predicate(state):
                loop.call_soon_threadsafe(resolve, state)

        unsubscribe = self.subscribe(check, emit_current=True)
        try:
            return await asyncio.wait_for(future, timeout)
        finally:
            unsubscribe()

    def _notify(self, state: S) -> None:
        """Deliver a state to subscribers, isolating subscriber failures."""
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(state)
            except Exception:
                self._log.exception(
                    "subscriber_error",
                    subscriber=getattr(callback, "__name__", repr(callback)),
                )
