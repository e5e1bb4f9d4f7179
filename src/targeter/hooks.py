# src/targeter/hooks.py
"""Reducer hooks: ordered extension points where collaborators can transform
a value before the core commits to it.

Every reducer receives the current value followed by the event's context
arguments and returns the (possibly new) value. Reducers run in registration
order.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from .logs import getAppLogger


T = TypeVar("T")

Reducer = Callable[..., Any]


class ReducerRegistry:
    """Ordered registry of reducers, keyed by event name."""

    def __init__(self) -> None:
        self._reducers: dict[str, list[Reducer]] = {}

    def add(self, event: str, reducer: Reducer) -> Callable[[], bool]:
        """Register ``reducer`` for ``event``; returns a function that removes it."""
        self._reducers.setdefault(event, []).append(reducer)
        return lambda: self.remove(event, reducer)

    def remove(self, event: str, reducer: Reducer) -> bool:
        reducers = self._reducers.get(event, [])
        if reducer not in reducers:
            return False
        reducers.remove(reducer)
        if not reducers:
            del self._reducers[event]
        return True

    def reducers(self, event: str) -> list[Reducer]:
        return list(self._reducers.get(event, []))

    def reduce(self, event: str, value: T, *context: Any) -> T:
        """Pass ``value`` through every reducer registered for ``event``."""
        logger = getAppLogger()
        reducers = self.reducers(event)
        if reducers:
            logger.trace(f"[reduce] {event}: {len(reducers)} reducer(s)")
        for reducer in reducers:
            value = reducer(value, *context)
        return value

    def emit(self, event: str, *context: Any) -> None:
        """Notify every reducer registered for ``event``, ignoring results."""
        for reducer in self.reducers(event):
            reducer(*context)
