"""Refresh notifications between the budget store, services and views.

The host application creates one :class:`EventChannel` and hands it to the
components that publish or listen.  Publishing never fails because of a
listener: listener errors are logged and delivery continues.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List

from .logging_setup import get_logger

_logger = get_logger("finance_core.events")


class RefreshType(str, Enum):
    BUDGETS = "budgets"
    TRANSACTIONS = "transactions"
    ADVICE = "advice"
    SETTINGS = "settings"
    ALL = "all"


Listener = Callable[[RefreshType], None]


class EventChannel:
    """Publish/subscribe channel for :class:`RefreshType` notifications."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unsubscribes it."""
        if listener not in self._listeners:
            self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def clear(self) -> None:
        self._listeners.clear()

    def publish(self, kind: RefreshType) -> None:
        # Iterate over a snapshot so listeners may unsubscribe while handling.
        for listener in list(self._listeners):
            try:
                listener(kind)
            except Exception:
                _logger.exception("Refresh listener %r failed for %s", listener, kind.value)

    def __len__(self) -> int:
        return len(self._listeners)
