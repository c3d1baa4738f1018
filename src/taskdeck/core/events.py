# src/taskdeck/core/events.py

"""
Signals emitted by the core for external collaborators.

The core only publishes; whether anything reacts (confetti, desktop
notifications, a console line) is up to the subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TaskCompleted:
    """A task transitioned to completed (celebration signal)."""

    task_id: int
    title: str


@dataclass(slots=True, frozen=True)
class ReminderDue:
    """
    A due-soon reminder.

    kind:
    - "reminder": a freshly added task is due within the window
    - "upcoming": startup summary for the first incomplete task due soon
    """

    kind: str
    task_id: int
    message: str


@dataclass(slots=True, frozen=True)
class PersistenceFailed:
    """Writing the collection failed; in-memory state is still authoritative."""

    operation: str
    error: str


Listener = Callable[[Any], None]


class EventBus:
    """Tiny synchronous pub/sub. Listener failures are logged, never raised."""

    def __init__(self) -> None:
        self._listeners: list[tuple[type | None, Listener]] = []

    def subscribe(self, listener: Listener, event_type: type | None = None) -> None:
        """Subscribe to one event type, or to everything when event_type is None."""
        self._listeners.append((event_type, listener))

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners = [(t, fn) for (t, fn) in self._listeners if fn is not listener]

    def publish(self, event: Any) -> None:
        for event_type, listener in list(self._listeners):
            if event_type is not None and not isinstance(event, event_type):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception("Event listener failed event=%s", type(event).__name__)
