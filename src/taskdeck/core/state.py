# src/taskdeck/core/state.py

"""
Application context.

Everything mutable lives on one AppState object that is created by the
composition root (cli/bootstrap.py) and passed around explicitly.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..storage.persistence import Theme, ThemeStore
from ..tasks.notifier import ReminderNotifier
from ..tasks.pagination import Paginator
from ..tasks.task_models import CompletionFilter, PriorityFilter, Task
from ..tasks.task_store import TaskStore
from ..tasks.task_view import Stats
from .events import EventBus


@dataclass(slots=True)
class ViewState:
    search: str = ""
    priority_filter: PriorityFilter = PriorityFilter.ALL
    completion_filter: CompletionFilter = CompletionFilter.ALL
    filtered: list[Task] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class Flash:
    """Transient user-visible message; hidden once `expires_at` (monotonic) has passed."""

    text: str
    level: str  # "info" | "error"
    expires_at: float

    def visible(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(slots=True, frozen=True)
class ConfirmationRequired:
    """
    First phase of a destructive operation.

    Nothing has changed yet; dispatch `intent` (already marked confirmed)
    to go ahead, or simply drop it to cancel.
    """

    prompt: str
    intent: Any


@dataclass(slots=True, frozen=True)
class Snapshot:
    """What the presentation layer needs to draw the list."""

    window: tuple[Task, ...]
    rendered: int
    total_filtered: int
    has_more: bool
    stats: Stats
    search: str
    priority_filter: PriorityFilter
    completion_filter: CompletionFilter
    theme: Theme
    message: Flash | None


@dataclass
class AppState:
    settings: Any

    store: TaskStore
    bus: EventBus
    pager: Paginator[Task]
    theme_store: ThemeStore
    theme: Theme = Theme.LIGHT

    notifier: ReminderNotifier | None = None
    view: ViewState = field(default_factory=ViewState)

    flash: Flash | None = None
    pending_confirmation: ConfirmationRequired | None = None

    monotonic: Callable[[], float] = time.monotonic
