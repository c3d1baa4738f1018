# src/taskdeck/core/intents.py

"""
User intents processed by the dispatcher.

Each intent is a plain immutable message. Destructive intents carry a
`confirmed` flag: the first dispatch without it only asks for confirmation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..tasks.task_models import CompletionFilter, Priority, PriorityFilter
from ..tasks.task_store import KEEP, Keep


@dataclass(slots=True, frozen=True)
class AddTask:
    title: str
    description: str = ""
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM


@dataclass(slots=True, frozen=True)
class EditTask:
    task_id: int
    title: str | None = None
    description: str | None = None
    due_date: date | None | Keep = KEEP
    priority: Priority | None = None


@dataclass(slots=True, frozen=True)
class ToggleTask:
    task_id: int


@dataclass(slots=True, frozen=True)
class DeleteTask:
    task_id: int
    confirmed: bool = False


@dataclass(slots=True, frozen=True)
class ClearAll:
    confirmed: bool = False


@dataclass(slots=True, frozen=True)
class Search:
    text: str


@dataclass(slots=True, frozen=True)
class FilterChange:
    """None leaves the corresponding selector as it is."""

    priority: PriorityFilter | None = None
    completion: CompletionFilter | None = None


@dataclass(slots=True, frozen=True)
class LoadMore:
    pass


@dataclass(slots=True, frozen=True)
class Scroll:
    """Viewport position from interactive front ends; the console uses LoadMore."""

    scroll_top: float
    client_height: float
    scroll_height: float


@dataclass(slots=True, frozen=True)
class ToggleTheme:
    pass


@dataclass(slots=True, frozen=True)
class Refresh:
    """Re-publish the current state (e.g. after a transient message expired)."""


Intent = (
    AddTask
    | EditTask
    | ToggleTask
    | DeleteTask
    | ClearAll
    | Search
    | FilterChange
    | LoadMore
    | Scroll
    | ToggleTheme
    | Refresh
)
