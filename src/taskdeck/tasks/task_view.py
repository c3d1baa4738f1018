# src/taskdeck/tasks/task_view.py

"""
View filter: the derived, filtered and sorted sequence shown in the list.

Everything here is a pure function of its inputs. Callers recompute from
scratch whenever the collection or a view input changes.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import CompletionFilter, PriorityFilter, Task


@dataclass(slots=True, frozen=True)
class Stats:
    total: int
    completed: int
    percent: int


def matches(
    task: Task,
    search: str,
    priority_filter: PriorityFilter = PriorityFilter.ALL,
    completion_filter: CompletionFilter = CompletionFilter.ALL,
) -> bool:
    needle = (search or "").strip().casefold()
    if needle and needle not in task.title.casefold() and needle not in (task.description or "").casefold():
        return False
    if not priority_filter.matches(task.priority):
        return False
    return completion_filter.matches(task.completed)


def recompute(
    tasks: Iterable[Task],
    search: str = "",
    priority_filter: PriorityFilter = PriorityFilter.ALL,
    completion_filter: CompletionFilter = CompletionFilter.ALL,
) -> list[Task]:
    """
    Filter, then sort newest first.

    Python's sort is stable (also with reverse=True), so tasks with identical
    created_at keep their collection order.
    """
    picked = [t for t in tasks if matches(t, search, priority_filter, completion_filter)]
    picked.sort(key=lambda t: t.created_at, reverse=True)
    return picked


def percent_complete(completed: int, total: int) -> int:
    """Rounded half up (2.5 -> 3), 0 for an empty list."""
    if total <= 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def compute_stats(tasks: Iterable[Task]) -> Stats:
    items = list(tasks)
    done = sum(1 for t in items if t.completed)
    return Stats(total=len(items), completed=done, percent=percent_complete(done, len(items)))
