# tests/test_task_view.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskdeck.tasks.task_models import CompletionFilter, Priority, PriorityFilter, Task
from taskdeck.tasks.task_view import compute_stats, percent_complete, recompute

T0 = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)


def mk(
    tid: int,
    title: str,
    *,
    minutes: int = 0,
    priority: Priority = Priority.MEDIUM,
    completed: bool = False,
    description: str = "",
) -> Task:
    return Task(
        id=tid,
        title=title,
        description=description,
        due_date=None,
        priority=priority,
        completed=completed,
        created_at=T0 + timedelta(minutes=minutes),
    )


@pytest.fixture()
def tasks() -> list[Task]:
    return [
        mk(1, "Buy milk", minutes=1, priority=Priority.MEDIUM),
        mk(2, "Write report", minutes=2, priority=Priority.HIGH),
        mk(3, "Call mom", minutes=3, priority=Priority.LOW, completed=True, description="about the MILK delivery"),
        mk(4, "Fix bike", minutes=4, priority=Priority.HIGH, completed=True),
    ]


def test_priority_filter_example() -> None:
    collection = [
        mk(1, "Buy milk", minutes=1, priority=Priority.MEDIUM),
        mk(2, "Write report", minutes=2, priority=Priority.HIGH),
    ]
    out = recompute(collection, "", PriorityFilter.HIGH, CompletionFilter.ALL)
    assert [t.title for t in out] == ["Write report"]


def test_sorted_newest_first(tasks: list[Task]) -> None:
    out = recompute(tasks)
    assert [t.id for t in out] == [4, 3, 2, 1]
    assert all(a.created_at >= b.created_at for a, b in zip(out, out[1:]))


def test_ties_keep_collection_order() -> None:
    same = [mk(10, "a"), mk(11, "b"), mk(12, "c", minutes=5), mk(13, "d")]
    out = recompute(same)
    assert [t.id for t in out] == [12, 10, 11, 13]


def test_search_matches_title_or_description_case_insensitive(tasks: list[Task]) -> None:
    out = recompute(tasks, "  milk ")
    assert [t.id for t in out] == [3, 1]


def test_completion_filters(tasks: list[Task]) -> None:
    assert [t.id for t in recompute(tasks, completion_filter=CompletionFilter.PENDING)] == [2, 1]
    assert [t.id for t in recompute(tasks, completion_filter=CompletionFilter.COMPLETED)] == [4, 3]


def test_filters_compose(tasks: list[Task]) -> None:
    out = recompute(tasks, "i", PriorityFilter.HIGH, CompletionFilter.COMPLETED)
    assert [t.id for t in out] == [4]


def test_recompute_is_pure(tasks: list[Task]) -> None:
    original = list(tasks)
    first = recompute(tasks, "o", PriorityFilter.ALL, CompletionFilter.ALL)
    second = recompute(tasks, "o", PriorityFilter.ALL, CompletionFilter.ALL)
    assert first == second
    assert tasks == original


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(0, 0, 0), (0, 5, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (5, 5, 100)],
)
def test_percent_complete_rounds_half_up(done: int, total: int, expected: int) -> None:
    assert percent_complete(done, total) == expected


def test_compute_stats(tasks: list[Task]) -> None:
    stats = compute_stats(tasks)
    assert (stats.total, stats.completed, stats.percent) == (4, 2, 50)
