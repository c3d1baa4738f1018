# src/taskdeck/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime, timezone

from ..core.errors import (
    DuplicateTitleError,
    EmptyTitleError,
    InvalidPriorityError,
    PersistenceWriteError,
    TaskNotFoundError,
)
from ..core.events import EventBus, PersistenceFailed, TaskCompleted
from ..core.ports import TaskRepo
from .task_models import Priority, Task

logger = logging.getLogger(__name__)


class Keep:
    def __repr__(self) -> str:
        return "KEEP"


# Marker for "field not provided" where None is a meaningful value (due_date).
KEEP = Keep()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """
    Authoritative, ordered, in-memory task collection.

    - Titles are trimmed and unique case-insensitively.
    - Ids grow monotonically (ms-timestamp based) and are never reused,
      not even after clear_all() or a restart.
    - Tasks are frozen; edits swap in an updated copy.
    - Every successful mutation writes the full collection through the repo.
      A failed write is logged and published as PersistenceFailed; the
      in-memory collection stays authoritative.
    """

    def __init__(
        self,
        repo: TaskRepo | None = None,
        *,
        tasks: Iterable[Task] = (),
        bus: EventBus | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._repo = repo
        self._bus = bus
        self._clock = clock
        self._tasks: list[Task] = []
        self._last_id = 0

        seen: set[str] = set()
        for task in tasks:
            key = task.title.casefold()
            if key in seen:
                logger.warning("Dropping stored task id=%s: duplicate title %r", task.id, task.title)
                continue
            if any(t.id == task.id for t in self._tasks):
                logger.warning("Dropping stored task id=%s: duplicate id", task.id)
                continue
            seen.add(key)
            self._tasks.append(task)
            self._last_id = max(self._last_id, task.id)

        logger.info("TaskStore ready total=%d", len(self._tasks))

    # ---- low-level helpers ----

    def _index_of(self, task_id: int) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise TaskNotFoundError(task_id)

    def _validate_title(self, title: str, *, exclude_id: int | None = None) -> str:
        clean = (title or "").strip()
        if not clean:
            raise EmptyTitleError()
        key = clean.casefold()
        for t in self._tasks:
            if t.id != exclude_id and t.title.casefold() == key:
                raise DuplicateTitleError(clean)
        return clean

    def _coerce_priority(self, priority: object) -> Priority:
        try:
            return Priority(priority)
        except ValueError:
            raise InvalidPriorityError(priority) from None

    def _allocate_id(self, now: datetime) -> int:
        nid = max(int(now.timestamp() * 1000), self._last_id + 1)
        self._last_id = nid
        return nid

    def _persist(self, operation: str) -> None:
        if self._repo is None:
            return
        try:
            self._repo.save_tasks(list(self._tasks))
        except PersistenceWriteError as e:
            logger.error("Persisting tasks failed after %s: %s", operation, e)
            self._publish(PersistenceFailed(operation=operation, error=str(e)))

    def _publish(self, event: object) -> None:
        if self._bus is not None:
            self._bus.publish(event)

    # ---- read side ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def tasks(self) -> tuple[Task, ...]:
        """Collection order (insertion order), read-only."""
        return tuple(self._tasks)

    def get(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    # ---- mutations ----

    def add(
        self,
        title: str,
        description: str = "",
        due_date: date | None = None,
        priority: Priority = Priority.MEDIUM,
    ) -> Task:
        clean_title = self._validate_title(title)
        priority = self._coerce_priority(priority)
        now = self._clock()
        task = Task(
            id=self._allocate_id(now),
            title=clean_title,
            description=(description or "").strip(),
            due_date=due_date,
            priority=priority,
            completed=False,
            created_at=now,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s title=%r priority=%s due=%s", task.id, task.title, task.priority, task.due_date)
        self._persist("add")
        return task

    def edit(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        due_date: date | None | Keep = KEEP,
        priority: Priority | None = None,
    ) -> Task:
        """
        Apply only the provided fields, all or nothing.

        due_date=None clears the date; leave it as KEEP to keep the current one.
        """
        idx = self._index_of(task_id)
        current = self._tasks[idx]

        changes: dict[str, object] = {}
        if title is not None:
            changes["title"] = self._validate_title(title, exclude_id=task_id)
        if description is not None:
            changes["description"] = description.strip()
        if not isinstance(due_date, Keep):
            changes["due_date"] = due_date
        if priority is not None:
            changes["priority"] = self._coerce_priority(priority)

        if not changes:
            return current

        updated = replace(current, **changes)
        self._tasks[idx] = updated
        logger.debug("Task edited id=%s fields=%s", task_id, sorted(changes))
        self._persist("edit")
        return updated

    def toggle_completed(self, task_id: int) -> Task:
        idx = self._index_of(task_id)
        updated = replace(self._tasks[idx], completed=not self._tasks[idx].completed)
        self._tasks[idx] = updated
        logger.debug("Task toggled id=%s completed=%s", task_id, updated.completed)
        self._persist("toggle")
        if updated.completed:
            self._publish(TaskCompleted(task_id=updated.id, title=updated.title))
        return updated

    def delete(self, task_id: int) -> None:
        idx = self._index_of(task_id)
        removed = self._tasks.pop(idx)
        logger.debug("Task deleted id=%s title=%r", removed.id, removed.title)
        self._persist("delete")

    def clear_all(self) -> None:
        n = len(self._tasks)
        self._tasks.clear()
        logger.info("All tasks cleared count=%d", n)
        self._persist("clear_all")

    def flush(self) -> None:
        """Best-effort final write (shutdown path)."""
        self._persist("flush")
