# src/taskdeck/tasks/notifier.py

from __future__ import annotations

"""
Due-date reminders.

The notifier only reads tasks and publishes ReminderDue signals on the bus.
How a reminder is delivered (console line, desktop notification, ...) is the
subscriber's business. Failures are logged and never reach the task store.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, time, timedelta

from ..core.events import EventBus, ReminderDue
from .task_models import Task

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59)


def due_within_window(task: Task, now: datetime, window: timedelta) -> bool:
    """
    True when the end of the task's due day (23:59:59, same clock as `now`)
    lies between now and now + window, both ends inclusive.
    """
    if task.due_date is None:
        return False
    due = datetime.combine(task.due_date, END_OF_DAY, tzinfo=now.tzinfo)
    remaining = due - now
    return timedelta(0) <= remaining <= window


def build_reminder(task: Task, window: timedelta = timedelta(hours=24)) -> ReminderDue:
    hours = window.total_seconds() / 3600
    return ReminderDue(
        kind="reminder",
        task_id=task.id,
        message=f"Reminder: {task.title} is due within {hours:g} hours",
    )


def build_upcoming(task: Task) -> ReminderDue:
    due = task.due_date.isoformat() if task.due_date else ""
    return ReminderDue(
        kind="upcoming",
        task_id=task.id,
        message=f"Upcoming: {task.title} due by {due}",
    )


class ReminderNotifier:
    def __init__(
        self,
        bus: EventBus,
        *,
        window_hours: float = 24.0,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._bus = bus
        self._window = timedelta(hours=max(0.0, float(window_hours)))
        self._clock = clock

    def check_new_task(self, task: Task) -> ReminderDue | None:
        """Immediate reminder for a freshly created task that is due soon."""
        try:
            if not due_within_window(task, self._clock(), self._window):
                return None
            event = build_reminder(task, self._window)
            self._bus.publish(event)
            logger.info("Reminder published task_id=%s", task.id)
            return event
        except Exception:
            logger.exception("Reminder check failed task_id=%s", getattr(task, "id", None))
            return None

    def check_on_start(self, tasks: Iterable[Task]) -> ReminderDue | None:
        """
        One summary at startup: the first incomplete task (collection order)
        due within the window. Stops at the first match.
        """
        try:
            now = self._clock()
            for task in tasks:
                if task.completed:
                    continue
                if due_within_window(task, now, self._window):
                    event = build_upcoming(task)
                    self._bus.publish(event)
                    logger.info("Upcoming summary published task_id=%s", task.id)
                    return event
        except Exception:
            logger.exception("Startup reminder scan failed")
        return None
