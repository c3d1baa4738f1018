# src/taskdeck/tasks/task_models.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str) -> Priority:
        """Case-insensitive lookup for user input. Raises ValueError on unknown names."""
        key = (raw or "").strip().lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        raise ValueError(f"Unknown priority: {raw!r} (expected Low, Medium or High)")

    @classmethod
    def from_stored(cls, raw: Any) -> Priority:
        if not isinstance(raw, str):
            return cls.MEDIUM
        try:
            return cls(raw)
        except ValueError:
            return cls.MEDIUM


class PriorityFilter(StrEnum):
    ALL = "All"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def matches(self, priority: Priority) -> bool:
        return self is PriorityFilter.ALL or self.value == priority.value


class CompletionFilter(StrEnum):
    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"

    def matches(self, completed: bool) -> bool:
        if self is CompletionFilter.PENDING:
            return not completed
        if self is CompletionFilter.COMPLETED:
            return completed
        return True


def parse_due_date(raw: str | None) -> date | None:
    """
    Parse a YYYY-MM-DD calendar date.

    Blank -> None. Anything else that is not an ISO date raises ValueError.
    """
    text = (raw or "").strip()
    if not text:
        return None
    return date.fromisoformat(text)


def _parse_created_at(raw: Any) -> datetime:
    if isinstance(raw, str) and raw:
        try:
            dt = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            dt = None
        if dt is not None:
            return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return datetime.fromtimestamp(0, tz=timezone.utc)


def _format_created_at(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    description: str
    due_date: date | None
    priority: Priority
    completed: bool
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Storage shape (camelCase keys, dueDate "" when unset)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date.isoformat() if self.due_date else "",
            "priority": self.priority.value,
            "completed": self.completed,
            "createdAt": _format_created_at(self.created_at),
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Raises ValueError when id or title is unusable; other fields degrade
        to defaults (unknown priority -> Medium, bad date -> None,
        non-boolean completed -> pending).
        """
        tid = raw.get("id")
        if isinstance(tid, bool) or not isinstance(tid, (int, float)):
            raise ValueError(f"invalid id: {tid!r}")

        title = str(raw.get("title") or "").strip()
        if not title:
            raise ValueError("missing title")

        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            logger.warning("Task id=%s: completed=%r is not a boolean; reading as pending", tid, completed)
            completed = False

        try:
            due = parse_due_date(raw.get("dueDate") if isinstance(raw.get("dueDate"), str) else None)
        except ValueError:
            due = None

        return cls(
            id=int(tid),
            title=title,
            description=str(raw.get("description") or ""),
            due_date=due,
            priority=Priority.from_stored(raw.get("priority")),
            completed=completed,
            created_at=_parse_created_at(raw.get("createdAt")),
        )
