# src/taskdeck/core/errors.py

"""
Error taxonomy.

Validation errors (TaskError subclasses) are raised by the task store and
turned into transient user-visible messages by the dispatcher.
Persistence errors are raised by the storage layer; reads are swallowed at
startup, writes are reported but never block further operations.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for rejected task operations. The collection is left unchanged."""


class EmptyTitleError(TaskError):
    def __init__(self) -> None:
        super().__init__("Title is required.")


class DuplicateTitleError(TaskError):
    def __init__(self, title: str) -> None:
        super().__init__("A task with this title already exists.")
        self.title = title


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found.")
        self.task_id = task_id


class InvalidPriorityError(TaskError):
    def __init__(self, value: object) -> None:
        super().__init__("Priority must be Low, Medium or High.")
        self.value = value


class PersistenceError(Exception):
    """Base class for storage failures."""


class PersistenceReadError(PersistenceError):
    """Stored data could not be decoded."""


class PersistenceWriteError(PersistenceError):
    """Storage unavailable (permissions, disk full, ...)."""
