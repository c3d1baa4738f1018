# src/taskdeck/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and front ends swappable and makes testing easier.
"""

from typing import Any, Protocol


class KeyValueStore(Protocol):
    """
    String blob store (think browser localStorage).

    get() returns None for missing keys. set() raises PersistenceWriteError
    when the backend cannot be written.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """Full-snapshot persistence of the task collection."""

    def load_tasks(self) -> list[Any]: ...
    def save_tasks(self, tasks: list[Any]) -> None: ...


class SnapshotListener(Protocol):
    """Presentation side: receives a fresh Snapshot after every processed intent."""

    def __call__(self, snapshot: Any) -> None: ...
