# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from taskdeck.core.errors import PersistenceWriteError


class MemoryKVStore:
    """In-memory KeyValueStore (localStorage stand-in)."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class FailingKVStore(MemoryKVStore):
    """Reads work, every write fails (quota exceeded / read-only disk)."""

    def set(self, key: str, value: str) -> None:
        self.writes += 1
        raise PersistenceWriteError("quota exceeded")


class FakeClock:
    """
    Deterministic clock for TaskStore: every call returns a time `step`
    later than the previous one, so created_at values are strictly increasing.
    """

    def __init__(
        self,
        start: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class FakeMonotonic:
    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@dataclass(slots=True)
class Recorder:
    """Collects whatever it is called with (events, snapshots)."""

    items: list[Any] = field(default_factory=list)

    def __call__(self, item: Any) -> None:
        self.items.append(item)
