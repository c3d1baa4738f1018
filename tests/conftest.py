# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskdeck.cli.bootstrap import create_initial_state
from taskdeck.core.dispatcher import Dispatcher
from taskdeck.core.events import EventBus
from taskdeck.core.state import AppState
from taskdeck.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeMonotonic, MemoryKVStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and core modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskdeck-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "storage.json",
        batch_size=30,
        search_debounce_ms=20,
        scroll_threshold_px=60,
        reminder_window_hours=24.0,
        error_message_seconds=3.5,
        info_message_seconds=1.8,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def kv() -> MemoryKVStore:
    return MemoryKVStore()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def store(clock: FakeClock, bus: EventBus) -> TaskStore:
    """Store without persistence; persistence has its own tests."""
    return TaskStore(bus=bus, clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKVStore, clock: FakeClock) -> AppState:
    st = create_initial_state(settings=settings, kv=kv, clock=clock)
    # Reminders depend on the wall clock; tests that need them wire their own.
    st.notifier = None
    st.monotonic = FakeMonotonic()
    return st


@pytest.fixture()
def app(state: AppState) -> Dispatcher:
    return Dispatcher(state)
