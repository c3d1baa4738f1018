# src/taskdeck/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads the persisted collection (corrupt data -> empty collection),
- wires store / paginator / notifier / theme into AppState.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..config import get_settings
from ..core.errors import PersistenceReadError
from ..core.events import EventBus
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage.kv_store import JsonFileKVStore
from ..storage.persistence import TaskPersistence, ThemeStore
from ..tasks.notifier import ReminderNotifier
from ..tasks.pagination import Paginator
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def load_tasks_safely(repo: TaskPersistence) -> list[Task]:
    """Startup read: a corrupt snapshot must never prevent the app from starting."""
    try:
        tasks = repo.load_tasks()
    except PersistenceReadError:
        logger.exception("Stored tasks are unreadable; starting with an empty list")
        return []
    logger.info("Loaded %d tasks", len(tasks))
    return tasks


def create_initial_state(
    *,
    settings=None,
    kv: KeyValueStore | None = None,
    clock: Callable[[], datetime] | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings, the key-value backend and the task clock injectable
    makes the app easy to test. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if kv is None:
        _ensure_local_dirs(settings)
        kv = JsonFileKVStore(settings.store_path)

    bus = EventBus()
    repo = TaskPersistence(kv)
    theme_store = ThemeStore(kv)

    store_kwargs = {} if clock is None else {"clock": clock}
    store = TaskStore(repo, tasks=load_tasks_safely(repo), bus=bus, **store_kwargs)
    notifier = ReminderNotifier(bus, window_hours=float(getattr(settings, "reminder_window_hours", 24.0)))

    return AppState(
        settings=settings,
        store=store,
        bus=bus,
        pager=Paginator(int(getattr(settings, "batch_size", 30))),
        theme_store=theme_store,
        theme=theme_store.load(),
        notifier=notifier,
    )


def shutdown(state: AppState) -> None:
    """Best-effort final flush (no exceptions should escape)."""
    try:
        state.store.flush()
    except Exception:
        logger.exception("Final flush failed.")
