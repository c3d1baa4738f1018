# src/taskdeck/storage/persistence.py

"""
Persistence adapter: maps the task collection and the theme preference onto
the key-value store.

Keys (kept compatible with the browser build of the app):
- "todo_v2_tasks": JSON array of task records
- "todo_v2_theme": "light" | "dark"
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum

from ..core.errors import PersistenceReadError
from ..core.ports import KeyValueStore
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "todo_v2_tasks"
THEME_KEY = "todo_v2_theme"


class TaskPersistence:
    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv

    def load_tasks(self) -> list[Task]:
        """
        Decode the stored collection.

        Missing key -> [].
        Malformed JSON or a non-array payload -> PersistenceReadError.
        Individual records that cannot be decoded are skipped with a warning.
        """
        raw = self._kv.get(TASKS_KEY)
        if raw is None or raw.strip() == "":
            return []
        try:
            data = json.loads(raw)
        except ValueError as e:
            raise PersistenceReadError(f"{TASKS_KEY} is not valid JSON: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceReadError(f"{TASKS_KEY} must hold a JSON array, got {type(data).__name__}")

        out: list[Task] = []
        for i, rec in enumerate(data):
            if not isinstance(rec, dict):
                logger.warning("Skipping stored task #%d: not an object", i)
                continue
            try:
                out.append(Task.from_dict(rec))
            except ValueError as e:
                logger.warning("Skipping stored task #%d: %s", i, e)
        logger.debug("Loaded %d tasks (%d records stored)", len(out), len(data))
        return out

    def save_tasks(self, tasks: list[Task]) -> None:
        """Write the whole collection. Raises PersistenceWriteError."""
        payload = json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
        self._kv.set(TASKS_KEY, payload)


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class ThemeStore:
    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        self._current = Theme.LIGHT

    @property
    def current(self) -> Theme:
        return self._current

    def load(self) -> Theme:
        self._current = Theme.DARK if self._kv.get(THEME_KEY) == Theme.DARK.value else Theme.LIGHT
        return self._current

    def save(self, theme: Theme) -> None:
        """
        Make `theme` current and write it. Raises PersistenceWriteError; the
        new theme stays current for the session either way.
        """
        self._current = Theme(theme)
        self._kv.set(THEME_KEY, self._current.value)

    def toggle(self) -> Theme:
        """Switch light <-> dark and persist. Raises PersistenceWriteError."""
        self.save(Theme.LIGHT if self._current is Theme.DARK else Theme.DARK)
        return self._current
