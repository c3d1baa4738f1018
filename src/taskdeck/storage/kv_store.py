# src/taskdeck/storage/kv_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..core.errors import PersistenceWriteError

logger = logging.getLogger(__name__)


class JsonFileKVStore:
    """
    Local key-value store kept in a single JSON object file: {key: string}.

    Behaves like browser localStorage:
    - values are opaque strings (callers do their own JSON encoding)
    - an unreadable/corrupt file reads as an empty store (logged)
    - every set() rewrites the whole file (tmp file + os.replace)
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._data: dict[str, str] = self._read_file()
        logger.info("KV store ready path=%s keys=%d", self._path, len(self._data))

    @property
    def path(self) -> Path:
        return self._path

    def _read_file(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read KV store from %s; starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("KV store %s is not a JSON object; starting empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_file(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(".tmp")
            tmp.write_text(json.dumps(self._data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise PersistenceWriteError(f"cannot write {self._path}: {e}") from e
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("KV store written path=%s keys=%d", self._path, len(self._data))

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        previous = self._data.get(key)
        self._data[key] = value
        try:
            self._write_file()
        except PersistenceWriteError:
            # Keep the in-memory copy consistent with what is on disk.
            if previous is None:
                self._data.pop(key, None)
            else:
                self._data[key] = previous
            raise

    def remove(self, key: str) -> None:
        if key not in self._data:
            return
        previous = self._data.pop(key)
        try:
            self._write_file()
        except PersistenceWriteError:
            self._data[key] = previous
            raise
