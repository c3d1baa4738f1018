# src/taskdeck/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Components get settings injected; only the entrypoint reads the global one.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKDECK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    store_path: Path

    # ---- List view ----
    batch_size: int
    search_debounce_ms: int
    scroll_threshold_px: int

    # ---- Reminders ----
    reminder_window_hours: float

    # ---- Transient messages ----
    error_message_seconds: float
    info_message_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskdeck") or "taskdeck"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskdeck"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "storage.json")

        # Clamp to sane minimums.
        batch_size = max(1, _env_int(_k("BATCH_SIZE"), 30))
        search_debounce_ms = max(0, _env_int(_k("SEARCH_DEBOUNCE_MS"), 250))
        scroll_threshold_px = max(0, _env_int(_k("SCROLL_THRESHOLD_PX"), 60))

        reminder_window_hours = _env_float(_k("REMINDER_WINDOW_HOURS"), 24.0)

        error_message_seconds = _env_float(_k("ERROR_MESSAGE_SECONDS"), 3.5)
        info_message_seconds = _env_float(_k("INFO_MESSAGE_SECONDS"), 1.8)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            store_path=store_path,
            batch_size=batch_size,
            search_debounce_ms=search_debounce_ms,
            scroll_threshold_px=scroll_threshold_px,
            reminder_window_hours=reminder_window_hours,
            error_message_seconds=error_message_seconds,
            info_message_seconds=info_message_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
