# src/taskdeck/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState and the dispatcher, runs the startup
reminder scan, then hands control to the console REPL. The collection is
flushed once more on the way out.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown
from ..config import get_settings
from ..connectors.console_connector import attach_console_signals, run_console_loop
from ..core.dispatcher import Dispatcher
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    app = Dispatcher(state)
    attach_console_signals(app)

    if state.notifier is not None:
        state.notifier.check_on_start(state.store.tasks())

    try:
        run_console_loop(app)
    finally:
        shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
