# src/taskdeck/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import format_reply
from ..cli.commands import registry as command_registry
from ..core.dispatcher import Dispatcher
from ..core.events import ReminderDue, TaskCompleted
from ..core.intents import AddTask, Refresh
from .console_render import render_snapshot

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def on_task_completed(event: TaskCompleted) -> None:
    _print_ts(f"[DONE] Nice work! \"{event.title}\" is complete.")


def on_reminder(event: ReminderDue) -> None:
    _print_ts(f"[{event.kind.upper()}] {event.message}")


def attach_console_signals(app: Dispatcher) -> None:
    """Console stand-ins for the celebration effect and reminder notifications."""
    app.state.bus.subscribe(on_task_completed, TaskCompleted)
    app.state.bus.subscribe(on_reminder, ReminderDue)


def handle_line(app: Dispatcher, user_input: str) -> str | None:
    """One REPL step. Returns the text to print (None for nothing)."""
    if not user_input:
        return None

    cmd_response = command_registry.handle(app, user_input, emit=_print_ts)
    if cmd_response is not None:
        return cmd_response

    # Plain text: add a task with that title.
    return format_reply(app.dispatch(AddTask(title=user_input)))


def run_console_loop(app: Dispatcher) -> None:
    app_name = str(getattr(app.state.settings, "app_name", "taskdeck"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Type a title to add a task. Use /help for commands. Use /exit to quit.\n")

    snap = app.dispatch(Refresh())
    print(render_snapshot(snap))

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = handle_line(app, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response:
            print(response)

    logger.info("Console connector finished.")
