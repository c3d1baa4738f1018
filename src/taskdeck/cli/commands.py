# src/taskdeck/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import shlex
from collections.abc import Callable
from typing import cast

from ..connectors.console_render import render_snapshot, render_stats
from ..core.dispatcher import Dispatcher
from ..core.intents import (
    AddTask,
    ClearAll,
    DeleteTask,
    EditTask,
    FilterChange,
    LoadMore,
    Refresh,
    Search,
    ToggleTask,
    ToggleTheme,
)
from ..core.state import ConfirmationRequired, Snapshot
from ..tasks.task_models import CompletionFilter, Priority, PriorityFilter, parse_due_date
from ..tasks.task_store import KEEP

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[Dispatcher, list[str]], str]
CommandHandler3 = Callable[[Dispatcher, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Slash-command table used by the console (/help, /add, ...).

    Handlers take (app, args), or (app, args, emit) when they want to print
    side notes before their reply. The arity is read once, at registration.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, tuple[CommandHandler, bool]] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        entry = (handler, _wants_emitter(handler))
        key = name.lower()
        self._handlers[key] = entry
        self._help[key] = help_text
        for alias in aliases or []:
            self._handlers[alias.lower()] = entry

    def handle(
        self,
        app: Dispatcher,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """Run "/command args". None when `line` is not a command."""
        if not line.startswith("/"):
            return None

        parts = _tokenize(line[1:])
        if not parts:
            return "Empty command. Use /help to list available commands."

        name, args = parts[0].lower(), parts[1:]
        entry = self._handlers.get(name)
        if entry is None:
            return f"Unknown command: /{name}. Use /help to list available commands."

        handler, wants_emit = entry
        logger.debug("Command /%s args=%s", name, args)
        if wants_emit:
            return cast(CommandHandler3, handler)(app, args, emit)
        return cast(CommandHandler2, handler)(app, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Plain text (without a leading /) adds a task with that title.")
        return "\n".join(lines)


def _wants_emitter(handler: CommandHandler) -> bool:
    try:
        return len(inspect.signature(handler).parameters) >= 3
    except (TypeError, ValueError):
        return False


registry = CommandRegistry()


# ---- parsing helpers ----

OPTION_KEYS = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "due": "due",
    "priority": "priority",
    "p": "priority",
    "status": "status",
}


def _tokenize(text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError:
        # Unbalanced quotes: fall back to whitespace split.
        return text.split()


def _split_options(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """Separate key=value options (known keys only) from positional words."""
    positional: list[str] = []
    options: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        name = OPTION_KEYS.get(key.lower()) if sep else None
        if name is None:
            positional.append(arg)
        else:
            options[name] = value
    return positional, options


def _parse_id(raw: str) -> int:
    return int(raw.lstrip("#"))


def format_reply(snap: Snapshot | ConfirmationRequired, *, show_list: bool = True) -> str:
    if isinstance(snap, ConfirmationRequired):
        return f"{snap.prompt} Reply /yes to confirm or /no to cancel."
    lines: list[str] = []
    if snap.message is not None:
        prefix = "[ERROR] " if snap.message.level == "error" else ""
        lines.append(prefix + snap.message.text)
    if show_list:
        lines.append(render_snapshot(snap))
    return "\n".join(lines)


# ---- handlers ----


def cmd_help(app: Dispatcher, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(app: Dispatcher, args: list[str]) -> str:
    return format_reply(app.dispatch(Refresh()))


def cmd_add(app: Dispatcher, args: list[str]) -> str:
    """
    /add <title> [desc=...] [due=YYYY-MM-DD] [priority=Low|Medium|High]
    """
    positional, opts = _split_options(args)
    title = opts.get("title") or " ".join(positional)
    try:
        due = parse_due_date(opts.get("due"))
        priority = Priority.parse(opts["priority"]) if "priority" in opts else Priority.MEDIUM
    except ValueError as e:
        return f"{e}\nUsage: /add <title> [desc=...] [due=YYYY-MM-DD] [priority=Low|Medium|High]"

    return format_reply(
        app.dispatch(
            AddTask(
                title=title,
                description=opts.get("description", ""),
                due_date=due,
                priority=priority,
            )
        )
    )


def cmd_edit(app: Dispatcher, args: list[str]) -> str:
    """
    /edit <id> [title=...] [desc=...] [due=YYYY-MM-DD | due=] [priority=...]
    Only the given fields change; all of them or none.
    """
    usage = "Usage: /edit <id> [title=...] [desc=...] [due=YYYY-MM-DD|due=] [priority=Low|Medium|High]"
    positional, opts = _split_options(args)
    if not positional:
        return usage
    try:
        task_id = _parse_id(positional[0])
        due = parse_due_date(opts["due"]) if "due" in opts else KEEP
        priority = Priority.parse(opts["priority"]) if "priority" in opts else None
    except ValueError as e:
        return f"{e}\n{usage}"

    if not opts:
        return f"Nothing to change.\n{usage}"

    return format_reply(
        app.dispatch(
            EditTask(
                task_id=task_id,
                title=opts.get("title"),
                description=opts.get("description"),
                due_date=due,
                priority=priority,
            )
        )
    )


def cmd_done(app: Dispatcher, args: list[str]) -> str:
    if not args:
        return "Usage: /done <id>"
    try:
        task_id = _parse_id(args[0])
    except ValueError:
        return "Usage: /done <id>"
    return format_reply(app.dispatch(ToggleTask(task_id)))


def cmd_delete(app: Dispatcher, args: list[str]) -> str:
    if not args:
        return "Usage: /del <id>"
    try:
        task_id = _parse_id(args[0])
    except ValueError:
        return "Usage: /del <id>"
    return format_reply(app.dispatch(DeleteTask(task_id)))


def cmd_clear(app: Dispatcher, args: list[str]) -> str:
    return format_reply(app.dispatch(ClearAll()))


def cmd_yes(
    app: Dispatcher,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    before = len(app.state.store)
    snap = app.confirm_pending()
    if snap is None:
        return "Nothing to confirm."
    removed = before - len(app.state.store)
    if emit and removed:
        with contextlib.suppress(Exception):
            emit(f"[DELETED] Removed {removed} task{'' if removed == 1 else 's'}.")
    return format_reply(snap)


def cmd_no(app: Dispatcher, args: list[str]) -> str:
    return "Cancelled." if app.cancel_pending() else "Nothing to cancel."


def cmd_search(app: Dispatcher, args: list[str]) -> str:
    """
    /search <text>  -> filter by text in title/description
    /search         -> clear the search
    """
    return format_reply(app.dispatch(Search(" ".join(args))))


def cmd_filter(app: Dispatcher, args: list[str]) -> str:
    """
    /filter priority=<All|Low|Medium|High> status=<All|Pending|Completed>
    /filter reset
    """
    usage = "Usage: /filter [priority=All|Low|Medium|High] [status=All|Pending|Completed] | /filter reset"
    if args and args[0].lower() == "reset":
        return format_reply(app.dispatch(FilterChange(PriorityFilter.ALL, CompletionFilter.ALL)))

    _, opts = _split_options(args)
    if not opts:
        return usage

    try:
        priority = _lookup(PriorityFilter, opts["priority"]) if "priority" in opts else None
        completion = _lookup(CompletionFilter, opts["status"]) if "status" in opts else None
    except ValueError as e:
        return f"{e}\n{usage}"

    return format_reply(app.dispatch(FilterChange(priority=priority, completion=completion)))


def _lookup(enum_cls, raw: str):
    key = raw.strip().lower()
    for member in enum_cls:
        if member.value.lower() == key:
            return member
    raise ValueError(f"Unknown value: {raw!r}")


def cmd_more(app: Dispatcher, args: list[str]) -> str:
    before = app.state.pager.rendered
    snap = app.dispatch(LoadMore())
    if isinstance(snap, Snapshot) and snap.rendered == before:
        return "Everything is already shown."
    return format_reply(snap)


def cmd_theme(
    app: Dispatcher,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    snap = app.dispatch(ToggleTheme())
    if not isinstance(snap, Snapshot):
        return format_reply(snap)
    if emit:
        with contextlib.suppress(Exception):
            emit(f"[THEME] Switched to {snap.theme.value}.")
    text = f"Theme: {snap.theme.value}"
    if snap.message is not None and snap.message.level == "error":
        text += f"\n[ERROR] {snap.message.text}"
    return text


def cmd_stats(app: Dispatcher, args: list[str]) -> str:
    snap = app.dispatch(Refresh())
    return render_stats(snap) if isinstance(snap, Snapshot) else format_reply(snap)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the current page of tasks.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text="Add a task: /add <title> [desc=...] [due=YYYY-MM-DD] [priority=Low|Medium|High].",
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Edit a task: /edit <id> [title=...] [desc=...] [due=...] [priority=...].",
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del <id>.", aliases=["delete", "rm"])
registry.register("clear", cmd_clear, help_text="Delete ALL tasks (asks first).")
registry.register("yes", cmd_yes, help_text="Confirm the pending delete/clear.", aliases=["y"])
registry.register("no", cmd_no, help_text="Cancel the pending delete/clear.", aliases=["n"])
registry.register("search", cmd_search, help_text="Search title/description: /search [text].", aliases=["s"])
registry.register(
    "filter",
    cmd_filter,
    help_text="Filter: /filter priority=<All|Low|Medium|High> status=<All|Pending|Completed> | reset.",
)
registry.register("more", cmd_more, help_text="Load the next batch of tasks.")
registry.register("theme", cmd_theme, help_text="Toggle light/dark theme.")
registry.register("stats", cmd_stats, help_text="Show completion stats for the current view.")
