# tests/test_commands.py

from __future__ import annotations

from datetime import date

from taskdeck.cli.commands import CommandRegistry, registry
from taskdeck.connectors.console_connector import handle_line
from taskdeck.core.dispatcher import Dispatcher
from taskdeck.storage.persistence import Theme
from taskdeck.tasks.task_models import CompletionFilter, Priority, PriorityFilter


def test_command_registry_routes_2_and_3_params(app: Dispatcher) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    emitted: list[str] = []

    def h2(app, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(app, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a", aliases=["alpha"])
    reg.register("b", h3, "b")

    assert reg.handle(app, '/a x "y z"') == "h2:x,y z"
    assert reg.handle(app, "/ALPHA") == "h2:"
    assert reg.handle(app, "/b", emit=emitted.append) == "h3"
    assert called == {"h2": 2, "h3": 1}
    assert emitted == ["note"]


def test_command_registry_unknown_and_non_command(app: Dispatcher) -> None:
    reg = CommandRegistry()
    assert reg.handle(app, "hello") is None
    assert "Unknown command" in (reg.handle(app, "/nope") or "")
    assert "Empty command" in (reg.handle(app, "/") or "")


def test_help_lists_commands() -> None:
    text = registry.build_help()
    for name in ("/add", "/edit", "/done", "/del", "/clear", "/search", "/filter", "/more", "/theme"):
        assert name in text


def test_add_with_options(app: Dispatcher) -> None:
    reply = registry.handle(app, '/add "Pay rent" desc="before the 5th" due=2026-02-01 priority=high')
    assert reply is not None and reply.startswith("Task added")

    [task] = app.state.store.tasks()
    assert task.title == "Pay rent"
    assert task.description == "before the 5th"
    assert task.due_date == date(2026, 2, 1)
    assert task.priority is Priority.HIGH
    assert "Due: 2026-02-01" in reply


def test_add_rejects_bad_input(app: Dispatcher) -> None:
    reply = registry.handle(app, "/add Something due=tomorrow")
    assert reply is not None and "Usage: /add" in reply
    assert len(app.state.store) == 0

    reply = registry.handle(app, "/add")
    assert reply is not None and reply.startswith("[ERROR] Title is required.")


def test_plain_text_adds_task(app: Dispatcher) -> None:
    reply = handle_line(app, "Buy milk")
    assert reply is not None and "Buy milk" in reply
    assert [t.title for t in app.state.store.tasks()] == ["Buy milk"]

    reply = handle_line(app, "buy MILK")
    assert reply is not None and reply.startswith("[ERROR] A task with this title already exists.")
    assert handle_line(app, "") is None


def test_edit_changes_only_given_fields(app: Dispatcher) -> None:
    task = app.state.store.add("Write report", due_date=date(2026, 3, 1))

    reply = registry.handle(app, f"/edit #{task.id} priority=Low")
    assert reply is not None and reply.startswith("Task updated")
    edited = app.state.store.get(task.id)
    assert edited.priority is Priority.LOW
    assert edited.due_date == date(2026, 3, 1)

    registry.handle(app, f"/edit {task.id} due=")
    assert app.state.store.get(task.id).due_date is None

    assert (registry.handle(app, f"/edit {task.id}") or "").startswith("Nothing to change.")
    assert (registry.handle(app, "/edit") or "").startswith("Usage: /edit")


def test_done_toggles(app: Dispatcher) -> None:
    task = app.state.store.add("Buy milk")
    reply = registry.handle(app, f"/done {task.id}")
    assert reply is not None and f"[x] #{task.id} Buy milk" in reply
    assert registry.handle(app, "/done abc") == "Usage: /done <id>"
    assert "[ERROR] Task 1 not found." in (registry.handle(app, "/done 1") or "")


def test_delete_asks_then_yes(app: Dispatcher) -> None:
    task = app.state.store.add("Buy milk")

    reply = registry.handle(app, f"/del {task.id}")
    assert reply == "Delete this task? Reply /yes to confirm or /no to cancel."
    assert len(app.state.store) == 1

    reply = registry.handle(app, "/yes")
    assert reply is not None and reply.startswith("Task deleted")
    assert len(app.state.store) == 0
    assert registry.handle(app, "/yes") == "Nothing to confirm."


def test_clear_then_no_keeps_everything(app: Dispatcher) -> None:
    app.state.store.add("a")
    app.state.store.add("b")

    reply = registry.handle(app, "/clear")
    assert reply is not None and "permanently delete ALL tasks" in reply
    assert registry.handle(app, "/no") == "Cancelled."
    assert registry.handle(app, "/no") == "Nothing to cancel."
    assert len(app.state.store) == 2


def test_search_and_filter(app: Dispatcher) -> None:
    app.state.store.add("Buy milk", priority=Priority.MEDIUM)
    app.state.store.add("Write report", priority=Priority.HIGH)

    reply = registry.handle(app, "/search REPORT")
    assert reply is not None
    assert "Write report" in reply and "Buy milk" not in reply
    assert 'search="REPORT"' in reply

    registry.handle(app, "/search")
    reply = registry.handle(app, "/filter priority=medium")
    assert reply is not None
    assert "Buy milk" in reply and "Write report" not in reply
    assert app.state.view.priority_filter is PriorityFilter.MEDIUM

    reply = registry.handle(app, "/filter status=bogus")
    assert reply is not None and "Unknown value" in reply

    registry.handle(app, "/filter reset")
    assert app.state.view.priority_filter is PriorityFilter.ALL
    assert app.state.view.completion_filter is CompletionFilter.ALL


def test_more_loads_next_batch(app: Dispatcher) -> None:
    for i in range(35):
        app.state.store.add(f"task {i}")
    reply = registry.handle(app, "/search")
    assert reply is not None and "Showing 30 of 35  (/more to load more)" in reply

    reply = registry.handle(app, "/more")
    assert reply is not None and reply.endswith("Showing 35 of 35")
    assert registry.handle(app, "/more") == "Everything is already shown."


def test_theme_emits_and_persists(app: Dispatcher) -> None:
    emitted: list[str] = []
    reply = registry.handle(app, "/theme", emit=emitted.append)
    assert reply == "Theme: dark"
    assert emitted == ["[THEME] Switched to dark."]
    assert app.state.theme is Theme.DARK


def test_stats(app: Dispatcher) -> None:
    a = app.state.store.add("a")
    app.state.store.add("b")
    app.state.store.add("c")
    app.state.store.toggle_completed(a.id)
    registry.handle(app, "/search")

    assert registry.handle(app, "/stats") == "3 tasks - 1 done  [#######-------------] 33%  (Completed 1 / 3)"


def test_yes_emits_how_many_tasks_were_removed(app: Dispatcher) -> None:
    for title in ("a", "b", "c"):
        app.state.store.add(title)
    emitted: list[str] = []

    registry.handle(app, "/clear")
    reply = registry.handle(app, "/yes", emit=emitted.append)

    assert reply is not None and reply.startswith("All tasks deleted")
    assert emitted == ["[DELETED] Removed 3 tasks."]


def test_unrelated_command_cancels_pending_question(app: Dispatcher) -> None:
    task = app.state.store.add("Buy milk")
    registry.handle(app, f"/del {task.id}")
    handle_line(app, "Write report")
    assert registry.handle(app, "/yes") == "Nothing to confirm."
    assert task.id in app.state.store
