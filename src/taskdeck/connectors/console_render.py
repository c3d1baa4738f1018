# src/taskdeck/connectors/console_render.py

"""Plain-text presentation of a Snapshot (the console's presentation binder)."""

from __future__ import annotations

from ..core.state import Snapshot
from ..storage.persistence import Theme
from ..tasks.task_models import CompletionFilter, PriorityFilter, Task

BAR_WIDTH = 20

# ANSI colors per theme; the light theme keeps the terminal default foreground.
PRIORITY_COLOR = {
    Theme.LIGHT: {"Low": "\033[32m", "Medium": "\033[33m", "High": "\033[31m"},
    Theme.DARK: {"Low": "\033[92m", "Medium": "\033[93m", "High": "\033[91m"},
}
DIM = "\033[2m"
RESET = "\033[0m"


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    filled = max(0, min(width, round(width * percent / 100)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_stats(snap: Snapshot) -> str:
    s = snap.stats
    plural = "" if s.total == 1 else "s"
    return (
        f"{s.total} task{plural} - {s.completed} done  "
        f"{progress_bar(s.percent)} {s.percent}%  (Completed {s.completed} / {s.total})"
    )


def render_task(task: Task, *, theme: Theme = Theme.LIGHT, color: bool = False) -> str:
    mark = "[x]" if task.completed else "[ ]"
    prio = task.priority.value
    if color:
        prio = f"{PRIORITY_COLOR[theme][prio]}{prio}{RESET}"
    line = f"{mark} #{task.id} {task.title}  ({prio})"
    if task.due_date:
        line += f"  Due: {task.due_date.isoformat()}"
    if task.description:
        desc = f"      {task.description}"
        line += "\n" + (f"{DIM}{desc}{RESET}" if color else desc)
    return line


def render_filters(snap: Snapshot) -> str | None:
    parts: list[str] = []
    if snap.search:
        parts.append(f'search="{snap.search}"')
    if snap.priority_filter is not PriorityFilter.ALL:
        parts.append(f"priority={snap.priority_filter.value}")
    if snap.completion_filter is not CompletionFilter.ALL:
        parts.append(f"status={snap.completion_filter.value}")
    return "Filters: " + ", ".join(parts) if parts else None


def render_snapshot(snap: Snapshot, *, color: bool = False) -> str:
    lines = [render_stats(snap)]
    filters = render_filters(snap)
    if filters:
        lines.append(filters)
    if not snap.window:
        lines.append("(no tasks)")
    for task in snap.window:
        lines.append(render_task(task, theme=snap.theme, color=color))
    footer = f"Showing {snap.rendered} of {snap.total_filtered}"
    if snap.has_more:
        footer += "  (/more to load more)"
    lines.append(footer)
    return "\n".join(lines)
