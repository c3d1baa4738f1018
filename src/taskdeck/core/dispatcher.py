# src/taskdeck/core/dispatcher.py

"""
Intent dispatcher.

Every user intent goes through Dispatcher.dispatch(), which runs to
completion before returning:

    intent -> task store mutation (persists) -> view recompute
           -> paginator reset + first batch -> snapshot to listeners

Validation errors never escape: they become a transient error message and
the state stays as it was.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..tasks.pagination import near_bottom
from ..tasks.task_view import compute_stats, recompute
from .debounce import Debouncer
from .errors import PersistenceWriteError, TaskError
from .events import PersistenceFailed
from .intents import (
    AddTask,
    ClearAll,
    DeleteTask,
    EditTask,
    FilterChange,
    LoadMore,
    Refresh,
    Scroll,
    Search,
    ToggleTask,
    ToggleTheme,
)
from .ports import SnapshotListener
from .state import AppState, ConfirmationRequired, Flash, Snapshot

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, state: AppState) -> None:
        self.state = state
        self._listeners: list[SnapshotListener] = []
        self._handlers: dict[type, Callable[[Any], ConfirmationRequired | None]] = {
            AddTask: self._on_add,
            EditTask: self._on_edit,
            ToggleTask: self._on_toggle,
            DeleteTask: self._on_delete,
            ClearAll: self._on_clear_all,
            Search: self._on_search,
            FilterChange: self._on_filter_change,
            LoadMore: self._on_load_more,
            Scroll: self._on_scroll,
            ToggleTheme: self._on_toggle_theme,
            Refresh: self._on_refresh,
        }
        delay_ms = int(getattr(state.settings, "search_debounce_ms", 250))
        self.search_debouncer = Debouncer(delay_ms / 1000.0)

        self._write_failed = False
        state.bus.subscribe(self._on_persistence_failed, PersistenceFailed)

        self._rebuild()

    # ---- subscription ----

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener) -> None:
        self._listeners = [fn for fn in self._listeners if fn is not listener]

    # ---- entry points ----

    def dispatch(self, intent: Any) -> Snapshot | ConfirmationRequired:
        handler = self._handlers.get(type(intent))
        if handler is None:
            raise TypeError(f"Unsupported intent: {type(intent).__name__}")

        logger.debug("Dispatch %s", intent)
        # Confirmations are modal: any other intent drops a pending question.
        self.state.pending_confirmation = None
        self._write_failed = False
        confirmation = handler(intent)
        if confirmation is not None:
            self.state.pending_confirmation = confirmation
            return confirmation

        snap = self.snapshot()
        self._notify(snap)
        return snap

    def search_input(self, text: str) -> None:
        """
        Keystroke-level search input for interactive front ends (the console
        sends whole lines as Search intents instead). Coalesced by the
        debouncer; only the last text of a burst is dispatched. Needs a
        running asyncio loop.
        """
        self.search_debouncer.schedule(lambda: self.dispatch(Search(text)))

    def confirm_pending(self) -> Snapshot | None:
        pending = self.state.pending_confirmation
        if pending is None:
            return None
        self.state.pending_confirmation = None
        result = self.dispatch(pending.intent)
        return result if isinstance(result, Snapshot) else None

    def cancel_pending(self) -> bool:
        had = self.state.pending_confirmation is not None
        self.state.pending_confirmation = None
        return had

    def snapshot(self) -> Snapshot:
        st = self.state
        now = st.monotonic()
        message = st.flash if st.flash is not None and st.flash.visible(now) else None
        return Snapshot(
            window=tuple(st.pager.window),
            rendered=st.pager.rendered,
            total_filtered=st.pager.total,
            has_more=st.pager.has_more(),
            stats=compute_stats(st.view.filtered),
            search=st.view.search,
            priority_filter=st.view.priority_filter,
            completion_filter=st.view.completion_filter,
            theme=st.theme,
            message=message,
        )

    # ---- helpers ----

    def _notify(self, snap: Snapshot) -> None:
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Snapshot listener failed")

    def _rebuild(self) -> None:
        """Recompute the filtered sequence and show the first batch again."""
        st = self.state
        st.view.filtered = recompute(
            st.store.tasks(),
            st.view.search,
            st.view.priority_filter,
            st.view.completion_filter,
        )
        st.pager.bind(st.view.filtered)
        st.pager.advance()

    def _flash(self, text: str, level: str = "info") -> None:
        settings = self.state.settings
        if level == "error":
            ttl = float(getattr(settings, "error_message_seconds", 3.5))
        else:
            ttl = float(getattr(settings, "info_message_seconds", 1.8))
        self.state.flash = Flash(text=text, level=level, expires_at=self.state.monotonic() + ttl)

    def _on_persistence_failed(self, event: PersistenceFailed) -> None:
        self._write_failed = True
        self._flash("Could not save tasks. Changes are kept for this session.", "error")

    def _mutate(self, action: Callable[[], Any], done_text: str | None) -> None:
        try:
            action()
        except TaskError as e:
            logger.info("Rejected: %s", e)
            self._flash(str(e), "error")
            return
        self._rebuild()
        # A write failure message outranks the success message.
        if done_text and not self._write_failed:
            self._flash(done_text)

    # ---- handlers ----

    def _on_add(self, intent: AddTask) -> None:
        try:
            task = self.state.store.add(
                intent.title,
                intent.description,
                intent.due_date,
                intent.priority,
            )
        except TaskError as e:
            logger.info("Rejected: %s", e)
            self._flash(str(e), "error")
            return
        self._rebuild()
        if not self._write_failed:
            self._flash("Task added")
        if self.state.notifier is not None:
            self.state.notifier.check_new_task(task)

    def _on_edit(self, intent: EditTask) -> None:
        self._mutate(
            lambda: self.state.store.edit(
                intent.task_id,
                title=intent.title,
                description=intent.description,
                due_date=intent.due_date,
                priority=intent.priority,
            ),
            "Task updated",
        )

    def _on_toggle(self, intent: ToggleTask) -> None:
        self._mutate(lambda: self.state.store.toggle_completed(intent.task_id), None)

    def _on_delete(self, intent: DeleteTask) -> ConfirmationRequired | None:
        if not intent.confirmed:
            if intent.task_id not in self.state.store:
                self._flash(f"Task {intent.task_id} not found.", "error")
                return None
            return ConfirmationRequired(
                prompt="Delete this task?",
                intent=DeleteTask(intent.task_id, confirmed=True),
            )
        self._mutate(lambda: self.state.store.delete(intent.task_id), "Task deleted")
        return None

    def _on_clear_all(self, intent: ClearAll) -> ConfirmationRequired | None:
        if not intent.confirmed:
            return ConfirmationRequired(
                prompt="This will permanently delete ALL tasks. Continue?",
                intent=ClearAll(confirmed=True),
            )
        self._mutate(self.state.store.clear_all, "All tasks deleted")
        return None

    def _on_search(self, intent: Search) -> None:
        self.state.view.search = (intent.text or "").strip()
        self._rebuild()

    def _on_filter_change(self, intent: FilterChange) -> None:
        if intent.priority is not None:
            self.state.view.priority_filter = intent.priority
        if intent.completion is not None:
            self.state.view.completion_filter = intent.completion
        self._rebuild()

    def _on_load_more(self, intent: LoadMore) -> None:
        if self.state.pager.has_more():
            self.state.pager.advance()

    def _on_scroll(self, intent: Scroll) -> None:
        threshold = float(getattr(self.state.settings, "scroll_threshold_px", 60))
        if not self.state.pager.has_more():
            return
        if near_bottom(intent.scroll_top, intent.client_height, intent.scroll_height, threshold):
            self.state.pager.advance()

    def _on_toggle_theme(self, intent: ToggleTheme) -> None:
        st = self.state
        try:
            st.theme_store.toggle()
        except PersistenceWriteError as e:
            logger.error("Saving theme failed: %s", e)
            self._flash("Could not save theme preference.", "error")
        st.theme = st.theme_store.current

    def _on_refresh(self, intent: Refresh) -> None:
        return None
