# src/taskdeck/core/debounce.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Cancellable scheduled call on the running asyncio loop.

    schedule() cancels whatever is pending and re-arms the timer, so a burst
    of calls closer together than `delay` results in one callback, run with
    the last arguments, `delay` seconds after the burst went quiet.
    """

    def __init__(self, delay: float) -> None:
        self.delay = max(0.0, float(delay))
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        self.cancel()
        self._callback = callback
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def flush(self) -> None:
        """Run the pending callback right away (if any)."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        self._callback = None
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception("Debounced callback failed")
