# src/taskdeck/tasks/pagination.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 30
DEFAULT_SCROLL_THRESHOLD_PX = 60


def near_bottom(
    scroll_top: float,
    client_height: float,
    scroll_height: float,
    threshold: float = DEFAULT_SCROLL_THRESHOLD_PX,
) -> bool:
    """True when the viewport bottom is within `threshold` px of the content end."""
    return scroll_top + client_height >= scroll_height - threshold


class Paginator(Generic[T]):
    """
    Tracks how much of the filtered sequence has been materialized.

    `rendered` is a count, not a position in the store: bind() must be called
    with every freshly recomputed sequence, which resets the cursor.
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.batch_size = batch_size
        self._items: Sequence[T] = ()
        self._rendered = 0

    @property
    def rendered(self) -> int:
        return self._rendered

    @property
    def total(self) -> int:
        return len(self._items)

    @property
    def window(self) -> list[T]:
        """Everything materialized so far."""
        return list(self._items[: self._rendered])

    def bind(self, items: Sequence[T]) -> None:
        self._items = items
        self.reset()

    def reset(self) -> None:
        self._rendered = 0

    def has_more(self) -> bool:
        return self._rendered < len(self._items)

    def advance(self, batch_size: int | None = None) -> list[T]:
        """Materialize up to one more batch; return only the newly added slice."""
        step = self.batch_size if batch_size is None else batch_size
        if step < 0:
            raise ValueError("batch_size must be >= 0")
        start = self._rendered
        end = min(start + step, len(self._items))
        self._rendered = end
        logger.debug("Paginator advance %d..%d of %d", start, end, len(self._items))
        return list(self._items[start:end])
