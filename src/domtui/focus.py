"""Focus manager: which tagged widget receives keyboard input.

The focus order is recomputed from every frame (depth-first, declaration
order, focusable leaves only).  ``advance`` and ``retreat`` cycle through it.
When the focused tag vanishes from a new frame, focus moves to the surviving
tag that was nearest to it in the previous order.
"""

from __future__ import annotations

import logging
from typing import Sequence

from domtui.nodes import Tag

logger = logging.getLogger(__name__)

__all__ = ["FocusManager"]


class FocusManager:
    """Tracks the focused tag against the current focus order."""

    def __init__(self, order: Sequence[Tag] = ()) -> None:
        self._order: list[Tag] = list(order)
        self._current: Tag | None = self._order[0] if self._order else None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def current(self) -> Tag | None:
        """The focused tag, or ``None`` when nothing is focused."""
        return self._current

    @property
    def order(self) -> list[Tag]:
        return list(self._order)

    def is_focused(self, tag: Tag | None) -> bool:
        return tag is not None and self._current == tag

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def advance(self) -> Tag | None:
        """Move to the next focusable tag, wrapping at the end."""
        return self._step(1)

    def retreat(self) -> Tag | None:
        """Move to the previous focusable tag, wrapping at the start."""
        return self._step(-1)

    def focus(self, tag: Tag) -> None:
        """Focus *tag* directly.

        Raises ``KeyError`` if *tag* is not in the current focus order.
        """
        if tag not in self._order:
            raise KeyError(tag)
        self._set(tag)

    def invalidate(self, order: Sequence[Tag]) -> Tag | None:
        """Adopt the focus order of a new frame and repair focus if needed."""
        previous = self._order
        self._order = list(order)

        if not self._order:
            self._set(None)
        elif self._current is None:
            self._set(self._order[0])
        elif self._current not in self._order:
            self._set(self._nearest_survivor(previous, self._current))
        return self._current

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _step(self, delta: int) -> Tag | None:
        if not self._order:
            return None
        if self._current is None:
            index = 0 if delta > 0 else len(self._order) - 1
        else:
            index = (self._order.index(self._current) + delta) % len(self._order)
        self._set(self._order[index])
        return self._current

    def _nearest_survivor(self, previous: list[Tag], lost: Tag) -> Tag:
        alive = set(self._order)
        index = previous.index(lost) if lost in previous else 0
        for distance in range(1, len(previous)):
            # Prefer the tag that followed the lost one.
            for candidate in (index + distance, index - distance):
                if 0 <= candidate < len(previous) and previous[candidate] in alive:
                    return previous[candidate]
        return self._order[min(index, len(self._order) - 1)]

    def _set(self, tag: Tag | None) -> None:
        if tag != self._current:
            logger.debug("focus %r -> %r", self._current, tag)
        self._current = tag
