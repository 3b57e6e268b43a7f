"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``domtui.terminal.Terminal`` protocol without performing any real I/O.
Events are replayed from a script and painted frames are kept on a
``Canvas`` for assertions.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from domtui.canvas import Canvas
from domtui.errors import TerminalIOError
from domtui.events import Event, QuitEvent, ResizeEvent
from domtui.geometry import Rect


class VirtualTerminal:
    """In-memory terminal that replays scripted events and records paints.

    Parameters
    ----------
    events:
        Events returned by successive ``read_event`` calls.  When the script
        runs out a ``QuitEvent`` is returned, or ``TerminalIOError`` is raised
        if *fail_when_exhausted* is set.
    rows, columns:
        Terminal dimensions.  A scripted ``ResizeEvent`` updates them when it
        is read, as a real terminal would.
    """

    def __init__(
        self,
        events: Iterable[Event] = (),
        rows: int = 24,
        columns: int = 80,
        fail_when_exhausted: bool = False,
    ) -> None:
        self._events: list[Event] = list(events)
        self._rows = rows
        self._columns = columns
        self._fail_when_exhausted = fail_when_exhausted
        self._canvas = Canvas(columns, rows)
        self.frames: list[list[str]] = []
        self.paints: list[tuple[Rect, list[str]]] = []
        self.setup_count = 0
        self.restore_count = 0
        self.active = False

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Terminal protocol: lifecycle ---------------------------------------

    def setup(self) -> None:
        self.setup_count += 1
        self.active = True

    def restore(self) -> None:
        self.restore_count += 1
        self.active = False

    # -- Terminal protocol: input -------------------------------------------

    def read_event(self) -> Event:
        if not self._events:
            if self._fail_when_exhausted:
                raise TerminalIOError("input closed")
            return QuitEvent()
        event = self._events.pop(0)
        if isinstance(event, ResizeEvent):
            self._columns = event.columns
            self._rows = event.rows
        return event

    # -- Terminal protocol: output ------------------------------------------

    def paint(self, rect: Rect, lines: Sequence[str]) -> None:
        if (self._canvas.width, self._canvas.height) != (self._columns, self._rows):
            self._canvas = Canvas(self._columns, self._rows)
        self.paints.append((rect, list(lines)))
        self._canvas.paint(rect, lines)

    def flush(self) -> None:
        self.frames.append(self._canvas.lines())
        self._canvas = Canvas(self._columns, self._rows)

    # -- Test helpers -------------------------------------------------------

    @property
    def last_frame(self) -> list[str]:
        """Plain text rows of the most recently flushed frame."""
        return self.frames[-1] if self.frames else []

    def push(self, *events: Event) -> None:
        """Append more events to the script."""
        self._events.extend(events)
