"""Terminal back-end: raw mode, painting, and blocking event reads.

Provides the ``Terminal`` protocol the event loop talks to, the concrete
``ProcessTerminal`` for a real tty, and :func:`terminal_session`, which
scopes ``setup()``/``restore()`` so the terminal is put back exactly once on
every exit path.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import signal
import sys
import termios
import tty
from contextlib import contextmanager
from typing import IO, Iterator, Protocol, Sequence

from domtui.canvas import Canvas
from domtui.errors import TerminalIOError
from domtui.events import Event, QuitEvent, ResizeEvent
from domtui.geometry import Rect
from domtui.input_buffer import InputDecoder

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"
_MOUSE_ENABLE = "\x1b[?1000h\x1b[?1006h"
_MOUSE_DISABLE = "\x1b[?1006l\x1b[?1000l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"

# A lone ESC is flushed as a key press after this many seconds of silence.
_ESCAPE_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface between the event loop and a terminal back-end."""

    def setup(self) -> None:
        """Enter raw mode and the alternate screen."""
        ...

    def restore(self) -> None:
        """Undo everything :meth:`setup` changed."""
        ...

    def read_event(self) -> Event:
        """Block until the next input event is available."""
        ...

    def paint(self, rect: Rect, lines: Sequence[str]) -> None:
        """Draw rendered *lines* into *rect* of the pending frame."""
        ...

    def flush(self) -> None:
        """Push the pending frame to the screen."""
        ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


@contextmanager
def terminal_session(terminal: Terminal) -> Iterator[Terminal]:
    """Run ``setup()`` on entry and ``restore()`` exactly once on exit."""
    try:
        terminal.setup()
        yield terminal
    finally:
        terminal.restore()


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by the process's controlling tty.

    Uses :mod:`termios`/:mod:`tty` for raw mode and wakes the blocking read
    on ``SIGWINCH`` through a self-pipe so resizes arrive as events.
    """

    def __init__(
        self,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
        mouse: bool = True,
        alternate_screen: bool = True,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._mouse = mouse and os.environ.get("DOMTUI_NO_MOUSE") != "1"
        self._alternate_screen = alternate_screen
        self._write_log_path: str = os.environ.get("DOMTUI_WRITE_LOG", "")

        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._active: bool = False

        self._decoder = InputDecoder()
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._queue: list[Event] = []

        self._size: tuple[int, int] = (80, 24)
        self._canvas: Canvas | None = None
        self._previous: Canvas | None = None

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._size[0]

    @property
    def rows(self) -> int:
        return self._size[1]

    def _query_size(self) -> tuple[int, int]:
        try:
            size = os.get_terminal_size(self._stdout.fileno())
        except (ValueError, OSError):
            return (80, 24)
        return (size.columns, size.lines)

    # -- setup / restore ----------------------------------------------------

    def setup(self) -> None:
        fd = self._stdin.fileno()
        try:
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except termios.error as exc:
            raise TerminalIOError(f"cannot enter raw mode: {exc}") from exc
        self._active = True

        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        self._prev_sigwinch_handler = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._on_sigwinch)

        self._size = self._query_size()
        setup = _HIDE_CURSOR + _BRACKETED_PASTE_ENABLE
        if self._alternate_screen:
            setup = _ALT_SCREEN_ENABLE + setup
        if self._mouse:
            setup += _MOUSE_ENABLE
        self._write(setup + _CLEAR_SCREEN)
        logger.debug("terminal set up at %dx%d", *self._size)

    def restore(self) -> None:
        """Put the terminal back; safe to call after a partial ``setup``."""
        if not self._active:
            return
        self._active = False

        teardown = _BRACKETED_PASTE_DISABLE + _SHOW_CURSOR
        if self._mouse:
            teardown = _MOUSE_DISABLE + teardown
        if self._alternate_screen:
            teardown += _ALT_SCREEN_DISABLE
        try:
            self._write(teardown)
        except TerminalIOError:
            logger.debug("could not write terminal teardown sequence")

        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

        if self._original_termios is not None:
            termios.tcsetattr(
                self._stdin.fileno(), termios.TCSADRAIN, self._original_termios
            )
            self._original_termios = None

        self._decoder.clear()
        self._canvas = self._previous = None
        logger.debug("terminal restored")

    # -- input --------------------------------------------------------------

    def read_event(self) -> Event:
        """Block until the next event; resize wins over pending input."""
        while not self._queue:
            self._queue.extend(self._wait_for_input())
        return self._queue.pop(0)

    def _wait_for_input(self) -> list[Event]:
        fd = self._stdin.fileno()
        watched = [fd] if self._wake_r is None else [fd, self._wake_r]
        timeout = _ESCAPE_TIMEOUT if self._decoder.awaiting_escape else None
        try:
            readable, _, _ = select.select(watched, [], [], timeout)
            if not readable:
                return self._decoder.flush()
            if self._wake_r is not None and self._wake_r in readable:
                os.read(self._wake_r, 1024)
                self._size = self._query_size()
                return [ResizeEvent(self.columns, self.rows)]
            raw = os.read(fd, 4096)
        except OSError as exc:
            raise TerminalIOError(f"reading terminal input failed: {exc}") from exc

        if not raw:
            return [QuitEvent()]
        return self._decoder.feed(self._utf8.decode(raw))

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        if self._wake_w is not None:
            try:
                os.write(self._wake_w, b"\0")
            except BlockingIOError:
                pass

    # -- output -------------------------------------------------------------

    def paint(self, rect: Rect, lines: Sequence[str]) -> None:
        if self._canvas is None or (
            self._canvas.width,
            self._canvas.height,
        ) != self._size:
            self._canvas = Canvas(*self._size)
        self._canvas.paint(rect, lines)

    def flush(self) -> None:
        """Rewrite the rows that changed since the last flushed frame."""
        if self._canvas is None:
            self._canvas = Canvas(*self._size)
        canvas = self._canvas
        prefix = ""
        if self._previous is not None and (
            self._previous.width,
            self._previous.height,
        ) != (canvas.width, canvas.height):
            prefix = _CLEAR_SCREEN
        rows = canvas.diff(self._previous)
        out = [prefix]
        for y in rows:
            out.append(_MOVE_TO_FMT.format(y + 1, 1))
            out.append(canvas.encode_row(y))
        self._write("".join(out))
        self._previous = canvas.copy()
        canvas.clear()

    def _write(self, data: str) -> None:
        if not data:
            return
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except OSError as exc:
            raise TerminalIOError(f"writing to terminal failed: {exc}") from exc

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                pass
