"""Input events delivered by a terminal back-end to the event loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

MouseButton = Literal["left", "middle", "right", "wheel_up", "wheel_down", "none"]


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``key`` is the normalised key id produced by
    :func:`domtui.keys.parse_key` (``"a"``, ``"ctrl+c"``, ``"shift+left"``);
    it is ``None`` for input that could not be decoded.  ``data`` keeps the
    raw bytes as received so widgets can insert printable text verbatim.
    """

    key: str | None
    data: str


@dataclass(frozen=True)
class PasteEvent:
    """Text delivered through bracketed paste."""

    text: str


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    columns: int
    rows: int


@dataclass(frozen=True)
class MouseEvent:
    """A mouse button or wheel event at cell ``(x, y)`` (zero based)."""

    x: int
    y: int
    button: MouseButton
    pressed: bool = True


@dataclass(frozen=True)
class QuitEvent:
    """Request to leave the event loop (e.g. SIGTERM or end of input)."""


Event = Union[KeyEvent, PasteEvent, ResizeEvent, MouseEvent, QuitEvent]
