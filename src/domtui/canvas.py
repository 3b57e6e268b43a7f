"""Cell buffer that widgets' rendered lines are composed into.

A :class:`Canvas` is a ``width`` x ``height`` grid of cells.  Painting a
rendered line at a rect clips it to the rect and keeps the SGR styling that
was active for every cell, so rows can be serialised back into escape
sequences.  :meth:`Canvas.diff` reports which rows differ from an earlier
frame so the terminal only rewrites those.

SGR sequences are folded into a set of attributes while painting, so a cell's
style is always the shortest equivalent sequence no matter how many on/off
pairs the rendered line contained.  Escape sequences other than SGR are
dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from domtui.geometry import Rect
from domtui.utils import RESET, grapheme_width, graphemes, split_ansi

SGR_PATTERN = re.compile(r"\x1b\[([0-9;:]*)m\Z")

# Attribute slots in the order they are serialised.
_SLOTS = (
    "bold",
    "dim",
    "italic",
    "underline",
    "blink",
    "reverse",
    "hidden",
    "strike",
    "fg",
    "bg",
)
_ON = {
    1: "bold",
    2: "dim",
    3: "italic",
    4: "underline",
    5: "blink",
    6: "blink",
    7: "reverse",
    8: "hidden",
    9: "strike",
}
_OFF = {
    22: ("bold", "dim"),
    23: ("italic",),
    24: ("underline",),
    25: ("blink",),
    27: ("reverse",),
    28: ("hidden",),
    29: ("strike",),
    39: ("fg",),
    49: ("bg",),
}


# ---------------------------------------------------------------------------
# SGR folding
# ---------------------------------------------------------------------------


def apply_sgr(attrs: dict[str, str], params: str) -> None:
    """Update *attrs* in place with the parameters of one SGR sequence."""
    codes = params.split(";") if params else ["0"]
    i = 0
    while i < len(codes):
        param = codes[i]
        i += 1
        if ":" in param:
            # ITU colon form, e.g. ``38:2::255:0:0``; kept verbatim.
            head = param.split(":", 1)[0]
            if head in ("38", "48"):
                attrs["fg" if head == "38" else "bg"] = param
            continue
        if not param.isdigit():
            continue
        code = int(param)
        if code == 0:
            attrs.clear()
        elif code in _ON:
            attrs[_ON[code]] = str(code)
        elif code in _OFF:
            for slot in _OFF[code]:
                attrs.pop(slot, None)
        elif 30 <= code <= 37 or 90 <= code <= 97:
            attrs["fg"] = str(code)
        elif 40 <= code <= 47 or 100 <= code <= 107:
            attrs["bg"] = str(code)
        elif code in (38, 48) and i < len(codes):
            # Extended colour: ``38;5;n`` or ``38;2;r;g;b``.
            count = {"5": 2, "2": 4}.get(codes[i], 1)
            value = ";".join([param] + codes[i : i + count])
            i += count
            attrs["fg" if code == 38 else "bg"] = value


def encode_sgr(attrs: dict[str, str]) -> str:
    """Return the single SGR sequence for *attrs* (``""`` when plain)."""
    if not attrs:
        return ""
    return "\x1b[" + ";".join(attrs[s] for s in _SLOTS if s in attrs) + "m"


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """One terminal cell: a grapheme and the SGR prefix it is drawn with.

    The right half of a double-width grapheme is a cell with ``text == ""``.
    """

    text: str = " "
    style: str = ""


BLANK = Cell()


class Canvas:
    """A mutable grid of :class:`Cell` objects."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._rows: list[list[Cell]] = [
            [BLANK] * self.width for _ in range(self.height)
        ]

    def clear(self) -> None:
        for row in self._rows:
            row[:] = [BLANK] * self.width

    # ------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------

    def paint(self, rect: Rect, lines: Sequence[str]) -> None:
        """Draw *lines* top-down into *rect*, clipped to the rect and canvas."""
        for offset, line in enumerate(lines[: max(0, rect.height)]):
            y = rect.y + offset
            if 0 <= y < self.height:
                self._paint_line(y, rect.x, min(rect.right, self.width), line)

    def _paint_line(self, y: int, x0: int, limit: int, line: str) -> None:
        row = self._rows[y]
        x = x0
        attrs: dict[str, str] = {}
        style = ""
        for is_ansi, chunk in split_ansi(line):
            if is_ansi:
                match = SGR_PATTERN.match(chunk)
                if match is not None:
                    apply_sgr(attrs, match.group(1))
                    style = encode_sgr(attrs)
                continue
            for g in graphemes(chunk):
                w = grapheme_width(g)
                if w == 0:
                    continue
                if x + w > limit:
                    return
                if x >= 0:
                    row[x] = Cell(g, style)
                    if w == 2:
                        row[x + 1] = Cell("", style)
                x += w

    # ------------------------------------------------------------------
    # Reading back
    # ------------------------------------------------------------------

    def row_text(self, y: int) -> str:
        """Plain text of row *y* without styling."""
        return "".join(cell.text for cell in self._rows[y])

    def lines(self) -> list[str]:
        return [self.row_text(y) for y in range(self.height)]

    def cell(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def encode_row(self, y: int) -> str:
        """Serialise row *y* with the SGR sequences needed to reproduce it."""
        out: list[str] = []
        current = ""
        for cell in self._rows[y]:
            if cell.style != current:
                out.append(RESET + cell.style)
                current = cell.style
            out.append(cell.text)
        if current:
            out.append(RESET)
        return "".join(out)

    def diff(self, previous: Canvas | None) -> list[int]:
        """Return the rows that differ from *previous* (all rows if sizes differ)."""
        if (
            previous is None
            or previous.width != self.width
            or previous.height != self.height
        ):
            return list(range(self.height))
        return [
            y for y in range(self.height) if self._rows[y] != previous._rows[y]
        ]

    def copy(self) -> Canvas:
        clone = Canvas(0, 0)
        clone.width = self.width
        clone.height = self.height
        clone._rows = [list(row) for row in self._rows]
        return clone
