"""Paragraph widget - static, word-wrapped text with an optional border."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Literal

from domtui.utils import align_to_width, pad_to_width, wrap_text
from domtui.widgets.base import StaticWidget
from domtui.widgets.border import frame_lines

if TYPE_CHECKING:
    from domtui.geometry import Rect

Alignment = Literal["left", "center", "right"]


@dataclass(frozen=True)
class Paragraph(StaticWidget):
    """Displays text, wrapped (or clipped) to the area it is given.

    ``style`` is applied to every content line after layout, e.g.
    ``lambda s: f"\\x1b[44m{s}\\x1b[0m"`` for a blue background.
    """

    text: str = ""
    wrap: bool = True
    alignment: Alignment = "left"
    border: bool = False
    title: str | None = None
    style: Callable[[str], str] | None = None
    border_style: Callable[[str], str] | None = None

    def render(self, rect: Rect, state: Any, focused: bool) -> list[str]:
        if rect.is_empty:
            return []
        framed = self.border and rect.width >= 2 and rect.height >= 2
        width = rect.width - 2 if framed else rect.width
        height = rect.height - 2 if framed else rect.height

        content = self._content_lines(width, height)
        if framed:
            return frame_lines(
                content, rect.width, rect.height, self.title, self.border_style
            )
        return content

    def _content_lines(self, width: int, height: int) -> list[str]:
        if self.wrap:
            raw = wrap_text(self.text, width)
        else:
            raw = self.text.replace("\t", "   ").split("\n")
        lines = [align_to_width(line, width, self.alignment) for line in raw[:height]]
        lines.extend(pad_to_width("", width) for _ in range(height - len(lines)))
        if self.style is not None:
            lines = [self.style(line) for line in lines]
        return lines
