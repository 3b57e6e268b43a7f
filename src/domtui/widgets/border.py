"""Single-line box border drawn around a widget's content."""

from __future__ import annotations

from typing import Callable

from domtui.utils import pad_to_width, truncate_to_width, visible_width

TOP_LEFT = "┌"
TOP_RIGHT = "┐"
BOTTOM_LEFT = "└"
BOTTOM_RIGHT = "┘"
HORIZONTAL = "─"
VERTICAL = "│"


def frame_lines(
    content: list[str],
    width: int,
    height: int,
    title: str | None = None,
    border_fn: Callable[[str], str] | None = None,
) -> list[str]:
    """Surround *content* with a border filling ``width`` x ``height`` cells.

    *content* is laid out in the ``(width - 2) x (height - 2)`` interior and
    padded or clipped to fit.  Areas too small for a border get the content
    unframed.
    """
    if width < 2 or height < 2:
        return [pad_to_width(line, width) for line in content[:height]]

    paint = border_fn or (lambda s: s)
    inner_width = width - 2
    inner_height = height - 2

    top_fill = HORIZONTAL * inner_width
    if title:
        label = truncate_to_width(title, inner_width)
        top_fill = label + HORIZONTAL * (inner_width - visible_width(label))

    lines = [paint(TOP_LEFT + top_fill + TOP_RIGHT)]
    for row in range(inner_height):
        body = content[row] if row < len(content) else ""
        lines.append(
            paint(VERTICAL) + pad_to_width(body, inner_width) + paint(VERTICAL)
        )
    lines.append(paint(BOTTOM_LEFT + HORIZONTAL * inner_width + BOTTOM_RIGHT))
    return lines
