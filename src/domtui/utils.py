"""Terminal text utilities: width measurement, clipping, word wrapping.

Widths are measured per grapheme cluster so that CJK characters count two
columns and combining marks count zero.  ANSI SGR sequences are allowed in
the input and are treated as zero-width.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# ANSI handling
# ---------------------------------------------------------------------------

_ANSI_RE = re.compile(r"\x1b\[[0-9;:?]*[A-Za-z]")

RESET = "\x1b[0m"


def strip_ansi(text: str) -> str:
    """Remove ANSI CSI sequences from *text*."""
    return _ANSI_RE.sub("", text)


def split_ansi(text: str) -> list[tuple[bool, str]]:
    """Split *text* into ``(is_ansi, chunk)`` pairs."""
    parts: list[tuple[bool, str]] = []
    pos = 0
    for m in _ANSI_RE.finditer(text):
        if m.start() > pos:
            parts.append((False, text[pos:m.start()]))
        parts.append((True, m.group(0)))
        pos = m.end()
    if pos < len(text):
        parts.append((False, text[pos:]))
    return parts


# ---------------------------------------------------------------------------
# Graphemes and widths
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[str]:
    """Return the grapheme clusters of *text*."""
    return list(grapheme.graphemes(text))


_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def grapheme_width(g: str) -> int:
    """Return the display width of a single grapheme cluster."""
    if not g:
        return 0
    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation selector or ZWJ sequence
    if "\ufe0f" in g or "\u200d" in g:
        return 2
    first = g[0]
    if unicodedata.category(first) in ("Mn", "Me", "Cf"):
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies."""
    if not text:
        return 0
    stripped = strip_ansi(text)
    if stripped.isascii():
        return sum(1 for ch in stripped if ch >= " " and ch != "\x7f")
    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached
    width = sum(grapheme_width(g) for g in graphemes(stripped))
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[stripped] = width
    return width


# ---------------------------------------------------------------------------
# Clipping and padding
# ---------------------------------------------------------------------------


def take_columns(text: str, max_cols: int) -> str:
    """Return the longest prefix of *text* that fits in *max_cols* columns.

    ANSI codes are preserved, text is cut on grapheme boundaries, and a
    wide character that would straddle the limit is dropped.
    """
    if max_cols <= 0:
        return ""
    out: list[str] = []
    cols = 0
    styled = False
    for is_ansi, chunk in split_ansi(text):
        if is_ansi:
            out.append(chunk)
            styled = True
            continue
        for g in graphemes(chunk):
            w = grapheme_width(g)
            if cols + w > max_cols:
                if styled:
                    out.append(RESET)
                return "".join(out)
            out.append(g)
            cols += w
    return "".join(out)


def truncate_to_width(text: str, max_width: int, ellipsis: str = "") -> str:
    """Clip *text* to *max_width* columns, appending *ellipsis* if clipped."""
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text
    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return take_columns(ellipsis, max_width)
    return take_columns(text, target) + ellipsis


def pad_to_width(text: str, width: int) -> str:
    """Clip or right-pad *text* with spaces to exactly *width* columns."""
    clipped = take_columns(text, width)
    return clipped + " " * max(0, width - visible_width(clipped))


def align_to_width(text: str, width: int, alignment: str = "left") -> str:
    """Pad *text* to *width* columns, placing it left, center or right."""
    clipped = take_columns(text, width)
    free = max(0, width - visible_width(clipped))
    if alignment == "center":
        left = free // 2
        return " " * left + clipped + " " * (free - left)
    if alignment == "right":
        return " " * free + clipped
    return clipped + " " * free


# ---------------------------------------------------------------------------
# Word wrapping
# ---------------------------------------------------------------------------


def wrap_text(text: str, width: int) -> list[str]:
    """Word-wrap plain *text* to *width* columns.

    Explicit newlines are honoured.  Words longer than *width* are broken on
    grapheme boundaries.  Whitespace at a wrap point is dropped.
    """
    if width <= 0:
        return []
    lines: list[str] = []
    for paragraph in text.replace("\t", "   ").split("\n"):
        lines.extend(_wrap_paragraph(paragraph, width))
    return lines


def _wrap_paragraph(paragraph: str, width: int) -> list[str]:
    if not paragraph:
        return [""]
    lines: list[str] = []
    current = ""
    current_width = 0
    for word in re.split(r"(\s+)", paragraph):
        if not word:
            continue
        word_width = visible_width(word)
        if word.isspace():
            if current and current_width + word_width <= width:
                current += word
                current_width += word_width
            elif current:
                lines.append(current.rstrip())
                current, current_width = "", 0
            continue
        if current_width + word_width <= width:
            current += word
            current_width += word_width
            continue
        if current:
            lines.append(current.rstrip())
            current, current_width = "", 0
        while word_width > width:
            head = take_columns(word, width)
            if not head:
                # A single grapheme wider than the line.
                head = graphemes(word)[0]
            lines.append(head)
            word = word[len(head):]
            word_width = visible_width(word)
        current, current_width = word, word_width
    if current or not lines:
        lines.append(current.rstrip())
    return lines
