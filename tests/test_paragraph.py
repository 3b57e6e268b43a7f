"""Tests for the Paragraph and Empty widgets and the border helper."""

from __future__ import annotations

from domtui.geometry import Rect
from domtui.utils import strip_ansi
from domtui.widgets import Empty, Paragraph
from domtui.widgets.border import frame_lines


class TestParagraphRender:
    def test_lines_fill_rect(self) -> None:
        lines = Paragraph("hello").render(Rect(0, 0, 8, 3), None, False)
        assert lines == ["hello   ", "        ", "        "]

    def test_wraps_words(self) -> None:
        lines = Paragraph("the quick brown fox").render(Rect(0, 0, 10, 2), None, False)
        assert lines == ["the quick ", "brown fox "]

    def test_clips_to_height(self) -> None:
        lines = Paragraph("a b c d").render(Rect(0, 0, 1, 2), None, False)
        assert lines == ["a", "b"]

    def test_no_wrap_clips_each_line(self) -> None:
        widget = Paragraph("abcdef\nxy", wrap=False)
        assert widget.render(Rect(0, 0, 4, 2), None, False) == ["abcd", "xy  "]

    def test_alignment(self) -> None:
        rect = Rect(0, 0, 6, 1)
        assert Paragraph("ab", alignment="right").render(rect, None, False) == ["    ab"]
        assert Paragraph("ab", alignment="center").render(rect, None, False) == ["  ab  "]

    def test_style_applied_to_every_line(self) -> None:
        widget = Paragraph("x", style=lambda s: f"\x1b[1m{s}\x1b[0m")
        lines = widget.render(Rect(0, 0, 3, 2), None, False)
        assert all(line.startswith("\x1b[1m") for line in lines)
        assert [strip_ansi(line) for line in lines] == ["x  ", "   "]

    def test_border_and_title(self) -> None:
        widget = Paragraph("hi", border=True, title="T")
        lines = widget.render(Rect(0, 0, 6, 3), None, False)
        assert lines == ["┌T───┐", "│hi  │", "└────┘"]

    def test_empty_rect_renders_nothing(self) -> None:
        assert Paragraph("hi").render(Rect(0, 0, 0, 5), None, False) == []

    def test_is_static(self) -> None:
        widget = Paragraph("x")
        assert not widget.is_focusable()
        assert widget.measure() is None
        assert widget.create_state() is None


class TestEmpty:
    def test_renders_nothing(self) -> None:
        assert Empty().render(Rect(0, 0, 5, 5), None, False) == []

    def test_ignores_events(self) -> None:
        assert Empty().handle_event(object(), None) is False  # type: ignore[arg-type]


class TestFrameLines:
    def test_content_is_padded_inside_border(self) -> None:
        lines = frame_lines(["ab"], 5, 4)
        assert lines == ["┌───┐", "│ab │", "│   │", "└───┘"]

    def test_long_title_is_truncated(self) -> None:
        lines = frame_lines([], 6, 2, title="abcdefgh")
        assert lines[0] == "┌abcd┐"

    def test_too_small_for_border(self) -> None:
        assert frame_lines(["xyz"], 1, 1) == ["x"]

    def test_border_style(self) -> None:
        lines = frame_lines(["a"], 3, 3, border_fn=lambda s: f"<{s}>")
        assert lines[0] == "<┌─┐>"
        assert lines[1] == "<│>a<│>"
