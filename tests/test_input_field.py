"""Tests for the InputField widget and its InputFieldState."""

from __future__ import annotations

import pytest

from domtui.canvas import Canvas
from domtui.clipboard import Clipboard, get_clipboard, set_clipboard
from domtui.events import KeyEvent, MouseEvent, PasteEvent
from domtui.geometry import Rect
from domtui.utils import strip_ansi, visible_width
from domtui.widgets import InputField, InputFieldState

# Raw escape codes for key sequences
KEY_LEFT = KeyEvent("left", "\x1b[D")
KEY_RIGHT = KeyEvent("right", "\x1b[C")
KEY_HOME = KeyEvent("home", "\x1b[H")
KEY_END = KeyEvent("end", "\x1b[F")
KEY_BACKSPACE = KeyEvent("backspace", "\x7f")
KEY_DELETE = KeyEvent("delete", "\x1b[3~")
SHIFT_LEFT = KeyEvent("shift+left", "\x1b[1;2D")
SELECT_ALL = KeyEvent("alt+a", "\x1ba")
COPY = KeyEvent("alt+c", "\x1bc")
CUT = KeyEvent("alt+x", "\x1bx")
PASTE = KeyEvent("ctrl+v", "\x16")
ENTER = KeyEvent("enter", "\r")
TAB = KeyEvent("tab", "\t")


@pytest.fixture(autouse=True)
def fresh_clipboard():
    previous = get_clipboard()
    set_clipboard(Clipboard())
    yield
    set_clipboard(previous)


def type_text(widget: InputField, state: InputFieldState, text: str) -> None:
    for ch in text:
        widget.handle_event(KeyEvent(ch, ch), state)


# ---------------------------------------------------------------------------
# State operations
# ---------------------------------------------------------------------------


class TestInputFieldStateEditing:
    def test_insert_at_caret(self) -> None:
        state = InputFieldState()
        state.insert("helo")
        state.caret = 3
        state.insert("l")
        assert state.text == "hello"
        assert state.caret == 4

    def test_insert_text_drops_newlines(self) -> None:
        state = InputFieldState()
        state.insert_text("a\nb\r\nc")
        assert state.text == "abc"

    def test_delete_backward_and_forward(self) -> None:
        state = InputFieldState(text="abc", caret=1)
        state.delete_backward()
        assert (state.text, state.caret) == ("bc", 0)
        state.delete_backward()
        assert state.text == "bc"
        state.delete_forward()
        assert (state.text, state.caret) == ("c", 0)

    def test_delete_forward_at_end_is_noop(self) -> None:
        state = InputFieldState(text="ab", caret=2)
        state.delete_forward()
        assert state.text == "ab"

    def test_caret_moves_by_grapheme(self) -> None:
        state = InputFieldState(text="e\u0301x", caret=0)
        state.caret_right()
        assert state.caret == 2
        state.caret_left()
        assert state.caret == 0

    def test_caret_line_start_and_end(self) -> None:
        state = InputFieldState(text="hello", caret=2)
        state.caret_line_end()
        assert state.caret_at_end
        state.caret_line_start()
        assert state.caret == 0

    def test_set_text_returns_previous(self) -> None:
        state = InputFieldState(text="old", caret=3)
        assert state.set_text("new") == "old"
        assert (state.text, state.caret) == ("new", 0)

    def test_take_text_and_clear(self) -> None:
        state = InputFieldState(text="abc", caret=3)
        assert state.take_text() == "abc"
        assert state.text == ""
        state.insert("x")
        state.clear()
        assert state.text == ""


class TestInputFieldStateSelection:
    def test_select_left_creates_selection(self) -> None:
        state = InputFieldState(text="hello", caret=5)
        state.select_left()
        state.select_left()
        assert state.selected_text() == "lo"

    def test_insert_replaces_selection(self) -> None:
        state = InputFieldState(text="hello", caret=5)
        state.select_line_start()
        state.insert("bye")
        assert state.text == "bye"
        assert not state.has_selection

    def test_delete_backward_removes_selection(self) -> None:
        state = InputFieldState(text="hello", caret=1)
        state.select_right()
        state.select_right()
        state.delete_backward()
        assert (state.text, state.caret) == ("hlo", 1)

    def test_caret_move_collapses_selection(self) -> None:
        state = InputFieldState(text="hello", caret=4)
        state.select_line_start()
        state.caret_right()
        assert not state.has_selection
        assert state.caret == 4

    def test_select_all(self) -> None:
        state = InputFieldState(text="abc")
        state.select_all()
        assert state.selection() == (0, 3)

    def test_select_all_on_empty_text_selects_nothing(self) -> None:
        state = InputFieldState()
        state.select_all()
        assert not state.has_selection

    def test_selection_back_to_anchor_clears_it(self) -> None:
        state = InputFieldState(text="ab", caret=1)
        state.select_right()
        state.select_left()
        assert not state.has_selection


# ---------------------------------------------------------------------------
# Widget behaviour
# ---------------------------------------------------------------------------


class TestInputFieldEvents:
    def test_create_state_seeds_text(self) -> None:
        state = InputField(text="hi", caret_at_end=True).create_state()
        assert (state.text, state.caret) == ("hi", 2)
        assert InputField(text="hi").create_state().caret == 0

    def test_typing_inserts_characters(self) -> None:
        widget = InputField()
        state = widget.create_state()
        type_text(widget, state, "hey")
        assert state.text == "hey"

    def test_editing_keys(self) -> None:
        widget = InputField()
        state = widget.create_state()
        type_text(widget, state, "abc")
        for event in (KEY_LEFT, KEY_BACKSPACE, KEY_HOME, KEY_DELETE, KEY_END):
            assert widget.handle_event(event, state)
        assert state.text == "c"
        assert state.caret_at_end

    def test_shift_left_selects(self) -> None:
        widget = InputField()
        state = widget.create_state()
        type_text(widget, state, "abc")
        widget.handle_event(SHIFT_LEFT, state)
        assert state.selected_text() == "c"

    def test_copy_cut_paste(self) -> None:
        widget = InputField()
        state = widget.create_state()
        type_text(widget, state, "abc")
        widget.handle_event(SELECT_ALL, state)
        widget.handle_event(COPY, state)
        assert get_clipboard().paste() == "abc"
        widget.handle_event(CUT, state)
        assert state.text == ""
        widget.handle_event(PASTE, state)
        widget.handle_event(PASTE, state)
        assert state.text == "abcabc"

    def test_paste_event_inserts_single_line(self) -> None:
        widget = InputField()
        state = widget.create_state()
        assert widget.handle_event(PasteEvent("one\ntwo"), state)
        assert state.text == "onetwo"

    def test_enter_without_submit_is_not_consumed(self) -> None:
        widget = InputField()
        assert widget.handle_event(ENTER, widget.create_state()) is False

    def test_enter_calls_on_submit(self) -> None:
        submitted: list[str] = []
        widget = InputField(on_submit=lambda s: submitted.append(s.take_text()))
        state = widget.create_state()
        type_text(widget, state, "go")
        assert widget.handle_event(ENTER, state)
        assert submitted == ["go"]
        assert state.text == ""

    def test_tab_and_mouse_are_not_consumed(self) -> None:
        widget = InputField()
        state = widget.create_state()
        assert widget.handle_event(TAB, state) is False
        assert widget.handle_event(MouseEvent(0, 0, "left"), state) is False

    def test_is_focusable(self) -> None:
        assert InputField().is_focusable()


class TestInputFieldRender:
    def test_line_fills_width(self) -> None:
        widget = InputField()
        state = InputFieldState(text="abc", caret=3)
        (line,) = widget.render(Rect(0, 0, 10, 1), state, focused=True)
        assert visible_width(line) == 10
        assert strip_ansi(line).startswith("abc")

    def test_focused_caret_is_reverse_video(self) -> None:
        widget = InputField()
        state = InputFieldState(text="abc", caret=1)
        (line,) = widget.render(Rect(0, 0, 10, 1), state, focused=True)
        assert "\x1b[7mb\x1b[27m" in line

    def test_unfocused_has_no_caret(self) -> None:
        widget = InputField()
        state = InputFieldState(text="abc", caret=1)
        (line,) = widget.render(Rect(0, 0, 10, 1), state, focused=False)
        assert "\x1b[7m" not in line

    def test_placeholder_when_empty(self) -> None:
        widget = InputField(placeholder="name")
        (line,) = widget.render(Rect(0, 0, 10, 1), InputFieldState(), focused=False)
        assert strip_ansi(line).startswith("name")

    def test_long_text_scrolls_to_caret(self) -> None:
        widget = InputField()
        state = InputFieldState(text="abcdefghijklmnop", caret=16)
        (line,) = widget.render(Rect(0, 0, 5, 1), state, focused=True)
        assert visible_width(line) == 5
        assert strip_ansi(line).startswith("mnop")
        assert state.scroll == 12

    def test_border_draws_three_rows(self) -> None:
        widget = InputField(border=True, title="Name")
        lines = widget.render(Rect(0, 0, 12, 3), InputFieldState(), focused=False)
        assert len(lines) == 3
        assert lines[0].startswith("┌Name")
        assert all(visible_width(line) == 12 for line in lines)

    def test_measure_depends_on_border(self) -> None:
        assert InputField().measure() == (None, 1)
        assert InputField(border=True).measure() == (None, 3)


class TestInputFieldStyles:
    def test_selection_differs_from_caret(self) -> None:
        state = InputFieldState(text="abcd", caret=3, anchor=1)
        (line,) = InputField().render(Rect(0, 0, 10, 1), state, focused=True)
        assert "\x1b[30;104mbc\x1b[39;49m" in line
        assert "\x1b[7m" not in line

    def test_selection_wrapped_once_per_span(self) -> None:
        state = InputFieldState(text="abcdef")
        state.select_all()
        (line,) = InputField().render(Rect(0, 0, 10, 1), state, focused=True)
        assert line.count("\x1b[30;104m") == 1

    def test_custom_text_and_selection_styles(self) -> None:
        widget = InputField(
            focused_style=lambda s: f"[{s}]",
            selection_style=lambda s: f"<{s}>",
        )
        state = InputFieldState(text="abcd", caret=3, anchor=1)
        (line,) = widget.render(Rect(0, 0, 20, 1), state, focused=True)
        assert line.startswith("[a]<bc>[d]")

    def test_unfocused_style(self) -> None:
        widget = InputField(style=lambda s: f"~{s}~", focused_style=lambda s: s)
        state = InputFieldState(text="abc")
        (line,) = widget.render(Rect(0, 0, 10, 1), state, focused=False)
        assert line.startswith("~abc~")

    def test_placeholder_style(self) -> None:
        widget = InputField(placeholder="name", placeholder_style=lambda s: f"({s})")
        (line,) = widget.render(Rect(0, 0, 10, 1), InputFieldState(), focused=False)
        assert line.startswith("(name)")

    def test_long_selection_encodes_compactly(self) -> None:
        state = InputFieldState(text="a" * 200)
        state.select_all()
        (line,) = InputField().render(Rect(0, 0, 200, 1), state, focused=True)
        canvas = Canvas(200, 1)
        canvas.paint(Rect(0, 0, 200, 1), [line])
        assert len(canvas.encode_row(0)) < 300
