"""InputField widget - single-line editable text with caret and selection.

The descriptor (:class:`InputField`) is rebuilt every frame; the edited
text, caret and selection live in :class:`InputFieldState`, which the
identity registry keeps alive for as long as the field's tag reappears.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from domtui.clipboard import get_clipboard
from domtui.events import Event, KeyEvent, PasteEvent
from domtui.keybindings import Action, get_keybindings
from domtui.utils import grapheme_width, graphemes, pad_to_width
from domtui.widgets.border import frame_lines

if TYPE_CHECKING:
    from domtui.geometry import Rect

REVERSE = "\x1b[7m"
REVERSE_OFF = "\x1b[27m"
DIM = "\x1b[2m"
DIM_OFF = "\x1b[22m"
# Black on light blue, distinct from the reverse-video caret.
SELECTION = "\x1b[30;104m"
SELECTION_OFF = "\x1b[39;49m"


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass
class InputFieldState:
    """Edited text plus caret and selection.

    ``caret`` and ``anchor`` are string offsets that always sit on grapheme
    boundaries.  While ``anchor`` is not ``None`` the text between the two
    offsets is selected.  ``scroll`` is the first visible column.
    """

    text: str = ""
    caret: int = 0
    anchor: int | None = None
    scroll: int = 0

    # -- queries -----------------------------------------------------------

    @property
    def has_selection(self) -> bool:
        return self.anchor is not None

    def selection(self) -> tuple[int, int] | None:
        """Return the selected ``(start, end)`` offsets, or ``None``."""
        if self.anchor is None:
            return None
        return min(self.caret, self.anchor), max(self.caret, self.anchor)

    def selected_text(self) -> str:
        span = self.selection()
        if span is None:
            return ""
        return self.text[span[0]:span[1]]

    @property
    def caret_at_end(self) -> bool:
        return self.caret == len(self.text)

    # -- whole-text operations ---------------------------------------------

    def set_text(self, text: str) -> str:
        """Replace the text, move the caret to the start; return the old text."""
        old = self.text
        self.text = text
        self.caret = 0
        self.anchor = None
        self.scroll = 0
        return old

    def take_text(self) -> str:
        """Return the text and leave the field empty."""
        return self.set_text("")

    def clear(self) -> None:
        self.set_text("")

    # -- editing -----------------------------------------------------------

    def insert(self, text: str) -> None:
        """Insert *text* at the caret, replacing the selection if any."""
        if self.anchor is not None:
            self._delete_selection()
        self.text = self.text[: self.caret] + text + self.text[self.caret:]
        self.caret += len(text)

    def insert_text(self, text: str) -> None:
        """Insert pasted or programmatic text, dropping line breaks."""
        self.insert(_single_line(text))

    def delete_backward(self) -> None:
        if self.anchor is not None:
            self._delete_selection()
            return
        if self.caret == 0:
            return
        start = self._prev_boundary(self.caret)
        self.text = self.text[:start] + self.text[self.caret:]
        self.caret = start

    def delete_forward(self) -> None:
        if self.anchor is not None:
            self._delete_selection()
            return
        if self.caret_at_end:
            return
        end = self._next_boundary(self.caret)
        self.text = self.text[: self.caret] + self.text[end:]

    def _delete_selection(self) -> None:
        start, end = self.selection()  # type: ignore[misc]
        self.text = self.text[:start] + self.text[end:]
        self.caret = start
        self.anchor = None

    # -- caret movement ----------------------------------------------------

    def caret_left(self) -> None:
        if self.anchor is not None:
            # Collapse onto the left edge of the selection.
            self.caret = min(self.caret, self.anchor)
            self.anchor = None
            return
        self.caret = self._prev_boundary(self.caret)

    def caret_right(self) -> None:
        if self.anchor is not None:
            self.caret = max(self.caret, self.anchor)
            self.anchor = None
            return
        self.caret = self._next_boundary(self.caret)

    def caret_line_start(self) -> None:
        self.anchor = None
        self.caret = 0

    def caret_line_end(self) -> None:
        self.anchor = None
        self.caret = len(self.text)

    # -- selection ---------------------------------------------------------

    def select_left(self) -> None:
        self._select_to(self._prev_boundary(self.caret))

    def select_right(self) -> None:
        self._select_to(self._next_boundary(self.caret))

    def select_line_start(self) -> None:
        self._select_to(0)

    def select_line_end(self) -> None:
        self._select_to(len(self.text))

    def select_all(self) -> None:
        self.anchor = 0
        self.caret = len(self.text)
        if self.caret == self.anchor:
            self.anchor = None

    def _select_to(self, offset: int) -> None:
        if self.anchor is None:
            self.anchor = self.caret
        self.caret = offset
        if self.caret == self.anchor:
            self.anchor = None

    # -- grapheme boundaries -----------------------------------------------

    def _prev_boundary(self, offset: int) -> int:
        if offset <= 0:
            return 0
        clusters = graphemes(self.text[:offset])
        return offset - len(clusters[-1]) if clusters else 0

    def _next_boundary(self, offset: int) -> int:
        if offset >= len(self.text):
            return len(self.text)
        clusters = graphemes(self.text[offset:])
        return offset + len(clusters[0]) if clusters else len(self.text)


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------

_EDIT_ACTIONS: dict[Action, Callable[[InputFieldState], None]] = {
    "cursorLeft": InputFieldState.caret_left,
    "cursorRight": InputFieldState.caret_right,
    "cursorLineStart": InputFieldState.caret_line_start,
    "cursorLineEnd": InputFieldState.caret_line_end,
    "selectLeft": InputFieldState.select_left,
    "selectRight": InputFieldState.select_right,
    "selectLineStart": InputFieldState.select_line_start,
    "selectLineEnd": InputFieldState.select_line_end,
    "selectAll": InputFieldState.select_all,
    "deleteCharBackward": InputFieldState.delete_backward,
    "deleteCharForward": InputFieldState.delete_forward,
}


@dataclass(frozen=True)
class InputField:
    """Focusable single-line text input.

    ``text`` and ``caret_at_end`` only seed the state the first time the
    field's tag is seen; afterwards the state is authoritative.

    The style callables wrap a run of text in escape sequences: ``style`` and
    ``focused_style`` for plain text, ``placeholder_style`` (dim by default)
    and ``selection_style`` (black on light blue by default).  The caret is
    always drawn in reverse video.
    """

    placeholder: str = ""
    text: str = ""
    caret_at_end: bool = False
    border: bool = False
    title: str | None = None
    on_submit: Callable[[InputFieldState], None] | None = None
    border_style: Callable[[str], str] | None = None
    focused_border_style: Callable[[str], str] | None = None
    style: Callable[[str], str] | None = None
    focused_style: Callable[[str], str] | None = None
    placeholder_style: Callable[[str], str] | None = None
    selection_style: Callable[[str], str] | None = None

    # -- Widget capability -------------------------------------------------

    def measure(self) -> tuple[int | None, int | None]:
        return (None, 3 if self.border else 1)

    def is_focusable(self) -> bool:
        return True

    def create_state(self) -> InputFieldState:
        state = InputFieldState(text=self.text)
        if self.caret_at_end:
            state.caret = len(self.text)
        return state

    def handle_event(self, event: Event, state: InputFieldState) -> bool:
        if isinstance(event, PasteEvent):
            state.insert(_single_line(event.text))
            return True
        if not isinstance(event, KeyEvent):
            return False

        kb = get_keybindings()
        action = kb.action_for(event, *_EDIT_ACTIONS, "copy", "cut", "paste")
        if action is not None:
            self._apply(action, state)
            return True

        if event.key == "enter":
            if self.on_submit is None:
                return False
            self.on_submit(state)
            return True

        if _is_printable(event.data):
            state.insert(event.data)
            return True
        return False

    def _apply(self, action: Action, state: InputFieldState) -> None:
        clipboard = get_clipboard()
        if action == "copy":
            clipboard.copy(state.selected_text())
        elif action == "cut":
            clipboard.copy(state.selected_text())
            if state.has_selection:
                state.delete_backward()
        elif action == "paste":
            state.insert(_single_line(clipboard.paste()))
        else:
            _EDIT_ACTIONS[action](state)

    # -- rendering ---------------------------------------------------------

    def render(self, rect: Rect, state: InputFieldState, focused: bool) -> list[str]:
        if rect.is_empty:
            return []
        framed = self.border and rect.width >= 3 and rect.height >= 3
        width = rect.width - 2 if framed else rect.width

        line = self._render_line(state, width, focused)
        if not framed:
            return [line]
        style = self.focused_border_style if focused else self.border_style
        return frame_lines([line], rect.width, rect.height, self.title, style)

    def _render_line(self, state: InputFieldState, width: int, focused: bool) -> str:
        if not state.text:
            return self._render_placeholder(width, focused)

        clusters = graphemes(state.text)
        offsets: list[int] = []
        offset = 0
        for g in clusters:
            offsets.append(offset)
            offset += len(g)

        caret_col = 0
        col = 0
        columns: list[int] = []
        for g, start in zip(clusters, offsets):
            if start == state.caret:
                caret_col = col
            columns.append(col)
            col += grapheme_width(g)
        if state.caret_at_end:
            caret_col = col
        total = col + (1 if focused else 0)

        _scroll_into_view(state, caret_col, width, total)

        selection = state.selection() if focused else None
        runs: list[tuple[str, str]] = []
        for g, start, column in zip(clusters, offsets, columns):
            if column < state.scroll:
                continue
            if column + grapheme_width(g) > state.scroll + width:
                break
            if selection is not None and selection[0] <= start < selection[1]:
                kind = "selection"
            elif focused and selection is None and start == state.caret:
                kind = "caret"
            else:
                kind = "text"
            if runs and runs[-1][0] == kind and kind != "caret":
                runs[-1] = (kind, runs[-1][1] + g)
            else:
                runs.append((kind, g))
        if focused and selection is None and state.caret_at_end:
            if caret_col - state.scroll < width:
                runs.append(("caret", " "))

        text_style = (self.focused_style if focused else self.style) or _plain
        painters = {
            "text": text_style,
            "caret": _caret,
            "selection": self.selection_style or _default_selection,
        }
        return pad_to_width("".join(painters[kind](s) for kind, s in runs), width)

    def _render_placeholder(self, width: int, focused: bool) -> str:
        text = self.placeholder
        style = self.placeholder_style or _dim
        if not focused:
            return pad_to_width(style(text) if text else "", width)
        if not text:
            return pad_to_width(_caret(" "), width)
        head = graphemes(text)[0]
        tail = text[len(head):]
        return pad_to_width(_caret(style(head)) + (style(tail) if tail else ""), width)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _plain(text: str) -> str:
    return text


def _caret(text: str) -> str:
    return f"{REVERSE}{text}{REVERSE_OFF}"


def _dim(text: str) -> str:
    return f"{DIM}{text}{DIM_OFF}"


def _default_selection(text: str) -> str:
    return f"{SELECTION}{text}{SELECTION_OFF}"


def _scroll_into_view(
    state: InputFieldState, caret_col: int, width: int, total: int
) -> None:
    if width <= 0:
        return
    if caret_col < state.scroll:
        state.scroll = caret_col
    elif caret_col >= state.scroll + width:
        state.scroll = caret_col - width + 1
    state.scroll = max(0, min(state.scroll, max(0, total - width)))


def _is_printable(data: str) -> bool:
    if not data:
        return False
    return not any(
        ord(ch) < 32 or ord(ch) == 0x7F or 0x80 <= ord(ch) <= 0x9F for ch in data
    )


def _single_line(text: str) -> str:
    return text.replace("\r\n", "").replace("\r", "").replace("\n", "")
