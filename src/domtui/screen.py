"""Screen: drives the build / reconcile / layout / render cycle.

A :class:`Screen` owns the identity registry and the focus manager.  On every
pass it calls the application's ``build`` function for a fresh descriptor
tree, resolves it against the registry, lays it out over the whole terminal,
repairs focus and paints each leaf.  :meth:`Screen.dispatch` handles one
input event; :meth:`Screen.run` blocks on the terminal and loops until the
application quits.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from domtui.errors import TerminalIOError
from domtui.events import Event, KeyEvent, MouseEvent, PasteEvent, QuitEvent, ResizeEvent
from domtui.focus import FocusManager
from domtui.geometry import Rect
from domtui.keybindings import KeybindingsManager, get_keybindings
from domtui.layout import Placement, layout
from domtui.nodes import Leaf, Node, Tag
from domtui.registry import Frame, IdentityRegistry
from domtui.terminal import ProcessTerminal, Terminal, terminal_session

logger = logging.getLogger(__name__)

__all__ = ["Screen", "ScreenOptions", "run"]

BuildFn = Callable[[], Node]


@dataclass
class ScreenOptions:
    """Screen configuration.

    ``keybindings`` defaults to the process-global manager.  ``mouse`` and
    ``alternate_screen`` only apply when :func:`run` creates the terminal.
    """

    keybindings: KeybindingsManager | None = None
    mouse: bool = True
    alternate_screen: bool = True


class Screen:
    """Binds a build function to a terminal."""

    def __init__(
        self,
        build: BuildFn,
        terminal: Terminal,
        options: ScreenOptions | None = None,
    ) -> None:
        self._build = build
        self.terminal = terminal
        self.options = options or ScreenOptions()
        self.registry = IdentityRegistry()
        self.focus = FocusManager()
        self._frame: Frame | None = None
        self._placement: Placement | None = None
        self.frames_rendered: int = 0

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def keybindings(self) -> KeybindingsManager:
        return self.options.keybindings or get_keybindings()

    @property
    def frame(self) -> Frame | None:
        """The most recently resolved frame."""
        return self._frame

    @property
    def placement(self) -> Placement | None:
        """Geometry of the most recently resolved frame."""
        return self._placement

    @property
    def focused(self) -> Tag | None:
        return self.focus.current

    def state(self, tag: Tag) -> Any:
        """Persistent state of the widget tagged *tag* (``KeyError`` if gone)."""
        return self.registry.state(tag)

    def inspect(self, tag: Tag, kind: type | None = None) -> Any:
        return self.registry.inspect(tag, kind)

    # ------------------------------------------------------------------
    # Frame cycle
    # ------------------------------------------------------------------

    def rebuild(self) -> Frame:
        """Build, reconcile, lay out and re-validate focus."""
        frame, _ = self._rebuild()
        return frame

    def _rebuild(self) -> tuple[Frame, Placement]:
        root = self._build()
        frame = self.registry.reconcile(root)
        area = Rect(0, 0, self.terminal.columns, self.terminal.rows)
        placement = layout(root, area)
        self._frame, self._placement = frame, placement
        self.focus.invalidate(frame.focus_order())
        logger.debug(
            "frame laid out over %dx%d: %d tags, focus %r",
            area.width,
            area.height,
            len(frame.tags),
            self.focus.current,
        )
        return frame, placement

    def render(self) -> None:
        """Paint every leaf of the current frame and flush the terminal."""
        frame, placement = self._frame, self._placement
        if frame is None or placement is None:
            frame, placement = self._rebuild()
        for leaf_placement in placement.leaves():
            node = leaf_placement.node
            rect = leaf_placement.content_rect
            if rect.is_empty or not isinstance(node, Leaf):
                continue
            lines = node.widget.render(
                rect, frame.state_of(node), self.focus.is_focused(node.tag)
            )
            self.terminal.paint(rect, lines)
        self.terminal.flush()
        self.frames_rendered += 1

    def refresh(self) -> None:
        self.rebuild()
        self.render()

    # ------------------------------------------------------------------
    # Event dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: Event) -> bool:
        """Handle one event and redraw; return ``False`` to stop the loop."""
        if isinstance(event, QuitEvent):
            return False
        if self._frame is None:
            self.rebuild()

        if isinstance(event, MouseEvent):
            self._dispatch_mouse(event)
        elif isinstance(event, (KeyEvent, PasteEvent)):
            consumed = self._deliver_to_focused(event)
            if not consumed and isinstance(event, KeyEvent):
                if not self._apply_global_binding(event):
                    return False
        elif not isinstance(event, ResizeEvent):
            logger.debug("ignoring unknown event %r", event)
            return True

        self.refresh()
        return True

    def _deliver_to_focused(self, event: Event) -> bool:
        tag = self.focus.current
        if tag is None or self._frame is None:
            return False
        node = self._frame.leaf_for(tag)
        if node is None:
            return False
        return node.widget.handle_event(event, self._frame.state_of(node))

    def _dispatch_mouse(self, event: MouseEvent) -> None:
        if self._placement is None or self._frame is None:
            return
        target = self._placement.leaf_at(event.x, event.y)
        node = None if target is None else target.node
        if not isinstance(node, Leaf):
            return
        clicked = event.pressed and event.button in ("left", "middle", "right")
        if clicked and node.tag is not None and node.widget.is_focusable():
            self.focus.focus(node.tag)
        node.widget.handle_event(event, self._frame.state_of(node))

    def _apply_global_binding(self, event: KeyEvent) -> bool:
        """Run a screen-level binding; ``False`` means quit."""
        action = self.keybindings.action_for(
            event, "quit", "focusNext", "focusPrevious"
        )
        if action == "quit":
            logger.debug("quit requested by %r", event.key)
            return False
        if action == "focusNext":
            self.focus.advance()
        elif action == "focusPrevious":
            self.focus.retreat()
        return True

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run until quit; the terminal is restored on every exit path."""
        with terminal_session(self.terminal):
            try:
                self.refresh()
                while self.dispatch(self.terminal.read_event()):
                    pass
            except TerminalIOError:
                logger.exception("terminal I/O failed, leaving event loop")
                raise


def run(
    build: BuildFn,
    terminal: Terminal | None = None,
    options: ScreenOptions | None = None,
) -> Screen:
    """Run *build* on *terminal* (the process tty by default) until quit."""
    options = options or ScreenOptions()
    if terminal is None:
        terminal = ProcessTerminal(
            mouse=options.mouse, alternate_screen=options.alternate_screen
        )
    screen = Screen(build, terminal, options)
    screen.run()
    return screen
