"""Widget capability shared by every leaf of the view tree."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domtui.events import Event
    from domtui.geometry import Rect


@runtime_checkable
class Widget(Protocol):
    """What the core needs from a leaf widget.

    A widget object is an immutable *descriptor*: it is rebuilt every frame
    and must not hold mutable interaction state.  Anything that has to
    survive a rebuild lives in the state object returned by
    :meth:`create_state`, which the identity registry keeps per tag.
    """

    def measure(self) -> tuple[int | None, int | None] | None:
        """Preferred ``(width, height)``, or ``None`` for fully flexible."""
        ...

    def is_focusable(self) -> bool: ...

    def create_state(self) -> Any:
        """Return a fresh default state for a newly seen tag."""
        ...

    def render(self, rect: Rect, state: Any, focused: bool) -> list[str]:
        """Return at most ``rect.height`` lines of at most ``rect.width`` columns."""
        ...

    def handle_event(self, event: Event, state: Any) -> bool:
        """Apply *event* to *state*; return ``True`` if it was consumed."""
        ...


class StaticWidget:
    """Defaults for widgets that neither take focus nor keep state."""

    def measure(self) -> tuple[int | None, int | None] | None:
        return None

    def is_focusable(self) -> bool:
        return False

    def create_state(self) -> Any:
        return None

    def render(self, rect: Rect, state: Any, focused: bool) -> list[str]:
        return []

    def handle_event(self, event: Event, state: Any) -> bool:
        return False
