"""Geometry primitives shared by the layout engine and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Orientation(Enum):
    """Main axis of a stack."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Size:
    """Optional ``(width, height)`` preference.

    ``None`` in either component means "no preference" along that axis.
    """

    width: int | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def along(self, orientation: Orientation) -> int | None:
        """Return the component on the main axis of *orientation*."""
        if orientation is Orientation.HORIZONTAL:
            return self.width
        return self.height

    @classmethod
    def coerce(
        cls, value: Size | tuple[int | None, int | None] | None
    ) -> Size | None:
        """Accept a ``Size``, a ``(width, height)`` tuple, or ``None``."""
        if value is None or isinstance(value, Size):
            return value
        width, height = value
        return cls(width, height)


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells: origin plus extent."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def extent(self, orientation: Orientation) -> int:
        """Length along the main axis of *orientation*."""
        if orientation is Orientation.HORIZONTAL:
            return self.width
        return self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def clamp(self, size: Size | None) -> Rect:
        """Shrink to *size* component-wise, keeping the top-left corner.

        Components of *size* that are ``None`` or larger than the rect leave
        that dimension unchanged.
        """
        if size is None:
            return self
        width = self.width if size.width is None else min(size.width, self.width)
        height = (
            self.height if size.height is None else min(size.height, self.height)
        )
        return Rect(self.x, self.y, width, height)

    def inset(self, amount: int = 1) -> Rect:
        """Return the rect shrunk by *amount* cells on every side."""
        width = max(0, self.width - 2 * amount)
        height = max(0, self.height - 2 * amount)
        return Rect(self.x + amount, self.y + amount, width, height)
