"""Layout engine: assigns a rectangle to every node of a view tree.

Stacks split their main axis between *fixed* children (those with a
preference along that axis) and *flexible* ones (without).  Fixed children
are served first; if their preferences do not fit they are shrunk in
proportion to their preferences.  Whatever is left is shared evenly among the
flexible children, with the division remainder handed out one cell at a time
to the first flexible children.  Every child spans the full cross axis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from domtui.geometry import Orientation, Rect
from domtui.nodes import Container, Leaf, Node

__all__ = ["Placement", "distribute", "layout"]


# ---------------------------------------------------------------------------
# Placement tree
# ---------------------------------------------------------------------------


@dataclass
class Placement:
    """Geometry computed for one node during a layout pass.

    ``rect`` is the area the parent allotted.  ``content_rect`` is the part
    the node actually occupies: for a leaf with a preference it is ``rect``
    clamped to that preference, otherwise it equals ``rect``.
    """

    node: Node
    rect: Rect
    content_rect: Rect
    children: list[Placement] = field(default_factory=list)

    def walk(self) -> Iterator[Placement]:
        """Yield this placement and all descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def leaves(self) -> Iterator[Placement]:
        """Yield the placements of leaf nodes in declaration order."""
        for placement in self.walk():
            if isinstance(placement.node, Leaf):
                yield placement

    def find(self, node: Node) -> Placement | None:
        """Return the placement computed for *node* (by identity)."""
        for placement in self.walk():
            if placement.node is node:
                return placement
        return None

    def leaf_at(self, x: int, y: int) -> Placement | None:
        """Return the leaf whose content rect contains the cell ``(x, y)``."""
        for placement in self.leaves():
            if placement.content_rect.contains(x, y):
                return placement
        return None


# ---------------------------------------------------------------------------
# Main-axis distribution
# ---------------------------------------------------------------------------


def distribute(available: int, preferences: Sequence[int | None]) -> list[int]:
    """Split *available* cells among children with the given preferences.

    ``None`` marks a flexible child.  The result has one allotment per child
    in the same order; allotments never sum to more than *available* and sum
    to exactly *available* whenever there is at least one flexible child or
    the fixed preferences overflow.
    """
    available = max(0, available)
    allotments = [0] * len(preferences)

    fixed = [i for i, pref in enumerate(preferences) if pref is not None]
    flexible = [i for i, pref in enumerate(preferences) if pref is None]

    wanted = {i: min(preferences[i], available) for i in fixed}  # type: ignore[type-var]
    fixed_total = sum(wanted.values())

    if fixed_total > available:
        _shrink_proportionally(allotments, wanted, fixed_total, available)
        remaining = 0
    else:
        for i, size in wanted.items():
            allotments[i] = size
        remaining = available - fixed_total

    if flexible:
        share, extra = divmod(remaining, len(flexible))
        for position, i in enumerate(flexible):
            allotments[i] = share + (1 if position < extra else 0)

    return allotments


def _shrink_proportionally(
    allotments: list[int],
    wanted: dict[int, int],
    total: int,
    available: int,
) -> None:
    # Largest-remainder apportionment: floor every exact share, then give
    # the leftover cells to the largest fractional parts (ties by position).
    remainders: list[tuple[int, int]] = []
    assigned = 0
    for i, size in wanted.items():
        quotient, remainder = divmod(size * available, total)
        allotments[i] = quotient
        assigned += quotient
        remainders.append((-remainder, i))
    remainders.sort()
    for _, i in remainders[: available - assigned]:
        allotments[i] += 1


# ---------------------------------------------------------------------------
# Recursive layout
# ---------------------------------------------------------------------------


def layout(node: Node, available: Rect) -> Placement:
    """Compute the placement of *node* and all of its descendants."""
    if isinstance(node, Leaf):
        return Placement(node, available, available.clamp(node.preference()))
    return _layout_container(node, available)


def _layout_container(container: Container, available: Rect) -> Placement:
    placement = Placement(container, available, available)
    if not container.children:
        return placement

    orientation = container.orientation
    preferences = []
    for child in container.children:
        preference = child.preference()
        preferences.append(
            None if preference is None else preference.along(orientation)
        )
    allotments = distribute(available.extent(orientation), preferences)

    offset = 0
    for child, size in zip(container.children, allotments):
        if orientation is Orientation.HORIZONTAL:
            rect = Rect(available.x + offset, available.y, size, available.height)
        else:
            rect = Rect(available.x, available.y + offset, available.width, size)
        offset += size
        placement.children.append(layout(child, rect))

    return placement
