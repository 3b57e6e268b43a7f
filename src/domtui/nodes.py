"""Declarative view tree: containers (stacks) and leaves.

A tree is built fresh for every frame and never mutated afterwards.  It only
*describes* the interface; persistent widget state is resolved separately by
:class:`domtui.registry.IdentityRegistry`.

Tag uniqueness and the arity limit are checked while the tree is being built,
so a malformed tree raises before it can reach the layout engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Hashable, Iterator, Optional, Tuple, Union

from domtui.errors import DuplicateTagError, TooManyChildrenError
from domtui.geometry import Orientation, Size

if TYPE_CHECKING:
    from domtui.widgets.base import Widget

__all__ = [
    "MAX_CHILDREN",
    "Tag",
    "Node",
    "Container",
    "Leaf",
    "hstack",
    "vstack",
    "leaf",
    "iter_leaves",
]

MAX_CHILDREN = 12

Tag = Hashable

SizeLike = Union[Size, Tuple[Optional[int], Optional[int]], None]


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class Leaf:
    """A single widget, optionally tagged so that its state survives rebuilds."""

    widget: Widget
    tag: Tag | None = None
    preferred: Size | None = None
    tags: frozenset = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "preferred", Size.coerce(self.preferred))
        object.__setattr__(
            self,
            "tags",
            frozenset() if self.tag is None else frozenset((self.tag,)),
        )

    def preference(self) -> Size | None:
        """Explicit preference, falling back to what the widget measures."""
        if self.preferred is not None:
            return self.preferred
        return Size.coerce(self.widget.measure())


@dataclass(frozen=True, eq=False)
class Container:
    """A stack distributing one axis of its area among ordered children."""

    orientation: Orientation
    children: tuple[Node, ...] = ()
    preferred: Size | None = None
    tags: frozenset = field(init=False, repr=False)

    def __post_init__(self) -> None:
        children = tuple(self.children)
        if len(children) > MAX_CHILDREN:
            raise TooManyChildrenError(len(children), MAX_CHILDREN)
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "preferred", Size.coerce(self.preferred))

        seen: set = set()
        for child in children:
            overlap = seen & child.tags
            if overlap:
                raise DuplicateTagError(next(iter(overlap)))
            seen |= child.tags
        object.__setattr__(self, "tags", frozenset(seen))

    def preference(self) -> Size | None:
        return self.preferred


Node = Union[Container, Leaf]


# ---------------------------------------------------------------------------
# Builder helpers
# ---------------------------------------------------------------------------


def hstack(*children: Node, preferred: SizeLike = None) -> Container:
    """Lay *children* out left to right."""
    return Container(Orientation.HORIZONTAL, children, preferred)


def vstack(*children: Node, preferred: SizeLike = None) -> Container:
    """Lay *children* out top to bottom."""
    return Container(Orientation.VERTICAL, children, preferred)


def leaf(
    widget: Widget, tag: Tag | None = None, preferred: SizeLike = None
) -> Leaf:
    """Wrap *widget* in a leaf node."""
    return Leaf(widget, tag, preferred)


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def iter_leaves(node: Node) -> Iterator[Leaf]:
    """Yield every leaf depth-first, in declaration order."""
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)
