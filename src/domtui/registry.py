"""Identity registry: persistent widget state keyed by stable tags.

Every frame the application rebuilds a pure descriptor tree.  The registry
resolves it into a :class:`Frame` by pairing each tagged leaf with the state
object it had in the previous frame:

* a tag seen for the first time gets ``widget.create_state()``;
* a tag present in the previous frame keeps the very same state object;
* a tag missing from the new tree has its state dropped.

Matching is by tag only.  A tag that disappears for a single frame comes
back with fresh state, and nothing is ever migrated between tags.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from domtui.errors import DuplicateTagError
from domtui.nodes import Leaf, Node, Tag, iter_leaves

logger = logging.getLogger(__name__)

__all__ = ["Frame", "IdentityRegistry"]


@dataclass
class _Entry:
    kind: type
    state: Any


@dataclass
class Frame:
    """A descriptor tree with the state of every leaf resolved.

    ``tags`` lists the tags of the tree in depth-first declaration order.
    Untagged leaves get a state that lives only as long as this frame.
    """

    root: Node
    tags: list[Tag]
    states: dict[Tag, Any]
    _ephemeral: dict[int, Any] = field(default_factory=dict, repr=False)

    def state_of(self, node: Leaf) -> Any:
        """Return the state backing *node* in this frame."""
        if node.tag is not None:
            return self.states[node.tag]
        return self._ephemeral[id(node)]

    def leaves(self) -> Iterator[Leaf]:
        return iter_leaves(self.root)

    def leaf_for(self, tag: Tag) -> Leaf | None:
        """Return the leaf carrying *tag*, or ``None``."""
        for node in self.leaves():
            if node.tag == tag:
                return node
        return None

    def focus_order(self) -> list[Tag]:
        """Tags of focusable leaves, depth-first in declaration order."""
        return [
            node.tag
            for node in self.leaves()
            if node.tag is not None and node.widget.is_focusable()
        ]


class IdentityRegistry:
    """Owns the persistent state of every tagged widget."""

    def __init__(self) -> None:
        self._entries: dict[Tag, _Entry] = {}

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def tags(self) -> frozenset:
        return frozenset(self._entries)

    def state(self, tag: Tag) -> Any:
        """Return the persistent state for *tag*.

        Raises ``KeyError`` if no widget with that tag is alive.
        """
        return self._entries[tag].state

    def inspect(self, tag: Tag, kind: type | None = None) -> Any:
        """Like :meth:`state`, but optionally check the state's type.

        Raises ``TypeError`` if the state is not an instance of *kind*.
        """
        state = self.state(tag)
        if kind is not None and not isinstance(state, kind):
            raise TypeError(
                f"state for tag {tag!r} is {type(state).__name__}, "
                f"not {kind.__name__}"
            )
        return state

    def reconcile(self, root: Node) -> Frame:
        """Resolve *root* against the previous frame and commit the result."""
        entries: dict[Tag, _Entry] = {}
        ephemeral: dict[int, Any] = {}
        tags: list[Tag] = []

        for node in iter_leaves(root):
            widget = node.widget
            if node.tag is None:
                ephemeral[id(node)] = widget.create_state()
                continue

            tag = node.tag
            if tag in entries:
                # Trees built by hand around the Container checks.
                raise DuplicateTagError(tag)
            tags.append(tag)

            previous = self._entries.get(tag)
            if previous is not None and previous.kind is type(widget):
                entries[tag] = previous
                continue
            if previous is not None:
                logger.debug(
                    "tag %r changed widget kind %s -> %s, resetting state",
                    tag,
                    previous.kind.__name__,
                    type(widget).__name__,
                )
            else:
                logger.debug("tag %r created", tag)
            entries[tag] = _Entry(type(widget), widget.create_state())

        dropped = self._entries.keys() - entries.keys()
        if dropped:
            logger.debug("tags dropped: %s", sorted(map(repr, dropped)))

        self._entries = entries
        return Frame(
            root=root,
            tags=tags,
            states={tag: entry.state for tag, entry in entries.items()},
            _ephemeral=ephemeral,
        )
