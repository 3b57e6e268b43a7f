"""Exception hierarchy for domtui.

Construction errors signal a defect in the declarative tree and are raised
as soon as the offending node is built.  ``TerminalIOError`` wraps failures of
the terminal back-end and is raised only after the terminal was restored.
"""

from __future__ import annotations

from typing import Hashable


class DomTuiError(Exception):
    """Base class for every error raised by domtui."""


# ---------------------------------------------------------------------------
# Construction errors
# ---------------------------------------------------------------------------


class ConstructionError(DomTuiError):
    """The declarative tree is malformed and cannot be rendered."""


class DuplicateTagError(ConstructionError):
    """The same tag was attached to more than one leaf of a single tree."""

    def __init__(self, tag: Hashable) -> None:
        super().__init__(f"duplicate tag in view tree: {tag!r}")
        self.tag = tag


class TooManyChildrenError(ConstructionError):
    """A container was given more children than the arity limit allows."""

    def __init__(self, count: int, limit: int) -> None:
        super().__init__(
            f"container has {count} children, at most {limit} are allowed"
        )
        self.count = count
        self.limit = limit


# ---------------------------------------------------------------------------
# I/O errors
# ---------------------------------------------------------------------------


class TerminalIOError(DomTuiError):
    """Reading from or writing to the terminal failed."""
