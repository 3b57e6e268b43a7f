"""Empty widget - takes up space and draws nothing."""

from __future__ import annotations

from dataclasses import dataclass

from domtui.widgets.base import StaticWidget


@dataclass(frozen=True)
class Empty(StaticWidget):
    """Placeholder leaf; useful as a flexible spacer between stacked views."""
