"""Clipboard shared by text widgets.

Copied text goes to the system clipboard when a clipboard command is
installed (``pbcopy``/``pbpaste`` on macOS, ``wl-copy``, ``xclip`` or
``xsel`` elsewhere) and is always kept in memory as well, so paste keeps
working inside the application when no command is available.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
from typing import Protocol

logger = logging.getLogger(__name__)

_COMMAND_TIMEOUT = 2.0


class ClipboardProvider(Protocol):
    """Access to a clipboard outside the process."""

    def copy(self, text: str) -> bool:
        """Store *text*; return ``False`` if the clipboard refused it."""
        ...

    def paste(self) -> str | None:
        """Return the clipboard text, or ``None`` if it cannot be read."""
        ...


# ---------------------------------------------------------------------------
# Command-line providers
# ---------------------------------------------------------------------------


class CommandProvider:
    """Talks to the system clipboard through a pair of helper commands."""

    def __init__(self, copy_command: list[str], paste_command: list[str] | None) -> None:
        self.copy_command = copy_command
        self.paste_command = paste_command

    def copy(self, text: str) -> bool:
        try:
            proc = subprocess.run(
                self.copy_command,
                input=text,
                text=True,
                capture_output=True,
                timeout=_COMMAND_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("clipboard copy via %s failed: %s", self.copy_command[0], exc)
            return False
        return proc.returncode == 0

    def paste(self) -> str | None:
        if self.paste_command is None:
            return None
        try:
            proc = subprocess.run(
                self.paste_command,
                text=True,
                capture_output=True,
                timeout=_COMMAND_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("clipboard paste via %s failed: %s", self.paste_command[0], exc)
            return None
        if proc.returncode != 0:
            return None
        return proc.stdout


def _command_candidates() -> list[tuple[list[str], list[str] | None]]:
    if sys.platform == "darwin":
        return [(["pbcopy"], ["pbpaste"])]
    if os.name == "nt":
        return [(["clip"], ["powershell", "-NoProfile", "-Command", "Get-Clipboard"])]
    candidates: list[tuple[list[str], list[str] | None]] = []
    if os.environ.get("WAYLAND_DISPLAY"):
        candidates.append((["wl-copy"], ["wl-paste", "--no-newline"]))
    candidates.extend(
        [
            (["xclip", "-selection", "clipboard"], ["xclip", "-selection", "clipboard", "-o"]),
            (["xsel", "--clipboard", "--input"], ["xsel", "--clipboard", "--output"]),
        ]
    )
    return candidates


def system_provider() -> CommandProvider | None:
    """Return a provider for the first installed clipboard command, if any."""
    for copy_command, paste_command in _command_candidates():
        if shutil.which(copy_command[0]) is None:
            continue
        if paste_command is not None and shutil.which(paste_command[0]) is None:
            paste_command = None
        logger.debug("using %s for the system clipboard", copy_command[0])
        return CommandProvider(copy_command, paste_command)
    logger.debug("no clipboard command found, clipboard is process-local")
    return None


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------


class Clipboard:
    """Holds the most recently copied text, mirrored to *provider* if given."""

    def __init__(self, provider: ClipboardProvider | None = None) -> None:
        self.provider = provider
        self._text: str = ""

    def copy(self, text: str) -> None:
        if not text:
            return
        self._text = text
        if self.provider is not None and not self.provider.copy(text):
            logger.debug("system clipboard refused copy, kept in memory only")

    def paste(self) -> str:
        """System clipboard text when readable, else the last copied text."""
        if self.provider is not None:
            text = self.provider.paste()
            if text is not None:
                return text
        return self._text

    def clear(self) -> None:
        self._text = ""


_global_clipboard: Clipboard | None = None


def get_clipboard() -> Clipboard:
    global _global_clipboard
    if _global_clipboard is None:
        _global_clipboard = Clipboard(system_provider())
    return _global_clipboard


def set_clipboard(clipboard: Clipboard) -> None:
    global _global_clipboard
    _global_clipboard = clipboard
