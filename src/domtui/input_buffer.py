"""Splits raw terminal input into complete sequences and decodes events.

Input arrives in arbitrary chunks: an escape sequence can be cut in half by
a read boundary and a paste can span many reads.  :class:`InputDecoder`
accumulates chunks, emits one event per complete sequence, and keeps any
trailing partial sequence until more data arrives or :meth:`flush` is called.
"""

from __future__ import annotations

import re
from typing import Literal

from domtui.events import Event, KeyEvent, PasteEvent
from domtui.keys import parse_key, parse_mouse

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

_Completeness = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


# ---------------------------------------------------------------------------
# Sequence completeness
# ---------------------------------------------------------------------------


def _is_complete_sequence(data: str) -> _Completeness:
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer = data[1]
    if introducer == "[":
        if data.startswith(f"{ESC}[M"):
            # X10 mouse: ESC [ M b x y
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)
    if introducer == "]":
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"
    if introducer in ("P", "_"):
        return "complete" if data.endswith(f"{ESC}\\") else "incomplete"
    if introducer == "O":
        return "complete" if len(data) >= 3 else "incomplete"
    return "complete"


def _is_complete_csi_sequence(data: str) -> _Completeness:
    if len(data) < 3:
        return "incomplete"
    payload = data[2:]
    if not 0x40 <= ord(payload[-1]) <= 0x7E:
        return "incomplete"
    if payload.startswith("<"):
        return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing
    partial escape sequence (possibly empty).
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue
        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            if _is_complete_sequence(buffer[pos:end]) == "complete":
                break
            end += 1
        sequences.append(buffer[pos:end])
        pos = end
    return sequences, ""


# ---------------------------------------------------------------------------
# InputDecoder
# ---------------------------------------------------------------------------


class InputDecoder:
    """Stateful decoder from raw input chunks to :class:`Event` objects."""

    def __init__(self) -> None:
        self._buffer: str = ""
        self._paste_mode: bool = False
        self._paste_buffer: str = ""

    @property
    def pending(self) -> bool:
        """``True`` while a partial sequence or paste is buffered."""
        return bool(self._buffer) or self._paste_mode

    @property
    def awaiting_escape(self) -> bool:
        """``True`` while a partial escape sequence waits for its tail.

        Unlike :attr:`pending` this is ``False`` inside a paste, which has
        no timeout and waits for its end marker.
        """
        return bool(self._buffer) and not self._paste_mode

    def feed(self, data: str) -> list[Event]:
        """Add *data* and return every event that is now complete."""
        events: list[Event] = []
        self._buffer += data

        while self._buffer:
            if self._paste_mode:
                self._paste_buffer += self._buffer
                self._buffer = ""
                end = self._paste_buffer.find(BRACKETED_PASTE_END)
                if end == -1:
                    break
                events.append(PasteEvent(self._paste_buffer[:end]))
                self._buffer = self._paste_buffer[end + len(BRACKETED_PASTE_END):]
                self._paste_buffer = ""
                self._paste_mode = False
                continue

            start = self._buffer.find(BRACKETED_PASTE_START)
            head = self._buffer if start == -1 else self._buffer[:start]
            sequences, remainder = split_sequences(head)
            events.extend(decode_sequence(seq) for seq in sequences)
            if start == -1:
                self._buffer = remainder
                break
            # A partial sequence directly before a paste marker is garbage.
            self._buffer = self._buffer[start + len(BRACKETED_PASTE_START):]
            self._paste_mode = True

        return events

    def flush(self) -> list[Event]:
        """Emit whatever is buffered as-is (e.g. a lone ESC after a timeout)."""
        if self._paste_mode or not self._buffer:
            return []
        data, self._buffer = self._buffer, ""
        return [decode_sequence(data)]

    def clear(self) -> None:
        self._buffer = ""
        self._paste_mode = False
        self._paste_buffer = ""


def decode_sequence(sequence: str) -> Event:
    """Turn one complete input sequence into an event."""
    mouse = parse_mouse(sequence)
    if mouse is not None:
        return mouse
    return KeyEvent(key=parse_key(sequence), data=sequence)
