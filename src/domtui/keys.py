"""Keyboard and mouse input decoding.

Turns raw terminal input sequences into normalised key ids such as ``"a"``,
``"ctrl+c"``, ``"shift+tab"`` or ``"ctrl+shift+left"``.  Modifiers always
appear in the order ``ctrl``, ``shift``, ``alt``.

Supports legacy xterm/VT sequences (``CSI 1;<mod> X`` and ``CSI <n>;<mod> ~``),
the ``CSI <codepoint>;<mod> u`` form of the Kitty keyboard protocol, and SGR
(1006) mouse reports.
"""

from __future__ import annotations

import re

from domtui.events import MouseButton, MouseEvent

__all__ = [
    "KeyId",
    "MODIFIERS",
    "LEGACY_KEY_SEQUENCES",
    "normalize_key_id",
    "parse_key",
    "matches_key",
    "parse_mouse",
]

KeyId = str

# ---------------------------------------------------------------------------
# Modifier encoding
# ---------------------------------------------------------------------------

MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

_MODIFIER_ORDER = ("ctrl", "shift", "alt")

# Kitty reports caps/num lock in the modifier field; they never matter here.
_LOCK_MASK = 64 + 128


def _modifier_prefix(param: int) -> str:
    """Translate an xterm modifier parameter (``1 + bits``) into a prefix."""
    bits = (param - 1) & ~_LOCK_MASK
    return "".join(
        name + "+" for name in _MODIFIER_ORDER if bits & MODIFIERS[name]
    )


# ---------------------------------------------------------------------------
# Legacy sequences
# ---------------------------------------------------------------------------

_CSI_LETTER_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
    "P": "f1",
    "Q": "f2",
    "R": "f3",
    "S": "f4",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "home",
    "2": "insert",
    "3": "delete",
    "4": "end",
    "5": "pageUp",
    "6": "pageDown",
    "7": "home",
    "8": "end",
    "15": "f5",
    "17": "f6",
    "18": "f7",
    "19": "f8",
    "20": "f9",
    "21": "f10",
    "23": "f11",
    "24": "f12",
}


def _build_legacy_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for final, name in _CSI_LETTER_KEYS.items():
        if name in ("up", "down", "right", "left", "home", "end"):
            table[f"\x1b[{final}"] = name
        table[f"\x1bO{final}"] = name
        for param in range(2, 9):
            table[f"\x1b[1;{param}{final}"] = _modifier_prefix(param) + name
    for number, name in _CSI_TILDE_KEYS.items():
        table[f"\x1b[{number}~"] = name
        for param in range(2, 9):
            table[f"\x1b[{number};{param}~"] = _modifier_prefix(param) + name
    # rxvt style
    table["\x1b[a"] = "shift+up"
    table["\x1b[b"] = "shift+down"
    table["\x1b[c"] = "shift+right"
    table["\x1b[d"] = "shift+left"
    table["\x1bOa"] = "ctrl+up"
    table["\x1bOb"] = "ctrl+down"
    table["\x1bOc"] = "ctrl+right"
    table["\x1bOd"] = "ctrl+left"
    table["\x1b[Z"] = "shift+tab"
    return table


LEGACY_KEY_SEQUENCES: dict[str, str] = _build_legacy_sequences()

_NAMED_CODEPOINTS: dict[int, str] = {
    9: "tab",
    13: "enter",
    27: "escape",
    32: "space",
    127: "backspace",
    57414: "enter",  # keypad enter
}

_KITTY_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)*(?:;(\d+)(?::\d+)?)?u$")
_MOUSE_SGR_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")


# ---------------------------------------------------------------------------
# Key ids
# ---------------------------------------------------------------------------


def normalize_key_id(key_id: KeyId) -> KeyId:
    """Return *key_id* with modifiers lower-cased and in canonical order.

    ``"Shift+Ctrl+Left"`` becomes ``"ctrl+shift+Left"``; the key name itself
    is left alone so ``pageUp`` keeps its spelling.
    """
    if key_id == "+" or key_id.endswith("++"):
        head, key = key_id[:-1], "+"
    else:
        head, _, key = key_id.rpartition("+")
        head = head + "+" if head else ""
    mods = {part.lower() for part in head.split("+") if part}
    prefix = "".join(name + "+" for name in _MODIFIER_ORDER if name in mods)
    return prefix + key


def parse_key(data: str) -> KeyId | None:  # noqa: C901
    """Parse raw terminal input and return its key id, or ``None``."""
    if not data:
        return None

    legacy = LEGACY_KEY_SEQUENCES.get(data)
    if legacy is not None:
        return legacy

    kitty = _KITTY_CSI_U_RE.match(data)
    if kitty is not None:
        codepoint = int(kitty.group(1))
        prefix = _modifier_prefix(int(kitty.group(2) or 1))
        name = _NAMED_CODEPOINTS.get(codepoint)
        if name is not None:
            return prefix + name
        ch = chr(codepoint)
        if ch.isprintable():
            return prefix + ch.lower()
        return None

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"
    if data == "\x00":
        return "ctrl+space"

    # Ctrl + letter (0x01 - 0x1a)
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # Alt + key (ESC prefix)
    if len(data) == 2 and data[0] == "\x1b":
        inner = parse_key(data[1])
        if inner is None or inner.startswith("alt+"):
            return None
        if len(data[1]) == 1 and data[1].isupper():
            return "shift+alt+" + data[1].lower()
        return normalize_key_id("alt+" + inner)

    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if the raw input *data* is the key *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


# ---------------------------------------------------------------------------
# Mouse
# ---------------------------------------------------------------------------

_MOUSE_BUTTONS: dict[int, MouseButton] = {
    0: "left",
    1: "middle",
    2: "right",
    3: "none",
    64: "wheel_up",
    65: "wheel_down",
}


def parse_mouse(data: str) -> MouseEvent | None:
    """Decode an SGR mouse report (``CSI < b ; x ; y M|m``).

    Coordinates in the report are one based; the returned event is zero
    based.  Motion reports and unknown buttons yield ``None``.
    """
    m = _MOUSE_SGR_RE.match(data)
    if m is None:
        return None
    code = int(m.group(1))
    if code & 32:  # motion
        return None
    button = _MOUSE_BUTTONS.get(code & ~(4 | 8 | 16))
    if button is None:
        return None
    return MouseEvent(
        x=int(m.group(2)) - 1,
        y=int(m.group(3)) - 1,
        button=button,
        pressed=m.group(4) == "M",
    )
