"""Tests for splitting raw input into sequences and decoding events."""

from __future__ import annotations

from domtui.events import KeyEvent, MouseEvent, PasteEvent
from domtui.input_buffer import InputDecoder, decode_sequence, split_sequences


class TestSplitSequences:
    def test_plain_characters(self) -> None:
        assert split_sequences("abc") == (["a", "b", "c"], "")

    def test_escape_sequences_kept_whole(self) -> None:
        assert split_sequences("x\x1b[Ay\x1b[3~") == (
            ["x", "\x1b[A", "y", "\x1b[3~"],
            "",
        )

    def test_partial_sequence_is_remainder(self) -> None:
        assert split_sequences("a\x1b[1;") == (["a"], "\x1b[1;")

    def test_lone_escape_is_remainder(self) -> None:
        assert split_sequences("\x1b") == ([], "\x1b")

    def test_alt_key(self) -> None:
        assert split_sequences("\x1bx") == (["\x1bx"], "")

    def test_sgr_mouse(self) -> None:
        assert split_sequences("\x1b[<0;1;1M") == (["\x1b[<0;1;1M"], "")

    def test_partial_sgr_mouse(self) -> None:
        assert split_sequences("\x1b[<0;1") == ([], "\x1b[<0;1")


class TestInputDecoder:
    def test_keys_decoded(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed("a\x1b[B") == [
            KeyEvent("a", "a"),
            KeyEvent("down", "\x1b[B"),
        ]

    def test_sequence_split_across_chunks(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed("\x1b[1;") == []
        assert decoder.pending
        assert decoder.feed("5C") == [KeyEvent("ctrl+right", "\x1b[1;5C")]
        assert not decoder.pending

    def test_flush_emits_lone_escape(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed("\x1b") == []
        assert decoder.flush() == [KeyEvent("escape", "\x1b")]
        assert decoder.flush() == []

    def test_bracketed_paste(self) -> None:
        decoder = InputDecoder()
        events = decoder.feed("x\x1b[200~hello\nworld\x1b[201~y")
        assert events == [
            KeyEvent("x", "x"),
            PasteEvent("hello\nworld"),
            KeyEvent("y", "y"),
        ]

    def test_paste_across_chunks(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed("\x1b[200~par") == []
        assert decoder.pending
        assert decoder.flush() == []
        assert decoder.feed("t\x1b[201~") == [PasteEvent("part")]

    def test_only_partial_escape_awaits_timeout(self) -> None:
        decoder = InputDecoder()
        decoder.feed("\x1b[")
        assert decoder.awaiting_escape
        decoder.clear()
        decoder.feed("\x1b[200~unfinished")
        assert decoder.pending
        assert not decoder.awaiting_escape

    def test_paste_content_is_not_decoded(self) -> None:
        decoder = InputDecoder()
        events = decoder.feed("\x1b[200~\x1b[A\x03\x1b[201~")
        assert events == [PasteEvent("\x1b[A\x03")]

    def test_mouse_report(self) -> None:
        decoder = InputDecoder()
        assert decoder.feed("\x1b[<0;3;4M") == [MouseEvent(2, 3, "left", True)]

    def test_clear_drops_partial_input(self) -> None:
        decoder = InputDecoder()
        decoder.feed("\x1b[")
        decoder.clear()
        assert not decoder.pending


class TestDecodeSequence:
    def test_unknown_sequence_keeps_raw_data(self) -> None:
        assert decode_sequence("\x1b[999z") == KeyEvent(None, "\x1b[999z")

    def test_printable_character(self) -> None:
        assert decode_sequence("\u00e9") == KeyEvent("\u00e9", "\u00e9")
