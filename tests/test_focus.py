"""Tests for the focus manager."""

from __future__ import annotations

import pytest

from domtui.focus import FocusManager


class TestFocusInitialState:
    def test_first_tag_is_focused(self) -> None:
        assert FocusManager(["a", "b"]).current == "a"

    def test_empty_order_means_no_focus(self) -> None:
        focus = FocusManager()
        assert focus.current is None
        assert not focus.is_focused(None)


class TestFocusCycling:
    """advance / retreat wrap around the focus order."""

    def test_three_advances_return_to_start(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        assert [focus.advance() for _ in range(3)] == ["b", "c", "a"]

    def test_retreat_from_first_wraps_to_last(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        assert focus.retreat() == "c"

    def test_advance_then_retreat_is_identity(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        focus.advance()
        focus.retreat()
        assert focus.current == "a"

    def test_single_tag_stays_focused(self) -> None:
        focus = FocusManager(["only"])
        assert focus.advance() == "only"
        assert focus.retreat() == "only"

    def test_noop_on_empty_order(self) -> None:
        focus = FocusManager()
        assert focus.advance() is None
        assert focus.retreat() is None


class TestExplicitFocus:
    def test_focus_known_tag(self) -> None:
        focus = FocusManager(["a", "b"])
        focus.focus("b")
        assert focus.is_focused("b")

    def test_focus_unknown_tag_raises(self) -> None:
        focus = FocusManager(["a"])
        with pytest.raises(KeyError):
            focus.focus("zzz")


class TestFocusInvalidate:
    """Repair after the focus order of a new frame is adopted."""

    def test_surviving_focus_is_kept(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        focus.focus("b")
        assert focus.invalidate(["c", "b"]) == "b"

    def test_lost_focus_moves_to_following_tag(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        focus.focus("b")
        assert focus.invalidate(["a", "c"]) == "c"

    def test_lost_focus_moves_to_preceding_when_nothing_follows(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        focus.focus("c")
        assert focus.invalidate(["a", "b"]) == "b"

    def test_nearest_survivor_wins(self) -> None:
        focus = FocusManager(["a", "b", "c", "d", "e"])
        focus.focus("b")
        assert focus.invalidate(["a", "e"]) == "a"

    def test_no_survivor_clamps_old_index(self) -> None:
        focus = FocusManager(["a", "b", "c"])
        focus.focus("c")
        assert focus.invalidate(["x", "y"]) == "y"

    def test_empty_order_clears_focus(self) -> None:
        focus = FocusManager(["a"])
        assert focus.invalidate([]) is None
        assert focus.current is None

    def test_no_focus_picks_first_of_new_order(self) -> None:
        focus = FocusManager()
        assert focus.invalidate(["p", "q"]) == "p"

    def test_order_property_is_a_copy(self) -> None:
        focus = FocusManager(["a"])
        focus.order.append("b")
        assert focus.order == ["a"]
