"""Tests for conditional-chain trackers."""

from __future__ import annotations

from bs4 import Tag

from vue2twig.core.chains import (
    ChainMode,
    GlobalChainTracker,
    ScopedChainTracker,
    make_tracker,
)
from vue2twig.core.markup import ControlText, parse_component


def _open_after(tracker, element: Tag) -> ControlText:
    closer = ControlText("{% endif %}")
    element.insert_after(closer)
    tracker.open(element, closer)
    return closer


class TestScopedChainTracker:
    def test_next_sibling_continues(self) -> None:
        document = parse_component("<div><p>a</p><p>b</p></div>")
        first, second = document.find_all("p")
        tracker = ScopedChainTracker()
        closer = _open_after(tracker, first)

        assert tracker.cursor_for(second) is closer

    def test_whitespace_and_comments_between(self) -> None:
        document = parse_component("<div><p>a</p> <!-- note --> <p>b</p></div>")
        first, second = document.find_all("p")
        tracker = ScopedChainTracker()
        closer = _open_after(tracker, first)

        assert tracker.cursor_for(second) is closer

    def test_element_between_breaks_chain(self) -> None:
        document = parse_component("<div><p>a</p><span>x</span><p>b</p></div>")
        first, second = document.find_all("p")
        tracker = ScopedChainTracker()
        _open_after(tracker, first)

        assert tracker.cursor_for(second) is None

    def test_other_parent_has_no_cursor(self) -> None:
        document = parse_component("<div><p>a</p><section><p>b</p></section></div>")
        first, nested = document.find_all("p")
        tracker = ScopedChainTracker()
        _open_after(tracker, first)

        assert tracker.cursor_for(nested) is None

    def test_interrupt_clears_cursor(self) -> None:
        document = parse_component("<div><p>a</p><p>b</p></div>")
        first, second = document.find_all("p")
        tracker = ScopedChainTracker()
        _open_after(tracker, first)
        tracker.interrupt(second)

        assert tracker.cursor_for(second) is None


class TestGlobalChainTracker:
    def test_latest_cursor_wins_everywhere(self) -> None:
        document = parse_component("<div><p>a</p><section><span>b</span></section><p>c</p></div>")
        first, last = document.find_all("p")
        span = document.find("span")
        tracker = GlobalChainTracker()
        _open_after(tracker, first)
        inner = _open_after(tracker, span)
        tracker.interrupt(last)

        assert tracker.cursor_for(last) is inner

    def test_no_cursor_before_open(self) -> None:
        document = parse_component("<p>a</p>")
        assert GlobalChainTracker().cursor_for(document.p) is None


class TestMakeTracker:
    def test_modes(self) -> None:
        assert isinstance(make_tracker(ChainMode.SCOPED), ScopedChainTracker)
        assert isinstance(make_tracker("global"), GlobalChainTracker)
