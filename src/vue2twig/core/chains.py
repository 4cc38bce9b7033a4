"""
Conditional-chain tracking for v-if / v-else-if / v-else groups.

While the compiler walks the tree, every open conditional group has a
cursor: the ``{% endif %}`` inserted after its latest branch. A following
v-else-if / v-else rewrites that cursor into ``{% elseif %}`` /
``{% else %}`` and becomes the new cursor.

Two trackers are provided:

- :class:`ScopedChainTracker` (default) keeps one cursor per parent element
  and only continues a group from the element directly after it.
- :class:`GlobalChainTracker` keeps a single cursor for the whole walk. A
  nested group opened inside an earlier branch replaces the outer cursor, so
  a later v-else attaches to the wrong group. Kept for output compatibility
  with templates converted by earlier releases.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum

from bs4 import Tag

from vue2twig.core.markup import ControlText, is_blank


class ChainMode(StrEnum):
    """How conditional-chain cursors are scoped."""

    SCOPED = "scoped"
    GLOBAL = "global"


class ChainTracker(ABC):
    """Holds the cursors of open conditional groups during one walk."""

    @abstractmethod
    def open(self, element: Tag, closer: ControlText) -> None:
        """Record ``closer`` as the cursor after ``element``'s branch."""

    @abstractmethod
    def cursor_for(self, element: Tag) -> ControlText | None:
        """Cursor a v-else-if / v-else on ``element`` would continue, if any."""

    @abstractmethod
    def interrupt(self, element: Tag) -> None:
        """``element`` carries no conditional directive."""


class GlobalChainTracker(ChainTracker):
    """Single cursor shared by the whole tree."""

    def __init__(self) -> None:
        self._last_close: ControlText | None = None

    def open(self, element: Tag, closer: ControlText) -> None:
        self._last_close = closer

    def cursor_for(self, element: Tag) -> ControlText | None:
        return self._last_close

    def interrupt(self, element: Tag) -> None:
        pass


class ScopedChainTracker(ChainTracker):
    """One cursor per parent element.

    A group is continued only by the element that directly follows the
    cursor; whitespace and HTML comments in between are allowed.
    """

    def __init__(self) -> None:
        # keyed by id() of the parent: Tag.__hash__ depends on content
        self._cursors: dict[int, ControlText] = {}

    def open(self, element: Tag, closer: ControlText) -> None:
        self._cursors[id(element.parent)] = closer

    def cursor_for(self, element: Tag) -> ControlText | None:
        cursor = self._cursors.get(id(element.parent))
        if cursor is None:
            return None

        sibling = element.previous_sibling
        while sibling is not None and is_blank(sibling):
            sibling = sibling.previous_sibling
        if sibling is not cursor:
            return None
        return cursor

    def interrupt(self, element: Tag) -> None:
        self._cursors.pop(id(element.parent), None)


def make_tracker(mode: ChainMode | str) -> ChainTracker:
    """Create the tracker for ``mode``."""
    if ChainMode(mode) is ChainMode.GLOBAL:
        return GlobalChainTracker()
    return ScopedChainTracker()
