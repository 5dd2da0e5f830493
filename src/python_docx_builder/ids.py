"""
Identifier generation for document entities.

Each Document owns one IDGenerator. The generator keeps an independent
monotonic counter per entity kind and renders IDs as ``<prefix><n>`` with n
starting at 1, e.g. ``para1``, ``rId3``, ``img2``.
"""

from __future__ import annotations

import logging
import re
import threading
from enum import Enum

logger = logging.getLogger(__name__)

_SUFFIX_RE = re.compile(r"(\d+)$")


class IDKind(Enum):
    """Entity kinds with their ID prefixes."""

    PARAGRAPH = "para"
    RUN = "run"
    TABLE = "tbl"
    ROW = "row"
    CELL = "cell"
    IMAGE = "img"
    SHAPE = "shp"
    RELATIONSHIP = "rId"
    BOOKMARK = "bm"
    COMMENT = "cmt"
    FOOTNOTE = "fn"
    ENDNOTE = "en"
    HEADER = "header"
    FOOTER = "footer"

    @property
    def prefix(self) -> str:
        """The string prepended to the counter value."""
        return self.value


class _Counter:
    """A single monotonic counter.

    Increment and read-modify-write happen under the counter's own lock, so
    counters of different kinds never contend with each other.
    """

    __slots__ = ("_value", "_lock")

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def advance_to(self, minimum: int) -> None:
        with self._lock:
            if minimum > self._value:
                self._value = minimum

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        return self._value


def numeric_suffix(identifier: str) -> int | None:
    """Extract the trailing integer of an ID.

    Args:
        identifier: An ID such as "rId12" or "image3"

    Returns:
        The trailing number, or None if the ID does not end in digits

    Example:
        >>> numeric_suffix("rId12")
        12
    """
    match = _SUFFIX_RE.search(identifier)
    if match is None:
        return None
    return int(match.group(1))


class IDGenerator:
    """Issues collision-free string IDs per entity kind.

    Safe for concurrent callers building independent subtrees of the same
    document. IDs are never reused: ``reset()`` is only meant for a generator
    that has not handed anything out yet.

    Example:
        >>> ids = IDGenerator()
        >>> ids.next_paragraph_id()
        'para1'
        >>> ids.next_paragraph_id()
        'para2'
        >>> ids.next_relationship_id()
        'rId1'
    """

    def __init__(self) -> None:
        self._counters = {kind: _Counter() for kind in IDKind}

    def next_id(self, kind: IDKind) -> str:
        """Return the next ID for ``kind``."""
        return f"{kind.prefix}{self._counters[kind].next()}"

    def next_number(self, kind: IDKind) -> int:
        """Return the next raw counter value for ``kind`` without a prefix."""
        return self._counters[kind].next()

    def next_paragraph_id(self) -> str:
        return self.next_id(IDKind.PARAGRAPH)

    def next_run_id(self) -> str:
        return self.next_id(IDKind.RUN)

    def next_table_id(self) -> str:
        return self.next_id(IDKind.TABLE)

    def next_row_id(self) -> str:
        return self.next_id(IDKind.ROW)

    def next_cell_id(self) -> str:
        return self.next_id(IDKind.CELL)

    def next_image_id(self) -> str:
        return self.next_id(IDKind.IMAGE)

    def next_shape_id(self) -> str:
        return self.next_id(IDKind.SHAPE)

    def next_relationship_id(self) -> str:
        return self.next_id(IDKind.RELATIONSHIP)

    def next_bookmark_id(self) -> str:
        return self.next_id(IDKind.BOOKMARK)

    def next_comment_id(self) -> str:
        return self.next_id(IDKind.COMMENT)

    def next_footnote_id(self) -> str:
        return self.next_id(IDKind.FOOTNOTE)

    def next_endnote_id(self) -> str:
        return self.next_id(IDKind.ENDNOTE)

    def current(self, kind: IDKind) -> int:
        """Return the last value issued for ``kind`` (0 if none)."""
        return self._counters[kind].value

    def advance_past(self, kind: IDKind, identifier: str | int) -> None:
        """Make sure future IDs of ``kind`` sort after ``identifier``.

        Used when re-hydrating a package so newly minted IDs cannot collide
        with IDs already present in it. IDs without a numeric suffix are
        ignored.

        Args:
            kind: The counter to advance
            identifier: An existing ID ("rId7") or its number (7)
        """
        number = identifier if isinstance(identifier, int) else numeric_suffix(identifier)
        if number is None:
            return
        self._counters[kind].advance_to(number)
        logger.debug(f"Advanced {kind.name} counter to at least {number}")

    def reset(self) -> None:
        """Zero every counter."""
        for counter in self._counters.values():
            counter.reset()
