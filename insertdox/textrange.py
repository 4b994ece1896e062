"""Small helpers for walking offset ranges of source text.

Every helper works on a ``(text, index, limit)`` triple instead of slicing, so
callers can keep passing offsets into the same accumulated run.  ``skip_*``
helpers move forward and never go past ``end``; ``trim_*`` helpers move
backward from an exclusive end and never go before ``start``.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, TextIO

COMMENT_CHARS = frozenset('/*')


def is_ident(ch: str) -> bool:
    """Return ``True`` for characters that may appear in a C identifier."""

    return ch.isalnum() or ch == '_'


def is_punct(ch: str) -> bool:
    """Return ``True`` for printable ASCII punctuation, like C ``ispunct``."""

    return '!' <= ch <= '~' and not ch.isalnum()


def skip_space(text: str, pos: int, end: int) -> int:
    """Advance ``pos`` past a run of whitespace."""

    while pos < end and text[pos].isspace():
        pos += 1
    return pos


def trim_space(text: str, end: int, start: int) -> int:
    """Move the exclusive ``end`` backward past trailing whitespace."""

    while end > start and text[end - 1].isspace():
        end -= 1
    return end


def skip_comment(text: str, pos: int, end: int) -> int:
    """Advance ``pos`` past whitespace, ``/`` and ``*``."""

    while pos < end and (text[pos].isspace() or text[pos] in COMMENT_CHARS):
        pos += 1
    return pos


def trim_comment(text: str, end: int, start: int) -> int:
    """Move the exclusive ``end`` backward past whitespace, ``/`` and ``*``."""

    while end > start and (text[end - 1].isspace() or text[end - 1] in COMMENT_CHARS):
        end -= 1
    return end


def skip_punct(text: str, pos: int, end: int) -> int:
    """Advance ``pos`` past whitespace and punctuation."""

    while pos < end and (text[pos].isspace() or is_punct(text[pos])):
        pos += 1
    return pos


class TextCollection:
    """Snippets gathered while scanning, newest first.

    Entries are inserted at the head, so iteration (and therefore the
    rendered tag order) runs from the most recently discovered snippet to
    the oldest one.
    """

    def __init__(self) -> None:
        self._items: Deque[str] = deque()

    def add(self, text: str) -> None:
        self._items.appendleft(text)

    def clear(self) -> None:
        self._items.clear()

    def dump(self, out: TextIO, prefix: str) -> None:
        """Write every entry on its own line, each preceded by ``prefix``."""

        for item in self._items:
            out.write(f'\n{prefix}{item}')

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
