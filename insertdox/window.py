"""Accumulation window: the unflushed run of source text and its spans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, TextIO

from .textrange import TextCollection


@dataclass
class Span:
    """Half-open offset range into the window plus an occurrence counter."""

    start: int = 0
    end: int = 0
    count: int = 0

    def open(self, pos: int) -> None:
        self.start = pos

    def close(self, pos: int) -> None:
        self.end = pos
        self.count += 1

    def clear(self) -> None:
        self.start = 0
        self.end = 0
        self.count = 0

    @property
    def defined(self) -> bool:
        return self.count == 1


class Window:
    """Characters accumulated since the last flush, bound to an output stream.

    ``limit`` caps the run length; once it is reached :meth:`append` reports
    failure so the caller can flush early instead of growing further.
    """

    def __init__(self, out: TextIO, limit: Optional[int] = None) -> None:
        self.out = out
        self.limit = limit
        self.run: List[str] = []
        self.description = Span()
        self.function = Span()
        self.arglist = Span()
        self.body = Span()
        self.comment_start: Optional[int] = None
        self.statement_start: Optional[int] = None
        self.file_comment = False
        self.todos = TextCollection()
        self.notes = TextCollection()
        self.retvals = TextCollection()

    @property
    def position(self) -> int:
        """Offset the next appended character will occupy."""

        return len(self.run)

    def append(self, ch: str) -> bool:
        self.run.append(ch)
        return self.limit is None or len(self.run) < self.limit

    def text(self, start: int = 0, end: Optional[int] = None) -> str:
        return ''.join(self.run[start:end])

    def passthrough(self, start: int, end: int) -> None:
        """Write the raw ``[start, end)`` part of the run to the output."""

        if end > start:
            self.out.write(self.text(start, end))

    def reset(self) -> None:
        self.run.clear()
        for span in (self.description, self.function, self.arglist, self.body):
            span.clear()
        self.comment_start = None
        self.statement_start = None
        self.file_comment = False
        self.todos.clear()
        self.notes.clear()
        self.retvals.clear()
