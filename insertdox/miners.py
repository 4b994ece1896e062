"""Harvest tags from comments and statements found inside a function body."""

from __future__ import annotations

from typing import Optional, Sequence

from .textrange import is_ident, skip_punct, skip_space, trim_comment, trim_space
from .window import Window

TODO_MARKERS = ('todo', 'fixme', 'fix-me')
NOTE_MARKERS = ('note', 'nb')


def _match_marker(text: str, pos: int, markers: Sequence[str]) -> Optional[str]:
    lowered = text[pos:pos + max(len(m) for m in markers)].lower()
    for marker in markers:
        if lowered.startswith(marker):
            return marker
    return None


def mine_comment(window: Window) -> None:
    """Record a ``todo``/``fixme`` or ``note``/``nb`` comment of the body.

    The comment runs from ``window.comment_start`` to the current position.
    Whatever follows the marker, stripped of punctuation, is added to
    ``window.todos`` or ``window.notes``.
    """

    start = window.comment_start
    if start is None:
        return
    window.comment_start = None

    text = window.text(start)
    end = len(text)
    p = skip_punct(text, 0, end)
    for markers, collection in ((TODO_MARKERS, window.todos), (NOTE_MARKERS, window.notes)):
        marker = _match_marker(text, p, markers)
        if marker is not None:
            rest = p + len(marker)
            collection.add(text[skip_punct(text, rest, end):trim_comment(text, end, rest)])
            return


def mine_statement(window: Window) -> None:
    """Record the value of a ``return`` statement of the body.

    A value wrapped in a single pair of parentheses is unwrapped; values such
    as ``(a)+(b)`` hold more than one ``(`` and are kept as written.
    """

    start = window.statement_start
    if start is None:
        return
    window.statement_start = None

    text = window.text(start)
    end = len(text)
    keyword = 'return'
    if not text.startswith(keyword) or (end > len(keyword) and is_ident(text[len(keyword)])):
        return

    s = skip_space(text, len(keyword), end)
    e = trim_space(text, end, s)
    if s < e and text[s] == '(' and text[e - 1] == ')' and text.count('(', s, e) == 1:
        s = skip_space(text, s + 1, e)
        e = trim_space(text, e - 1, s)
    window.retvals.add(text[s:e])
