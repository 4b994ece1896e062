# File: insertdox/lexer.py
# Purpose: Single-pass character state machine that drives the annotation.

"""Streaming C lexer that finds functions and triggers their annotation.

The input is consumed one character at a time with one character of
lookahead.  Characters accumulate in a :class:`~insertdox.window.Window`
while the state machine records where the description comment, the function
name, the argument list and the body start and end.  Whenever a top-level
boundary is reached (``;``, a closing ``}``, the end of a preprocessor line,
a new top-level comment) the window is flushed: it is either rendered as an
annotated function, rendered as the file comment, or copied through as is.
"""

from __future__ import annotations

import enum
import io
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO, Tuple

from .config import Options
from .miners import mine_comment, mine_statement
from .render import new_file_comment, render_file_comment, render_function
from .window import Window

CHUNK_SIZE = 32768
LINE_BREAKS = '\r\n'


class Mode(enum.Enum):
    CODE = 'code'
    BLOCK_COMMENT = 'block comment'
    LINE_COMMENT = 'line comment'
    DIRECTIVE = 'preprocessor line'
    SINGLE_QUOTE = 'character literal'
    DOUBLE_QUOTE = 'string literal'


QUOTES = {
    "'": Mode.SINGLE_QUOTE,
    '"': Mode.DOUBLE_QUOTE,
}


@dataclass
class ParserState:
    """Lexical position of the annotator within the current file."""

    mode: Mode = Mode.CODE
    in_directive: bool = False   # comment was opened on a preprocessor line
    literal: bool = False        # next character is escaped
    opening: bool = False        # next character is the '*' of '/*'
    braces: int = 0
    parens: int = 0
    at_start: bool = True
    first_on_line: bool = True
    between: bool = True
    star: bool = False           # previous comment character was '*'

    @property
    def in_comment(self) -> bool:
        return self.mode in (Mode.BLOCK_COMMENT, Mode.LINE_COMMENT)


class Annotator:
    """Feed characters through :meth:`step`, then call :meth:`finish`."""

    def __init__(self, out: TextIO, options: Optional[Options] = None) -> None:
        self.options = options or Options()
        self.window = Window(out, limit=self.options.window_limit)
        self.state = ParserState()

    # ------------------------------------------------------------------
    # Flushing
    # ------------------------------------------------------------------

    def flush(self) -> None:
        """Render or copy through the window, then start a new one."""

        window = self.window
        if window.position > 0:
            if window.file_comment:
                render_file_comment(window, self.options)
            elif window.function.defined and window.arglist.defined and window.body.defined:
                render_function(window, self.options)
            elif not self.options.only_prototypes:
                window.passthrough(0, window.position)
        window.reset()

    def finish(self) -> None:
        self.flush()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open_comment(self, nxt: str) -> None:
        state = self.state
        window = self.window
        if nxt == '*':
            state.mode = Mode.BLOCK_COMMENT
            state.opening = True
        else:
            state.mode = Mode.LINE_COMMENT
        if state.braces == 0:
            self.flush()
            window.description.open(window.position)
        else:
            window.comment_start = window.position

    def _close_comment(self, end: int) -> bool:
        """Finish the current comment; return ``True`` if a flush is due."""

        window = self.window
        if self.state.braces > 0:
            mine_comment(window)
            return False
        window.description.close(end)
        return window.file_comment

    def _step_line_comment(self, c: str) -> bool:
        state = self.state
        if c not in LINE_BREAKS:
            return False
        state.mode = Mode.CODE
        state.in_directive = False
        state.first_on_line = True
        if self._close_comment(self.window.position):
            # the line break belongs to whatever follows the file comment
            self.flush()
        return False

    def _step_block_comment(self, c: str) -> bool:
        state = self.state
        if state.opening:
            state.opening = False
            state.star = False
            return False
        closing = state.star and c == '/'
        state.star = c == '*'
        if not closing:
            return False
        state.mode = Mode.DIRECTIVE if state.in_directive else Mode.CODE
        return self._close_comment(self.window.position + 1)

    def _step_directive(self, c: str, n: str) -> bool:
        state = self.state
        if c in LINE_BREAKS:
            state.mode = Mode.CODE
            state.in_directive = False
            state.first_on_line = True
            return state.braces == 0
        if c == '/' and n in ('*', '/'):
            state.in_directive = True
            self._open_comment(n)
        return False

    def _step_quoted(self, c: str) -> bool:
        state = self.state
        if c == '\\':
            state.literal = True
        elif QUOTES.get(c) is state.mode:
            state.mode = Mode.CODE
        return False

    def _step_code(self, c: str, n: str) -> bool:
        state = self.state
        window = self.window
        flush = False

        if c == '\\':
            state.literal = True
        elif c == '/' and n in ('*', '/'):
            self._open_comment(n)
        elif c == '#' and state.first_on_line:
            if state.braces == 0:
                # a comment followed by a directive does not describe anything
                window.description.clear()
            state.mode = Mode.DIRECTIVE
        elif c in QUOTES:
            state.mode = QUOTES[c]
        elif c == '(':
            if state.braces == 0 and state.parens == 0:
                window.function.close(window.position)
                window.arglist.open(window.position)
            state.parens += 1
        elif c == ')':
            state.parens -= 1
            if state.braces == 0 and state.parens == 0:
                window.arglist.close(window.position + 1)
        elif c == '{':
            if state.braces == 0:
                window.body.open(window.position)
            else:
                mine_statement(window)
            state.braces += 1
            state.between = True
        elif c == '}':
            state.braces -= 1
            if state.braces == 0:
                window.body.close(window.position + 1)
                flush = True
            else:
                mine_statement(window)
            state.between = True
        elif c == ';':
            if state.braces == 0:
                flush = True
            else:
                mine_statement(window)
            state.between = True
        elif c in LINE_BREAKS:
            state.first_on_line = True
        elif state.between and not c.isspace():
            if state.braces == 0:
                window.function.open(window.position)
            else:
                window.statement_start = window.position
            state.between = False
        return flush

    def step(self, c: str, n: str = '') -> None:
        """Consume ``c``; ``n`` is the following character, ``''`` at the end."""

        state = self.state
        if state.literal:
            # a CR/LF pair after a backslash is one logical character
            if (c, n) not in (('\r', '\n'), ('\n', '\r')):
                state.literal = False
            flush = False
        elif state.mode is Mode.LINE_COMMENT:
            flush = self._step_line_comment(c)
        elif state.mode is Mode.BLOCK_COMMENT:
            flush = self._step_block_comment(c)
        elif state.mode is Mode.DIRECTIVE:
            flush = self._step_directive(c, n)
        elif state.mode in (Mode.SINGLE_QUOTE, Mode.DOUBLE_QUOTE):
            flush = self._step_quoted(c)
        else:
            flush = self._step_code(c, n)

        if state.at_start and not c.isspace():
            state.at_start = False
            if state.in_comment:
                self.window.file_comment = True
            else:
                new_file_comment(self.window.out, self.options)

        if not self.window.append(c):
            flush = True
        if flush:
            self.flush()

        if state.first_on_line and not c.isspace():
            state.first_on_line = False


def iter_pairs(stream: TextIO, chunk_size: int = CHUNK_SIZE) -> Iterator[Tuple[str, str]]:
    """Yield ``(current, next)`` characters of ``stream``; ``next`` is ``''`` at the end."""

    current = ''
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        for nxt in chunk:
            if current:
                yield current, nxt
            current = nxt
    if current:
        yield current, ''


def annotate_stream(instream: TextIO, outstream: TextIO, options: Optional[Options] = None) -> None:
    """Annotate the C source read from ``instream`` into ``outstream``."""

    annotator = Annotator(outstream, options)
    for c, n in iter_pairs(instream):
        annotator.step(c, n)
    annotator.finish()


def annotate_text(source: str, options: Optional[Options] = None) -> str:
    """Return ``source`` with its generated documentation inserted."""

    out = io.StringIO()
    annotate_stream(io.StringIO(source, newline=''), out, options)
    return out.getvalue()
