"""Turn a raw C declaration into an identifier and an English type phrase.

Used on every parameter of an argument list and on the name-bearing part of
a function signature.  The phrase is built from what is visible in the text
only, so pointers or qualifiers hidden behind a macro or a typedef are not
seen.
"""

from __future__ import annotations

from dataclasses import dataclass

from .textrange import is_ident, skip_space, trim_space

PHRASE_LIMIT = 200
QUALIFIERS = ('static', 'const')


@dataclass
class Declaration:
    """Result of :func:`analyze_declaration`.

    ``phrase``, ``is_static`` and ``input_only`` are only filled in when a
    description was requested.
    """

    name_start: int
    name_end: int
    phrase: str = ''
    is_static: bool = False
    input_only: bool = True

    def name(self, text: str) -> str:
        return text[self.name_start:self.name_end]


def _leading_qualifier(text: str, pos: int, end: int) -> str:
    for word in QUALIFIERS:
        stop = pos + len(word)
        if stop <= end and text.startswith(word, pos) and (stop == end or text[stop].isspace()):
            return word
    return ''


def analyze_declaration(
    text: str,
    start: int,
    end: int,
    *,
    describe: bool = True,
    limit: int = PHRASE_LIMIT,
) -> Declaration:
    """Split ``text[start:end]`` into a bare identifier and its type.

    ``int argv[]`` gives the name ``argv`` and the phrase ``an array of int``;
    ``const char *s`` gives ``s`` and ``a pointer to const char``.  The
    identifier is the trailing run of identifier characters after any
    ``[...]`` suffix has been dropped; the brackets are not matched for
    nesting, the last ``[`` wins.
    """

    s = skip_space(text, start, end)
    e = trim_space(text, end, s)

    is_array = False
    if e > s and text[e - 1] == ']':
        is_array = True
        bracket = e - 2
        while bracket >= s and text[bracket] != '[':
            bracket -= 1
        e = trim_space(text, max(bracket, s), s)

    p = e
    while p > s and is_ident(text[p - 1]):
        p -= 1

    decl = Declaration(p, e)
    if not describe:
        return decl

    is_const = False
    while True:
        word = _leading_qualifier(text, s, p)
        if not word:
            break
        if word == 'static':
            decl.is_static = True
        else:
            is_const = True
        s = skip_space(text, s + len(word), p)

    te = trim_space(text, p, s)
    pointers = 0
    while te > s and text[te - 1] == '*':
        pointers += 1
        te = trim_space(text, te - 1, s)

    # pass-by-value or const: the callee cannot change what the caller sees
    decl.input_only = is_const or (pointers == 0 and not is_array)

    parts = ['a pointer to '] * pointers
    if is_array:
        parts.append('an array of ')
    if is_const:
        parts.append('const ')
    parts.append(text[s:te])
    decl.phrase = ''.join(parts)[:limit]
    return decl
