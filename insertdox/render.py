"""Emit the Doxygen blocks generated for a flushed window."""

from __future__ import annotations

import shutil
from typing import TextIO

from .config import Options
from .textrange import skip_comment, trim_comment
from .typedecl import analyze_declaration
from .window import Window

GENERATOR = 'insertdox'
UNKNOWN_FILENAME = '<unknown>'


class BoilerplateError(RuntimeError):
    """Raised when the boilerplate file cannot be read."""


def write_boilerplate(out: TextIO, options: Options) -> None:
    """Copy the configured boilerplate file verbatim into ``out``."""

    if options.boilerplate is None:
        return
    try:
        with open(options.boilerplate, 'r', encoding='utf-8', errors='surrogateescape', newline='') as handle:
            shutil.copyfileobj(handle, out)
    except OSError as exc:
        raise BoilerplateError(f"unable to open '{options.boilerplate}' to read") from exc


def new_file_comment(out: TextIO, options: Options) -> None:
    """Write a template file comment for a file that does not start with one."""

    out.write(f'/**\n\t@file {options.filename or UNKNOWN_FILENAME}')
    out.write('\n\n\tPut a description of the file here.\n')
    write_boilerplate(out, options)
    out.write(f'\n\t@todo Edit file comment (automatically generated by {GENERATOR})')
    out.write('\n*/\n/* $Header$ */\n\n')


def render_file_comment(window: Window, options: Options) -> None:
    """Rewrap the leading comment of a file as a Doxygen block."""

    text = window.text()
    s = skip_comment(text, 0, len(text))
    e = trim_comment(text, len(text), s)
    out = window.out
    out.write('/**\n\t')
    out.write(text[s:e])
    out.write('\n')
    write_boilerplate(out, options)
    out.write('\n*/\n')


def render_description(window: Window, text: str) -> None:
    """Write the function's own comment, or a placeholder when it has none."""

    span = window.description
    s = skip_comment(text, span.start, span.end)
    e = trim_comment(text, span.end, s)
    if span.count > 0 and s < e:
        window.out.write(text[s:e])
    else:
        window.out.write('Brief description needed.')
        window.out.write('\n\n\tFollowed by a more complete description.')
    window.out.write('\n')


def render_arglist(window: Window, text: str) -> None:
    """Write one ``@param`` line per named, non-``void`` parameter."""

    s = window.arglist.start
    e = window.arglist.end
    while s < e and (text[s].isspace() or text[s] == '('):
        s += 1

    said_something = False
    for p in range(s, e):
        if text[p] not in ',)':
            continue
        decl = analyze_declaration(text, s, p)
        name = decl.name(text)
        if name and name != 'void':
            direction = 'in' if decl.input_only else 'in,out'
            window.out.write(f'\n\t@param[{direction}] \t{name} \t{decl.phrase}')
            said_something = True
        s = p + 1
    if said_something:
        window.out.write('\n')


def render_function(window: Window, options: Options) -> None:
    """Write a function preceded by its generated Doxygen block."""

    text = window.text()
    out = window.out
    description = window.description
    function = window.function

    # without a comment of its own, the block goes in front of the character
    # preceding the name (normally the line break)
    bare_start = description.count == 0 and function.start == 0
    if description.count == 0:
        description.start = description.end = max(function.start - 1, 0)

    window.passthrough(0, description.start)

    signature = analyze_declaration(text, function.start, function.end)
    out.write('\n/**\n')
    if signature.is_static:
        out.write('\t@internal\n\n')
    out.write('\t')
    render_description(window, text)
    render_arglist(window, text)

    if signature.phrase != 'void':
        out.write(f'\n\t@return {signature.phrase}')
        window.retvals.dump(out, '\t@retval ')
        out.write('\n')

    window.todos.dump(out, '\t@todo ')
    out.write(f'\n\t@todo edit me (automatically generated by {GENERATOR})\n*/')
    if bare_start:
        out.write('\n')

    if options.only_prototypes:
        window.passthrough(description.end, window.arglist.end)
        out.write(';\n\n')
    else:
        window.passthrough(description.end, window.position)
