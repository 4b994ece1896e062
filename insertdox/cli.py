#!/usr/bin/env python3
# File: insertdox/cli.py
# Purpose: Command-line entry point that annotates C files in place.

"""Annotate C source files with generated Doxygen comment blocks.

Each file named on the command line is rewritten in place: the annotated
text goes to ``<file>.tmp`` first, then the original is kept as
``<file>.bak`` and the temporary file takes its name.  Without file
arguments the tool filters standard input to standard output.
"""

from __future__ import annotations

import argparse
import io
import pathlib
import sys
from typing import List, Optional, TextIO

from . import __version__
from .config import ConfigError, Options, load_config
from .lexer import annotate_stream
from .render import BoilerplateError

ENCODING = 'utf-8'
ERRORS = 'surrogateescape'

EXIT_READ = 1
EXIT_WRITE = 2
EXIT_BACKUP = 3
EXIT_REPLACE = 4
EXIT_BOILERPLATE = 5
EXIT_CONFIG = 6


def error(message: str) -> None:
    print(f'### error: {message}', file=sys.stderr)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""

    parser = argparse.ArgumentParser(
        prog='insertdox',
        description='Insert Doxygen comments in front of C function definitions.',
        epilog='If no files are given, standard input is processed to standard output.',
    )
    parser.add_argument('files', nargs='*', type=pathlib.Path, help='C source files to annotate in place.')
    parser.add_argument('-v', '--version', action='store_true', help='Print the version on stderr and exit.')
    parser.add_argument(
        '-p',
        '--prototypes',
        dest='only_prototypes',
        action='store_true',
        help='Only emit function comments and prototypes.',
    )
    parser.add_argument(
        '-b',
        '--boilerplate',
        type=pathlib.Path,
        metavar='FILE',
        help="Provide a 'boilerplate' file for the file comment.",
    )
    parser.add_argument('--config', type=pathlib.Path, metavar='FILE', help='YAML configuration file.')
    parser.add_argument('--verbose', action='store_true', help='Report every annotated file on stderr.')
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> Options:
    """Merge the configuration file with the command-line flags."""

    settings = load_config(args.config) if args.config is not None else {}
    if args.only_prototypes:
        settings['only_prototypes'] = True
    if args.boilerplate is not None:
        settings['boilerplate'] = args.boilerplate
    return Options(**settings)


def _discard(path: pathlib.Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def annotate_file(path: pathlib.Path, options: Options) -> int:
    """Annotate ``path`` in place and return an exit status."""

    tmp_path = path.with_name(path.name + '.tmp')
    bak_path = path.with_name(path.name + '.bak')

    try:
        instream = path.open('r', encoding=ENCODING, errors=ERRORS, newline='')
    except OSError:
        error(f"unable to open '{path}' for reading")
        return EXIT_READ

    with instream:
        try:
            outstream = tmp_path.open('w', encoding=ENCODING, errors=ERRORS, newline='')
        except OSError:
            error(f"unable to open '{tmp_path}' for writing")
            return EXIT_WRITE
        try:
            with outstream:
                annotate_stream(instream, outstream, options.for_file(path.name))
        except OSError as exc:
            _discard(tmp_path)
            error(f"unable to annotate '{path}': {exc}")
            return EXIT_WRITE
        except Exception:
            _discard(tmp_path)
            raise

    try:
        path.replace(bak_path)
    except OSError:
        _discard(tmp_path)
        error(f"unable to rename '{path}' to '{bak_path}'")
        return EXIT_BACKUP
    try:
        tmp_path.replace(path)
    except OSError:
        error(f"unable to rename '{tmp_path}' to '{path}'")
        return EXIT_REPLACE
    return 0


def _reconfigure(stream: TextIO) -> None:
    # keep CR/LF and undecodable bytes exactly as they were read
    if isinstance(stream, io.TextIOWrapper):
        stream.reconfigure(errors=ERRORS, newline='')


def annotate_stdio(options: Options) -> int:
    """Filter standard input to standard output."""

    _reconfigure(sys.stdin)
    _reconfigure(sys.stdout)
    annotate_stream(sys.stdin, sys.stdout, options.for_file(None))
    sys.stdout.flush()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Annotate the requested files, or standard input."""

    args = parse_args(argv)
    if args.version:
        print(f'insertdox, version {__version__}', file=sys.stderr)
        return 0

    try:
        options = build_options(args)
    except ConfigError as exc:
        error(str(exc))
        return EXIT_CONFIG

    try:
        if not args.files:
            return annotate_stdio(options)

        result = 0
        annotated: List[pathlib.Path] = []
        for path in args.files:
            status = annotate_file(path, options)
            if status == 0:
                annotated.append(path)
                if args.verbose:
                    print(f'Annotated: {path} (original kept as {path.name}.bak)', file=sys.stderr)
            elif result == 0:
                result = status
    except BoilerplateError as exc:
        error(str(exc))
        return EXIT_BOILERPLATE

    if args.verbose:
        print(f'Summary: annotated {len(annotated)} of {len(args.files)} files', file=sys.stderr)
    return result


if __name__ == '__main__':
    sys.exit(main())
