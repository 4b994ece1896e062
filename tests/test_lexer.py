"""
Character-by-character state machine checks, independent of any file.
"""

import io

from insertdox.lexer import Annotator, Mode, iter_pairs


def feed(annotator, text):
    for i, ch in enumerate(text):
        annotator.step(ch, text[i + 1] if i + 1 < len(text) else "")
    return annotator.state


def fresh():
    annotator = Annotator(io.StringIO())
    # get past file-start detection so no header is involved
    feed(annotator, "x;\n")
    return annotator


def test_block_comment_opens_and_closes():
    annotator = fresh()
    assert feed(annotator, "/*").mode is Mode.BLOCK_COMMENT
    assert feed(annotator, " { */").mode is Mode.CODE
    assert annotator.state.braces == 0


def test_opening_star_does_not_close_comment():
    annotator = fresh()
    assert feed(annotator, "/*/").mode is Mode.BLOCK_COMMENT
    assert feed(annotator, " */").mode is Mode.CODE


def test_line_comment_ends_at_line_break():
    annotator = fresh()
    assert feed(annotator, "// (").mode is Mode.LINE_COMMENT
    state = feed(annotator, "\n")
    assert state.mode is Mode.CODE
    assert state.first_on_line
    assert state.parens == 0


def test_hash_only_starts_directive_at_line_start():
    annotator = fresh()
    assert feed(annotator, "  #if X").mode is Mode.DIRECTIVE
    assert feed(annotator, "\n").mode is Mode.CODE

    annotator = fresh()
    assert feed(annotator, "a # b").mode is Mode.CODE


def test_directive_ends_at_line_break_after_backslash():
    annotator = fresh()
    state = feed(annotator, "#define BLOCK \\\n")
    assert state.mode is Mode.CODE
    # the continuation line is plain code
    feed(annotator, "{\n")
    assert annotator.state.braces == 1


def test_line_comment_ends_directive_and_describes():
    annotator = fresh()
    window = annotator.window
    state = feed(annotator, "#include <x.h> // c\n")
    assert state.mode is Mode.CODE
    assert not state.in_directive
    assert window.description.count == 1
    # no flush at the terminator: the comment stays in the window
    assert window.position > 0
    assert "// c" in window.text()


def test_comment_inside_directive_returns_to_directive():
    annotator = fresh()
    assert feed(annotator, "#if A /* x").mode is Mode.BLOCK_COMMENT
    assert feed(annotator, " */").mode is Mode.DIRECTIVE
    assert feed(annotator, "\n").mode is Mode.CODE


def test_quoted_braces_are_not_counted():
    annotator = fresh()
    state = feed(annotator, 'int f(void) { s = "}\\"{"; c = \'}\';')
    assert state.mode is Mode.CODE
    assert state.braces == 1


def test_escaped_crlf_is_one_character():
    annotator = fresh()
    state = feed(annotator, "\\")
    assert state.literal
    annotator.step("\r", "\n")
    assert annotator.state.literal
    annotator.step("\n", "i")
    assert not annotator.state.literal


def test_escaped_lfcr_is_one_character():
    annotator = fresh()
    state = feed(annotator, "\\")
    assert state.literal
    annotator.step("\n", "\r")
    assert annotator.state.literal
    annotator.step("\r", "x")
    assert not annotator.state.literal


def test_depth_counters_and_spans():
    annotator = fresh()
    window = annotator.window
    feed(annotator, "\nint f(int (*cb)(void)) {")
    assert annotator.state.braces == 1
    assert annotator.state.parens == 0
    assert window.function.count == 1
    assert window.arglist.count == 1
    assert window.text(window.function.start, window.function.end) == "int f"
    assert window.text(window.arglist.start, window.arglist.end) == "(int (*cb)(void))"
    assert window.body.start == window.position - 1


def test_statement_markers_inside_body():
    annotator = fresh()
    feed(annotator, "int f(void) { a = 1; return 2;")
    assert list(annotator.window.retvals) == ["2"]
    assert annotator.window.statement_start is None


def test_top_level_semicolon_flushes():
    out = io.StringIO()
    annotator = Annotator(out)
    feed(annotator, "int x;")
    assert annotator.window.position == 0
    assert out.getvalue().endswith("int x;")


def test_iter_pairs_supplies_lookahead_across_chunks():
    pairs = list(iter_pairs(io.StringIO("abcd"), chunk_size=3))
    assert pairs == [("a", "b"), ("b", "c"), ("c", "d"), ("d", "")]
    assert list(iter_pairs(io.StringIO(""))) == []
