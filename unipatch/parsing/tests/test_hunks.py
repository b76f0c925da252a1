import pytest

from unipatch.errors import ParseError, ParseErrorKind
from unipatch.models import Hunk, Line, LineKind, Range
from unipatch.parsing.cursor import Cursor
from unipatch.parsing.hunks import (
    content_line_kind,
    parse_hunk,
    parse_hunk_header,
    parse_hunks,
    parse_range,
)

LAO_HUNK = """\
@@ -1,7 +1,6 @@
-The Way that can be told of is not the eternal Way;
-The name that can be named is not the eternal name.
 The Nameless is the origin of Heaven and Earth;
-The Named is the mother of all things.
+The named is the mother of all things.
+
 Therefore let there always be non-being,
   so we may see their subtlety,
 And let there always be being,
"""


def test_parse_range_default_count():
    assert parse_range("5") == Range(start=5, count=1)


def test_parse_range_with_count():
    assert parse_range("5,3") == Range(start=5, count=3)


def test_parse_range_max_u64():
    assert parse_range("18446744073709551615,0").start == 2**64 - 1


@pytest.mark.parametrize("text", ["", "x", "5,", "5,x", "5 ", "-5", "18446744073709551616"])
def test_parse_range_invalid(text):
    with pytest.raises(ParseError) as exc_info:
        parse_range(text)
    assert exc_info.value.kind == ParseErrorKind.RANGE


def test_hunk_header():
    old, new, hint, cursor = parse_hunk_header(Cursor("@@ -1,7 +1,6 @@\n"))
    assert old == Range(start=1, count=7)
    assert new == Range(start=1, count=6)
    assert hint == ""
    assert cursor.at_end


def test_hunk_header_keeps_hint_verbatim():
    _, _, hint, _ = parse_hunk_header(Cursor("@@ -10,6 +10,7 @@ def calculate_total(items):\r\n"))
    assert hint == " def calculate_total(items):"


def test_hunk_header_malformed():
    with pytest.raises(ParseError) as exc_info:
        parse_hunk_header(Cursor("@@ -1,7 1,6 @@\n"))
    assert exc_info.value.kind == ParseErrorKind.HUNK_HEADER
    assert exc_info.value.offset == 7


@pytest.mark.parametrize(
    "content, kind",
    [
        ("+x", LineKind.ADD),
        ("+", LineKind.ADD),
        ("+++a;", LineKind.ADD),
        ("-x", LineKind.REMOVE),
        ("---a;", LineKind.REMOVE),
        (" x", LineKind.CONTEXT),
        (" ", LineKind.CONTEXT),
        ("+++ a;", None),
        ("--- a;", None),
        ("", None),
        ("\\ No newline at end of file", None),
        ("diff --git a/x b/x", None),
    ],
)
def test_content_line_kind(content, kind):
    assert content_line_kind(content) == kind


def test_parse_hunk():
    hunk, cursor = parse_hunk(Cursor(LAO_HUNK))
    assert hunk == Hunk(
        old_range=Range(start=1, count=7),
        new_range=Range(start=1, count=6),
        lines=[
            Line.remove("The Way that can be told of is not the eternal Way;"),
            Line.remove("The name that can be named is not the eternal name."),
            Line.context("The Nameless is the origin of Heaven and Earth;"),
            Line.remove("The Named is the mother of all things."),
            Line.add("The named is the mother of all things."),
            Line.add(""),
            Line.context("Therefore let there always be non-being,"),
            Line.context("  so we may see their subtlety,"),
            Line.context("And let there always be being,"),
        ],
    )
    assert cursor.at_end


def test_parse_hunk_by_count_matches_prefix_parse():
    by_prefix, _ = parse_hunk(Cursor(LAO_HUNK))
    by_count, cursor = parse_hunk(Cursor(LAO_HUNK), use_hunk_counts=True)
    assert by_count == by_prefix
    assert cursor.at_end


def test_parse_hunk_requires_lines():
    with pytest.raises(ParseError) as exc_info:
        parse_hunk(Cursor("@@ -1 +1 @@\nfoo\n"))
    assert exc_info.value.kind == ParseErrorKind.HUNK_LINE
    assert exc_info.value.line == 2


def test_parse_hunk_by_count_reads_header_shaped_lines():
    hunk, cursor = parse_hunk(
        Cursor("@@ -1,2 +1,2 @@\n--- a;\n+++ a;\n x\n"),
        use_hunk_counts=True,
    )
    assert hunk.lines == (Line.remove("-- a;"), Line.add("++ a;"), Line.context("x"))
    assert cursor.at_end


def test_parse_hunk_by_count_stops_after_count():
    hunk, cursor = parse_hunk(Cursor("@@ -1 +1 @@\n-a\n+b\n+c\n"), use_hunk_counts=True)
    assert len(hunk.lines) == 2
    assert cursor.rest == "+c\n"


def test_parse_hunk_by_count_too_short():
    with pytest.raises(ParseError) as exc_info:
        parse_hunk(Cursor("@@ -1,3 +1,3 @@\n x\n"), use_hunk_counts=True)
    assert exc_info.value.kind == ParseErrorKind.HUNK_LINE
    assert exc_info.value.line == 3


def test_parse_hunk_by_count_side_mismatch():
    with pytest.raises(ParseError) as exc_info:
        parse_hunk(Cursor("@@ -1,1 +1,1 @@\n-a\n-b\n"), use_hunk_counts=True)
    assert exc_info.value.kind == ParseErrorKind.HUNK_LINE


def test_parse_hunk_by_count_empty_hunk():
    with pytest.raises(ParseError) as exc_info:
        parse_hunk(Cursor("@@ -0,0 +0,0 @@\n x\n"), use_hunk_counts=True)
    assert exc_info.value.kind == ParseErrorKind.HUNK_LINE


def test_parse_hunks_multiple():
    sample = "@@ -1 +1 @@\n-a\n+b\n@@ -5,2 +5,2 @@ tail\n c\n-d\n+e\nnext"
    hunks, cursor = parse_hunks(Cursor(sample))
    assert len(hunks) == 2
    assert hunks[1].old_range == Range(start=5, count=2)
    assert hunks[1].range_hint == " tail"
    assert cursor.rest == "next"
