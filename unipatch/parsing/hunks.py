import re

from unipatch.errors import ParseErrorKind
from unipatch.models import U64_MAX, Hunk, Line, LineKind, Range
from unipatch.parsing.cursor import Cursor

_DIGITS_RE = re.compile(r"[0-9]+")


def _read_u64(cursor: Cursor) -> tuple[int, Cursor]:
    match = _DIGITS_RE.match(cursor.text, cursor.offset)
    if match is None:
        raise cursor.error(ParseErrorKind.RANGE, "expected an unsigned integer")
    value = int(match.group())
    if value > U64_MAX:
        raise cursor.error(ParseErrorKind.RANGE, "integer does not fit in 64 bits")
    return value, cursor.advance(len(match.group()))


def read_range(cursor: Cursor) -> tuple[Range, Cursor]:
    start, cursor = _read_u64(cursor)
    count = 1
    if cursor.peek() == ",":
        count, cursor = _read_u64(cursor.advance(1))
    return Range(start=start, count=count), cursor


def parse_range(text: str) -> Range:
    """Parse `start[,count]`; a missing count means 1."""
    hunk_range, cursor = read_range(Cursor(text))
    if not cursor.at_end:
        raise cursor.error(ParseErrorKind.RANGE, "unexpected text after range")
    return hunk_range


def parse_hunk_header(cursor: Cursor) -> tuple[Range, Range, str, Cursor]:
    """`@@ -old +new @@hint`. The hint is kept verbatim, leading space included."""
    cursor = cursor.expect("@@ -", ParseErrorKind.HUNK_HEADER)
    old_range, cursor = read_range(cursor)
    cursor = cursor.expect(" +", ParseErrorKind.HUNK_HEADER)
    new_range, cursor = read_range(cursor)
    cursor = cursor.expect(" @@", ParseErrorKind.HUNK_HEADER)
    hint = cursor.text[cursor.offset:cursor.line_end()]
    cursor = cursor.advance(len(hint)).expect_line_ending()
    return old_range, new_range, hint, cursor


def content_line_kind(content: str) -> LineKind | None:
    """
    Classify one hunk body line by its prefix.

    `+++ x` and `--- x` are never content: they are taken as the header of
    the next patch. A genuine content line of that shape is misread (use
    count-driven parsing to avoid it).
    """
    prefix = content[:1]
    if prefix == "+" and not content.startswith("+++ "):
        return LineKind.ADD
    if prefix == "-" and not content.startswith("--- "):
        return LineKind.REMOVE
    if prefix == " ":
        return LineKind.CONTEXT
    return None


def _read_lines_by_prefix(cursor: Cursor) -> tuple[list[Line], Cursor]:
    lines: list[Line] = []
    while not cursor.at_end:
        content, _, after = cursor.read_line()
        kind = content_line_kind(content)
        if kind is None:
            break
        lines.append(Line(kind=kind, text=content[1:]))
        cursor = after
    return lines, cursor


def _read_lines_by_count(
    cursor: Cursor,
    old_range: Range,
    new_range: Range,
) -> tuple[list[Line], Cursor]:
    lines: list[Line] = []
    old_left = old_range.count
    new_left = new_range.count
    while old_left or new_left:
        content, _, after = cursor.read_line()
        prefix = content[:1]
        if prefix == " " and old_left and new_left:
            old_left -= 1
            new_left -= 1
        elif prefix == "-" and old_left:
            old_left -= 1
        elif prefix == "+" and new_left:
            new_left -= 1
        else:
            raise cursor.error(
                ParseErrorKind.HUNK_LINE,
                f"hunk expects {old_left} more old and {new_left} more new lines",
            )
        lines.append(Line(kind=LineKind(prefix), text=content[1:]))
        cursor = after
    return lines, cursor


def parse_hunk(cursor: Cursor, use_hunk_counts: bool = False) -> tuple[Hunk, Cursor]:
    old_range, new_range, hint, cursor = parse_hunk_header(cursor)
    if use_hunk_counts:
        lines, cursor = _read_lines_by_count(cursor, old_range, new_range)
    else:
        lines, cursor = _read_lines_by_prefix(cursor)
    if not lines:
        raise cursor.error(
            ParseErrorKind.HUNK_LINE, "expected at least one '+', '-' or ' ' line"
        )
    hunk = Hunk(
        old_range=old_range,
        new_range=new_range,
        range_hint=hint,
        lines=lines,
    )
    return hunk, cursor


def parse_hunks(cursor: Cursor, use_hunk_counts: bool = False) -> tuple[list[Hunk], Cursor]:
    hunk, cursor = parse_hunk(cursor, use_hunk_counts)
    hunks = [hunk]
    while cursor.startswith("@@"):
        hunk, cursor = parse_hunk(cursor, use_hunk_counts)
        hunks.append(hunk)
    return hunks, cursor
