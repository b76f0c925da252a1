import logging
import re
from datetime import datetime

from unipatch.errors import ParseErrorKind
from unipatch.models import DateTimeMetadata, File, OtherMetadata
from unipatch.parsing.cursor import Cursor
from unipatch.parsing.tokens import read_metadata, read_path

logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = (
    "%Y-%m-%d %H:%M:%S.%f %z",
    "%Y-%m-%d %H:%M:%S %z",
)

TIMESTAMP_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)? [+-][0-9]{2}:?[0-9]{2}"
)


def parse_timestamp(text: str) -> datetime | None:
    """
    Parse a diff header timestamp such as `2002-02-21 23:30:39.942229878 -0800`.

    Sub-second digits past microseconds are dropped. Returns None when the
    text is not a timestamp.
    """
    match = TIMESTAMP_RE.fullmatch(text)
    if match is None:
        return None
    fraction = match.group(1)
    if fraction and len(fraction) > 7:
        text = text[:match.start(1) + 7] + text[match.end(1):]
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def classify_metadata(text: str) -> DateTimeMetadata | OtherMetadata:
    timestamp = parse_timestamp(text)
    if timestamp is not None:
        return DateTimeMetadata(value=timestamp)
    return OtherMetadata(value=text)


def parse_header_line_content(cursor: Cursor) -> tuple[File, Cursor]:
    """Filename token, then optionally a tab and the file metadata."""
    path, cursor = read_path(cursor)
    meta = None
    if cursor.peek() == "\t":
        cursor = cursor.advance(1)
        if cursor.line_end() > cursor.offset:
            text, cursor = read_metadata(cursor)
            meta = classify_metadata(text)
    return File(path=path, meta=meta), cursor


def skip_preamble(cursor: Cursor) -> Cursor:
    """Skip lines such as `diff --git ...` or `index ...` up to the next `---`."""
    while not cursor.at_end and not cursor.startswith("---"):
        _, _, cursor = cursor.read_line()
    return cursor


def parse_headers(cursor: Cursor) -> tuple[File, File, Cursor]:
    cursor = skip_preamble(cursor)
    if cursor.at_end:
        raise cursor.error(ParseErrorKind.HEADER, "expected '--- ' file header")

    cursor = cursor.expect("--- ", ParseErrorKind.HEADER)
    old, cursor = parse_header_line_content(cursor)
    cursor = cursor.expect_line_ending()

    cursor = cursor.expect("+++ ", ParseErrorKind.HEADER)
    new, cursor = parse_header_line_content(cursor)
    cursor = cursor.expect_line_ending()

    logger.debug("Parsed file headers %r -> %r", old.path, new.path)
    return old, new, cursor
