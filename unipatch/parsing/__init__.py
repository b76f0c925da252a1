from unipatch.parsing.cursor import Cursor
from unipatch.parsing.escapes import needs_quoting, quote, quote_if_needed, unescape
from unipatch.parsing.headers import classify_metadata, parse_headers, parse_timestamp
from unipatch.parsing.hunks import content_line_kind, parse_hunk, parse_range
from unipatch.parsing.patches import (
    NO_NEWLINE_MARKER,
    parse_all,
    parse_one,
    parse_patch,
)
from unipatch.parsing.tokens import read_metadata, read_path, read_token

__all__ = [
    "Cursor",
    "needs_quoting",
    "quote",
    "quote_if_needed",
    "unescape",
    "classify_metadata",
    "parse_headers",
    "parse_timestamp",
    "content_line_kind",
    "parse_hunk",
    "parse_range",
    "NO_NEWLINE_MARKER",
    "parse_all",
    "parse_one",
    "parse_patch",
    "read_metadata",
    "read_path",
    "read_token",
]
