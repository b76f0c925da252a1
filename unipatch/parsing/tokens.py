import re

from unipatch.errors import ParseError, ParseErrorKind
from unipatch.parsing.cursor import Cursor
from unipatch.parsing.escapes import unescape

# Bare paths end at a tab so that "name with spaces\tmetadata" splits the way
# diff tools write it. Bare metadata runs to the end of the line.
PATH_TERMINATORS = "\t\r\n"
METADATA_TERMINATORS = "\r\n"

_BARE_RES = {
    PATH_TERMINATORS: re.compile(r"[^\t\r\n]+"),
    METADATA_TERMINATORS: re.compile(r"[^\r\n]+"),
}


def read_quoted(cursor: Cursor, terminators: str) -> tuple[str, Cursor]:
    """
    Read a `"..."` token and decode its escapes.

    The closing quote has to be followed by one of `terminators` or the end
    of input, otherwise the token is not a quoted one.
    """
    cursor = cursor.expect('"', ParseErrorKind.FILENAME)
    text = cursor.text
    i = cursor.offset
    while i < len(text) and text[i] not in '"\n':
        i += 2 if text[i] == "\\" else 1
    if i >= len(text) or text[i] != '"':
        raise cursor.error(ParseErrorKind.FILENAME, "unterminated quoted string")
    body = text[cursor.offset:i]
    if not body:
        raise cursor.error(ParseErrorKind.FILENAME, "empty quoted string")

    try:
        value = unescape(body)
    except ParseError as exc:
        raise cursor.advance(exc.offset).error(exc.kind, exc.message) from exc

    after = cursor.advance(len(body) + 1)
    nxt = after.peek()
    if nxt and nxt not in terminators:
        raise after.error(
            ParseErrorKind.FILENAME, "unexpected text after quoted string"
        )
    return value, after


def read_bare(cursor: Cursor, terminators: str) -> tuple[str, Cursor]:
    match = _BARE_RES[terminators].match(cursor.text, cursor.offset)
    if match is None:
        raise cursor.error(ParseErrorKind.FILENAME, "expected a filename")
    value = match.group()
    return value, cursor.advance(len(value))


def read_token(cursor: Cursor, terminators: str) -> tuple[str, Cursor]:
    """Read a quoted token, falling back to a bare one if that fails."""
    if cursor.peek() == '"':
        try:
            return read_quoted(cursor, terminators)
        except ParseError:
            pass
    return read_bare(cursor, terminators)


def read_path(cursor: Cursor) -> tuple[str, Cursor]:
    return read_token(cursor, PATH_TERMINATORS)


def read_metadata(cursor: Cursor) -> tuple[str, Cursor]:
    return read_token(cursor, METADATA_TERMINATORS)
