import logging

from unipatch.errors import ParseErrorKind, ParserInvariantError
from unipatch.models import Patch
from unipatch.parsing.cursor import Cursor
from unipatch.parsing.headers import parse_headers
from unipatch.parsing.hunks import content_line_kind, parse_hunks

logger = logging.getLogger(__name__)

NO_NEWLINE_MARKER = "\\ No newline at end of file"


def skip_blank_lines(cursor: Cursor) -> Cursor:
    while not cursor.at_end:
        content, _, after = cursor.read_line()
        if content.strip():
            break
        cursor = after
    return cursor


def parse_patch(cursor: Cursor, use_hunk_counts: bool = False) -> tuple[Patch, Cursor]:
    """
    Parse one patch starting at `cursor`.

    Preamble lines before the `---` header are skipped. After the hunks an
    optional no-newline marker and any blank lines are consumed.
    """
    old, new, cursor = parse_headers(cursor)
    hunks, cursor = parse_hunks(cursor, use_hunk_counts)

    end_newline = True
    content, _, after = cursor.read_line()
    if content == NO_NEWLINE_MARKER:
        end_newline = False
        cursor = after
        content, _, _ = cursor.read_line()
        if content.startswith("@@") or content_line_kind(content) is not None:
            raise cursor.error(
                ParseErrorKind.HUNK_LINE,
                "no-newline marker must follow the last line of the last hunk",
            )

    cursor = skip_blank_lines(cursor)
    patch = Patch(old=old, new=new, hunks=hunks, end_newline=end_newline)
    return patch, cursor


def parse_one(text: str, *, use_hunk_counts: bool = False) -> Patch:
    """
    Parse exactly one patch.

    Raises ParseError if the text is not a patch or if anything but
    whitespace follows it.
    """
    patch, cursor = parse_patch(Cursor(text), use_hunk_counts)
    if not cursor.at_end:
        raise cursor.error(
            ParseErrorKind.TRAILING_CONTENT, "unexpected content after patch"
        )
    logger.debug("Parsed patch with %d hunks", len(patch.hunks))
    return patch


def parse_all(text: str, *, use_hunk_counts: bool = False) -> list[Patch]:
    """Parse one or more concatenated patches, e.g. the output of `git diff`."""
    patches: list[Patch] = []
    cursor = skip_blank_lines(Cursor(text))
    while not cursor.at_end:
        patch, after = parse_patch(cursor, use_hunk_counts)
        if after.offset <= cursor.offset:
            raise ParserInvariantError(
                f"parser made no progress at offset {cursor.offset}"
            )
        patches.append(patch)
        cursor = after

    if not patches:
        raise cursor.error(ParseErrorKind.NO_PATCHES, "no patches found")

    logger.debug("Parsed %d patches from unified diff", len(patches))
    return patches
