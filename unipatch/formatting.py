from collections.abc import Iterable
from datetime import datetime

from unipatch.models import DateTimeMetadata, File, FileMetadata, Hunk, Patch, Range
from unipatch.parsing.escapes import quote_if_needed
from unipatch.parsing.patches import NO_NEWLINE_MARKER

# Always six fractional digits, so second-precision input gains ".000000".
# The year is padded by hand: strftime("%Y") drops leading zeros on glibc.
TIME_FORMAT = "%H:%M:%S.%f %z"


def format_timestamp(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d} {value.strftime(TIME_FORMAT)}"


def format_metadata(meta: FileMetadata) -> str:
    if isinstance(meta, DateTimeMetadata):
        return format_timestamp(meta.value)
    return quote_if_needed(meta.value)


def format_file_header(marker: str, file: File) -> str:
    header = f"{marker} {quote_if_needed(file.path)}"
    if file.meta is not None:
        header += "\t" + format_metadata(file.meta)
    return header


def format_range(hunk_range: Range) -> str:
    return f"{hunk_range.start},{hunk_range.count}"


def format_hunk(hunk: Hunk) -> list[str]:
    lines = [
        f"@@ -{format_range(hunk.old_range)} +{format_range(hunk.new_range)} @@{hunk.range_hint}"
    ]
    lines.extend(f"{line.kind.value}{line.text}" for line in hunk.lines)
    return lines


def format_patch(patch: Patch) -> str:
    """Render a patch as unified diff text, without a trailing newline."""
    lines: list[str] = [
        format_file_header("---", patch.old),
        format_file_header("+++", patch.new),
    ]
    for hunk in patch.hunks:
        lines.extend(format_hunk(hunk))
    if not patch.end_newline:
        lines.append(NO_NEWLINE_MARKER)
    return "\n".join(lines)


def format_patches(patches: Iterable[Patch]) -> str:
    """Render several patches back to back, each terminated by a newline."""
    return "".join(format_patch(patch) + "\n" for patch in patches)
