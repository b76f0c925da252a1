from unipatch.errors import ParseError, ParseErrorKind, ParserInvariantError
from unipatch.formatting import format_patch, format_patches
from unipatch.logging import get_logger, setup_logging
from unipatch.models import (
    DateTimeMetadata,
    File,
    FileMetadata,
    Hunk,
    Line,
    LineKind,
    OtherMetadata,
    Patch,
    Range,
)
from unipatch.parsing import parse_all, parse_one, parse_range

__all__ = [
    "ParseError",
    "ParseErrorKind",
    "ParserInvariantError",
    "format_patch",
    "format_patches",
    "get_logger",
    "setup_logging",
    "DateTimeMetadata",
    "File",
    "FileMetadata",
    "Hunk",
    "Line",
    "LineKind",
    "OtherMetadata",
    "Patch",
    "Range",
    "parse_all",
    "parse_one",
    "parse_range",
]
