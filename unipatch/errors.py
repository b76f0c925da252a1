from enum import StrEnum

FRAGMENT_PREVIEW_CHARS = 40


class ParseErrorKind(StrEnum):
    HEADER = "header"
    FILENAME = "filename"
    LINE_ENDING = "line_ending"
    HUNK_HEADER = "hunk_header"
    RANGE = "range"
    HUNK_LINE = "hunk_line"
    ESCAPE = "escape"
    NO_PATCHES = "no_patches"
    TRAILING_CONTENT = "trailing_content"


class ParseError(Exception):
    """Raised when the input does not match the unified diff grammar.

    `line` is 1-based, `offset` is a 0-based UTF-8 byte offset into the input
    and `fragment` is the unparsed text remaining at the failure point.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        line: int = 1,
        offset: int = 0,
        fragment: str = "",
    ):
        self.kind = kind
        self.message = message
        self.line = line
        self.offset = offset
        self.fragment = fragment
        super().__init__(self._render())

    def _render(self) -> str:
        preview = self.fragment[:FRAGMENT_PREVIEW_CHARS]
        if len(self.fragment) > FRAGMENT_PREVIEW_CHARS:
            preview += "..."
        return f"line {self.line}, offset {self.offset}: {self.message} (near {preview!r})"

    def to_dict(self) -> dict:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "line": self.line,
            "offset": self.offset,
            "fragment": self.fragment,
        }


class ParserInvariantError(RuntimeError):
    """The parser reported success without consuming its input. Always a bug."""
