from dataclasses import dataclass

from unipatch.errors import ParseError, ParseErrorKind


@dataclass(frozen=True)
class Cursor:
    """
    Read position in the input text.

    Every parsing step takes a cursor and returns a new one, so a failed
    alternative backtracks by simply keeping the old cursor. `line` is
    1-based and updated incrementally as text is consumed.
    """

    text: str
    offset: int = 0
    line: int = 1

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    @property
    def rest(self) -> str:
        return self.text[self.offset:]

    def peek(self) -> str:
        """Next character, or "" at end of input."""
        return self.text[self.offset:self.offset + 1]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.offset)

    def advance(self, count: int) -> "Cursor":
        end = min(self.offset + count, len(self.text))
        newlines = self.text.count("\n", self.offset, end)
        return Cursor(self.text, end, self.line + newlines)

    def expect(self, literal: str, kind: ParseErrorKind) -> "Cursor":
        if not self.startswith(literal):
            raise self.error(kind, f"expected {literal!r}")
        return self.advance(len(literal))

    def line_end(self) -> int:
        """Offset of the end of the current line, excluding its terminator."""
        newline = self.text.find("\n", self.offset)
        if newline == -1:
            return len(self.text)
        if newline > self.offset and self.text[newline - 1] == "\r":
            return newline - 1
        return newline

    def read_line(self) -> tuple[str, str, "Cursor"]:
        """
        Split off the current line.

        Returns the line content, its terminator ("\\n", "\\r\\n" or "" at end
        of input) and the cursor positioned at the start of the next line.
        """
        end = self.line_end()
        content = self.text[self.offset:end]
        if self.text.startswith("\r\n", end):
            ending = "\r\n"
        elif self.text.startswith("\n", end):
            ending = "\n"
        else:
            ending = ""
        return content, ending, self.advance(len(content) + len(ending))

    def expect_line_ending(self) -> "Cursor":
        if self.startswith("\r\n"):
            return self.advance(2)
        if self.startswith("\n"):
            return self.advance(1)
        raise self.error(ParseErrorKind.LINE_ENDING, "expected end of line")

    @property
    def byte_offset(self) -> int:
        """`offset` measured in UTF-8 bytes rather than characters."""
        return len(self.text[:self.offset].encode("utf-8"))

    def error(self, kind: ParseErrorKind, message: str) -> ParseError:
        return ParseError(
            kind,
            message,
            line=self.line,
            offset=self.byte_offset,
            fragment=self.rest,
        )
