from unipatch.errors import ParseError, ParseErrorKind

DECODE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "0": "\0",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

ENCODE_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

# Characters that may not appear unescaped between quotes.
MUST_ESCAPE = frozenset(ENCODE_ESCAPES)

# Characters that force a string to be quoted when rendered.
NEEDS_QUOTING = frozenset(" \t\r\n\"\0\\")


def unescape(body: str) -> str:
    """Decode the text between the quotes of a quoted token.

    Raises ParseError (kind ESCAPE) on an unknown escape or on a character
    that should have been escaped; `offset` is a character index into `body`.
    """
    out: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == "\\":
            nxt = body[i + 1:i + 2]
            if nxt not in DECODE_ESCAPES:
                raise ParseError(
                    ParseErrorKind.ESCAPE,
                    f"invalid escape sequence \\{nxt}",
                    offset=i,
                    fragment=body[i:],
                )
            out.append(DECODE_ESCAPES[nxt])
            i += 2
            continue
        if ch in MUST_ESCAPE:
            raise ParseError(
                ParseErrorKind.ESCAPE,
                f"unescaped {ch!r} inside quoted string",
                offset=i,
                fragment=body[i:],
            )
        out.append(ch)
        i += 1
    return "".join(out)


def needs_quoting(text: str) -> bool:
    return any(ch in NEEDS_QUOTING for ch in text)


def quote(text: str) -> str:
    return '"' + "".join(ENCODE_ESCAPES.get(ch, ch) for ch in text) + '"'


def quote_if_needed(text: str) -> str:
    if needs_quoting(text):
        return quote(text)
    return text
