import pytest

from unipatch.errors import ParseError, ParseErrorKind
from unipatch.parsing.escapes import needs_quoting, quote, quote_if_needed, unescape


def test_unescape_quotes():
    assert unescape(r"file \"name\"") == 'file "name"'


def test_unescape_all_sequences():
    assert unescape(r"a\\b\0c\nd\re\tf") == "a\\b\0c\nd\re\tf"


def test_unescape_plain_text_unchanged():
    assert unescape("My Work/after.py") == "My Work/after.py"


def test_unescape_unknown_escape_fails():
    with pytest.raises(ParseError) as exc_info:
        unescape(r"a\qb")
    assert exc_info.value.kind == ParseErrorKind.ESCAPE
    assert exc_info.value.offset == 1


def test_unescape_trailing_backslash_fails():
    with pytest.raises(ParseError):
        unescape("abc\\")


@pytest.mark.parametrize("raw", ["a\tb", 'a"b', "a\nb", "a\rb", "a\0b"])
def test_unescape_rejects_unescaped_specials(raw):
    with pytest.raises(ParseError) as exc_info:
        unescape(raw)
    assert exc_info.value.kind == ParseErrorKind.ESCAPE


@pytest.mark.parametrize("special", [" ", "\t", "\r", "\n", '"', "\0", "\\"])
def test_needs_quoting_special_characters(special):
    assert needs_quoting(f"a{special}b")


def test_needs_quoting_plain_path():
    assert not needs_quoting("path/to/after.py")


def test_quote_escapes_but_keeps_spaces():
    assert quote('a "b"\n\tc\\') == r'"a \"b\"\n\tc\\"'


def test_quote_if_needed():
    assert quote_if_needed("My Work/after.py") == '"My Work/after.py"'
    assert quote_if_needed("before.py") == "before.py"
