import string

import pytest

from kpl.charcode import CharCode, char_code


@pytest.mark.parametrize("ch", list(string.ascii_letters))
def test_letters(ch):
    assert char_code(ch) is CharCode.LETTER


@pytest.mark.parametrize("ch", list(string.digits))
def test_digits(ch):
    assert char_code(ch) is CharCode.DIGIT


@pytest.mark.parametrize("ch", [" ", "\t", "\n", "\v", "\f", "\r"])
def test_whitespace(ch):
    assert char_code(ch) is CharCode.SPACE


@pytest.mark.parametrize(
    "ch, expected",
    [
        ("+", CharCode.PLUS),
        ("-", CharCode.MINUS),
        ("*", CharCode.TIMES),
        ("/", CharCode.SLASH),
        ("<", CharCode.LT),
        (">", CharCode.GT),
        ("!", CharCode.EXCLAMATION),
        ("=", CharCode.EQ),
        (",", CharCode.COMMA),
        (".", CharCode.PERIOD),
        (":", CharCode.COLON),
        (";", CharCode.SEMICOLON),
        ("'", CharCode.SINGLEQUOTE),
        ("(", CharCode.LPAR),
        (")", CharCode.RPAR),
    ],
)
def test_symbols(ch, expected):
    assert char_code(ch) is expected


@pytest.mark.parametrize("ch", ["?", "_", "\x00", "\x80", "\xe9", "\u0101", "@", "#"])
def test_unknown(ch):
    assert char_code(ch) is CharCode.UNKNOWN