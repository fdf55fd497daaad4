"""Character classes used by the scanner."""

from __future__ import annotations

import string
from enum import Enum, auto


class CharCode(Enum):
    """The lexical class of a single source character."""

    SPACE = auto()
    LETTER = auto()
    DIGIT = auto()
    PLUS = auto()
    MINUS = auto()
    TIMES = auto()
    SLASH = auto()
    LT = auto()
    GT = auto()
    EXCLAMATION = auto()
    EQ = auto()
    COMMA = auto()
    PERIOD = auto()
    COLON = auto()
    SEMICOLON = auto()
    SINGLEQUOTE = auto()
    LPAR = auto()
    RPAR = auto()
    UNKNOWN = auto()


_SYMBOLS = {
    "!": CharCode.EXCLAMATION,
    "'": CharCode.SINGLEQUOTE,
    "(": CharCode.LPAR,
    ")": CharCode.RPAR,
    "*": CharCode.TIMES,
    "+": CharCode.PLUS,
    ",": CharCode.COMMA,
    "-": CharCode.MINUS,
    ".": CharCode.PERIOD,
    "/": CharCode.SLASH,
    ":": CharCode.COLON,
    ";": CharCode.SEMICOLON,
    "<": CharCode.LT,
    "=": CharCode.EQ,
    ">": CharCode.GT,
}

_TABLE: dict[str, CharCode] = {
    **{ch: CharCode.SPACE for ch in " \t\n\v\f\r"},
    **{ch: CharCode.LETTER for ch in string.ascii_letters},
    **{ch: CharCode.DIGIT for ch in string.digits},
    **_SYMBOLS,
}


def char_code(ch: str) -> CharCode:
    """Return the class of a one-character string."""
    return _TABLE.get(ch, CharCode.UNKNOWN)