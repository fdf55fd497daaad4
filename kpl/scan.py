"""Stand-alone token lister: prints every token of a KPL source file."""

from __future__ import annotations

import sys
from typing import Iterator, TextIO

from .charcode import CharCode, char_code
from .errors import CompileError
from .reader import SourceReader, open_source
from .scanner import format_token
from .tokens import Token, TokenType, check_keyword

MAX_IDENT_LEN = 15
MAX_NUMBER_LEN = 10

_MSG_END_OF_COMMENT = "End of comment expected!"
_MSG_IDENT_TOO_LONG = "Identification too long!"
_MSG_NUMBER_TOO_LONG = "Value of integer number exceeds the range!"
_MSG_INVALID_CHAR_CONSTANT = "Invalid const char!"
_MSG_INVALID_SYMBOL = "Invalid symbol!"

_SINGLE = {
    CharCode.PLUS: TokenType.SB_PLUS,
    CharCode.MINUS: TokenType.SB_MINUS,
    CharCode.TIMES: TokenType.SB_TIMES,
    CharCode.SLASH: TokenType.SB_SLASH,
    CharCode.EQ: TokenType.SB_EQ,
    CharCode.COMMA: TokenType.SB_COMMA,
    CharCode.SEMICOLON: TokenType.SB_SEMICOLON,
    CharCode.RPAR: TokenType.SB_RPAR,
}

# First character -> (second character class, two-character token, one-character token)
_PAIRS = {
    CharCode.LT: (CharCode.EQ, TokenType.SB_LE, TokenType.SB_LT),
    CharCode.GT: (CharCode.EQ, TokenType.SB_GE, TokenType.SB_GT),
    CharCode.COLON: (CharCode.EQ, TokenType.SB_ASSIGN, TokenType.SB_COLON),
    CharCode.PERIOD: (CharCode.RPAR, TokenType.SB_RSEL, TokenType.SB_PERIOD),
}


class _ScanError(CompileError):
    """A lexical error reported with the token lister's own wording."""

    def __init__(self, message: str, line_no: int, col_no: int) -> None:
        self.code = None
        self.message = message
        self.line_no = line_no
        self.col_no = col_no
        Exception.__init__(self, str(self))

    def __str__(self) -> str:
        return f"{self.line_no}-{self.col_no}:{self.message}"


def _current_code(reader: SourceReader) -> CharCode | None:
    ch = reader.current_char
    return None if ch is None else char_code(ch)


def _take(reader: SourceReader, classes) -> str:
    chars = []
    while _current_code(reader) in classes:
        chars.append(reader.current_char)
        reader.read_char()
    return "".join(chars)


def _skip_comment(reader: SourceReader) -> None:
    """Skip a comment body; the reader stands on the '*' that opened it."""
    while True:
        reader.read_char()
        while reader.current_char is not None and char_code(reader.current_char) is not CharCode.TIMES:
            reader.read_char()
        if reader.current_char is None:
            raise _ScanError(_MSG_END_OF_COMMENT, reader.line_no, reader.col_no)
        reader.read_char()
        if reader.current_char is None:
            raise _ScanError(_MSG_END_OF_COMMENT, reader.line_no, reader.col_no)
        if char_code(reader.current_char) is CharCode.RPAR:
            reader.read_char()
            return


def _tokens(reader: SourceReader) -> Iterator[Token]:
    """Yield the tokens of the reader's text, ending with TK_EOF."""
    while True:
        code = _current_code(reader)
        line, col = reader.line_no, reader.col_no
        if code is None:
            yield Token(TokenType.TK_EOF, line, col)
            return
        if code is CharCode.SPACE:
            reader.read_char()
        elif code is CharCode.LETTER:
            word = _take(reader, (CharCode.LETTER, CharCode.DIGIT))
            if len(word) > MAX_IDENT_LEN:
                raise _ScanError(_MSG_IDENT_TOO_LONG, line, col)
            kind = check_keyword(word.upper())
            if kind is TokenType.TK_NONE:
                kind = TokenType.TK_IDENT
            yield Token(kind, line, col, word)
        elif code is CharCode.DIGIT:
            digits = _take(reader, (CharCode.DIGIT,))
            if len(digits) > MAX_NUMBER_LEN:
                raise _ScanError(_MSG_NUMBER_TOO_LONG, line, col)
            yield Token(TokenType.TK_NUMBER, line, col, digits, int(digits))
        elif code in _SINGLE:
            reader.read_char()
            yield Token(_SINGLE[code], line, col)
        elif code in _PAIRS:
            second, double, single = _PAIRS[code]
            reader.read_char()
            if _current_code(reader) is second:
                reader.read_char()
                yield Token(double, line, col)
            else:
                yield Token(single, line, col)
        elif code is CharCode.EXCLAMATION:
            reader.read_char()
            if _current_code(reader) is not CharCode.EQ:
                raise _ScanError(_MSG_INVALID_SYMBOL, line, col)
            reader.read_char()
            yield Token(TokenType.SB_NEQ, line, col)
        elif code is CharCode.SINGLEQUOTE:
            ch = reader.read_char()
            if ch is None or not 32 <= ord(ch) <= 126:
                raise _ScanError(_MSG_INVALID_CHAR_CONSTANT, line, col)
            reader.read_char()
            if _current_code(reader) is not CharCode.SINGLEQUOTE:
                raise _ScanError(_MSG_INVALID_CHAR_CONSTANT, line, col)
            reader.read_char()
            yield Token(TokenType.TK_CHAR, line, col, ch)
        elif code is CharCode.LPAR:
            reader.read_char()
            following = _current_code(reader)
            if following is CharCode.PERIOD:
                reader.read_char()
                yield Token(TokenType.SB_LSEL, line, col)
            elif following is CharCode.TIMES:
                _skip_comment(reader)
            else:
                yield Token(TokenType.SB_LPAR, line, col)
        else:
            raise _ScanError(_MSG_INVALID_SYMBOL, line, col)


def scan_file(path, out: TextIO | None = None) -> None:
    """Write one line per token of the file to ``out``.

    Raises OSError if the file cannot be read and CompileError on the first
    lexical error; tokens before the error have already been written.
    """
    out = sys.stdout if out is None else out
    reader = open_source(path)
    for token in _tokens(reader):
        if token.token_type is TokenType.TK_EOF:
            break
        out.write(format_token(token) + "\n")


def main(argv=None) -> int:
    """List the tokens of the file named first in ``argv``; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout
    if not args:
        out.write("scanner: no input file.\n")
        return -1
    try:
        scan_file(args[0], out)
    except OSError:
        out.write("Can't read input file!\n")
        return -1
    except CompileError as exc:
        out.write(f"{exc}\n")
        return -1
    return 0


if __name__ == "__main__":
    sys.exit(main())