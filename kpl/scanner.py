"""Lexical analysis of KPL source text."""

from __future__ import annotations

from typing import Iterator

from .charcode import CharCode, char_code
from .errors import CompileError, ErrorCode
from .reader import SourceReader
from .tokens import MAX_IDENT_LEN, Token, TokenType, check_keyword

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

_WORD_CHARS = (CharCode.LETTER, CharCode.DIGIT)


class Scanner:
    """Turns the characters of a reader into tokens."""

    def __init__(self, reader: SourceReader) -> None:
        self.reader = reader

    def _code(self) -> CharCode | None:
        ch = self.reader.current_char
        return None if ch is None else char_code(ch)

    def _skip_blank(self) -> None:
        while self._code() is CharCode.SPACE:
            self.reader.read_char()

    def _skip_comment(self) -> None:
        reader = self.reader
        state = 0
        while reader.current_char is not None and state < 2:
            code = char_code(reader.current_char)
            if code is CharCode.TIMES:
                state = 1
            elif code is CharCode.RPAR:
                state = 2 if state == 1 else 0
            else:
                state = 0
            reader.read_char()
        if state != 2:
            raise CompileError(ErrorCode.END_OF_COMMENT, reader.line_no, reader.col_no)

    def _read_ident_keyword(self) -> Token:
        reader = self.reader
        line, col = reader.line_no, reader.col_no
        chars = [reader.current_char.upper()]
        reader.read_char()
        while self._code() in _WORD_CHARS:
            chars.append(reader.current_char.upper())
            reader.read_char()
        if len(chars) > MAX_IDENT_LEN:
            raise CompileError(ErrorCode.IDENT_TOO_LONG, line, col)
        word = "".join(chars)
        token_type = check_keyword(word)
        if token_type is TokenType.TK_NONE:
            token_type = TokenType.TK_IDENT
        return Token(token_type, line, col, word)

    def _read_number(self) -> Token:
        reader = self.reader
        line, col = reader.line_no, reader.col_no
        digits = []
        while self._code() is CharCode.DIGIT:
            digits.append(reader.current_char)
            reader.read_char()
        text = "".join(digits)
        return Token(TokenType.TK_NUMBER, line, col, text, int(text))

    def _read_const_char(self) -> Token:
        reader = self.reader
        line, col = reader.line_no, reader.col_no
        ch = reader.read_char()
        if ch is None:
            raise CompileError(ErrorCode.INVALID_CONSTANT_CHAR, line, col)
        if reader.read_char() is None or self._code() is not CharCode.SINGLEQUOTE:
            raise CompileError(ErrorCode.INVALID_CONSTANT_CHAR, line, col)
        reader.read_char()
        return Token(TokenType.TK_CHAR, line, col, ch)

    def next_token(self) -> Token:
        """Return the next token; raises CompileError on a lexical error."""
        reader = self.reader
        while True:
            code = self._code()
            line, col = reader.line_no, reader.col_no
            if code is None:
                return Token(TokenType.TK_EOF, line, col)
            if code is CharCode.SPACE:
                self._skip_blank()
                continue
            if code is CharCode.LETTER:
                return self._read_ident_keyword()
            if code is CharCode.DIGIT:
                return self._read_number()
            if code is CharCode.SINGLEQUOTE:
                return self._read_const_char()
            if code in _SINGLE:
                reader.read_char()
                return Token(_SINGLE[code], line, col)
            if code in _PAIRS:
                second, double, single = _PAIRS[code]
                reader.read_char()
                if self._code() is second:
                    reader.read_char()
                    return Token(double, line, col)
                return Token(single, line, col)
            if code is CharCode.EXCLAMATION:
                reader.read_char()
                if self._code() is CharCode.EQ:
                    reader.read_char()
                    return Token(TokenType.SB_NEQ, line, col)
                raise CompileError(ErrorCode.INVALID_SYMBOL, line, col)
            if code is CharCode.LPAR:
                reader.read_char()
                following = self._code()
                if following is CharCode.PERIOD:
                    reader.read_char()
                    return Token(TokenType.SB_LSEL, line, col)
                if following is CharCode.TIMES:
                    reader.read_char()
                    self._skip_comment()
                    continue
                return Token(TokenType.SB_LPAR, line, col)
            raise CompileError(ErrorCode.INVALID_SYMBOL, line, col)

    def next_valid_token(self) -> Token:
        """Return the next token that is not TK_NONE."""
        token = self.next_token()
        while token.token_type is TokenType.TK_NONE:
            token = self.next_token()
        return token

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the end-of-file token."""
        while True:
            token = self.next_token()
            yield token
            if token.token_type is TokenType.TK_EOF:
                return


def format_token(token: Token) -> str:
    """Return the one-line listing form of a token."""
    kind = token.token_type
    if kind in (TokenType.TK_IDENT, TokenType.TK_NUMBER):
        body = f"{kind.name}({token.string})"
    elif kind is TokenType.TK_CHAR:
        body = f"{kind.name}('{token.string}')"
    else:
        body = kind.name
    return f"{token.line_no}-{token.col_no}:{body}"


def tokenize(text: str) -> list[Token]:
    """Scan a whole text and return its tokens, ending with TK_EOF."""
    return list(Scanner(SourceReader(text)))