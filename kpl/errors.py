"""Compile-time errors and their messages."""

from __future__ import annotations

from enum import Enum, auto

from .tokens import TokenType, token_description


class ErrorCode(Enum):
    """The kinds of compile-time errors."""

    END_OF_COMMENT = auto()
    IDENT_TOO_LONG = auto()
    INVALID_CONSTANT_CHAR = auto()
    INVALID_SYMBOL = auto()
    INVALID_IDENT = auto()
    INVALID_CONSTANT = auto()
    INVALID_TYPE = auto()
    INVALID_BASICTYPE = auto()
    INVALID_VARIABLE = auto()
    INVALID_FUNCTION = auto()
    INVALID_PROCEDURE = auto()
    INVALID_PARAMETER = auto()
    INVALID_STATEMENT = auto()
    INVALID_COMPARATOR = auto()
    INVALID_EXPRESSION = auto()
    INVALID_TERM = auto()
    INVALID_FACTOR = auto()
    INVALID_LVALUE = auto()
    INVALID_ARGUMENTS = auto()
    UNDECLARED_IDENT = auto()
    UNDECLARED_CONSTANT = auto()
    UNDECLARED_INT_CONSTANT = auto()
    UNDECLARED_TYPE = auto()
    UNDECLARED_VARIABLE = auto()
    UNDECLARED_FUNCTION = auto()
    UNDECLARED_PROCEDURE = auto()
    DUPLICATE_IDENT = auto()
    TYPE_INCONSISTENCY = auto()
    PARAMETERS_ARGUMENTS_INCONSISTENCY = auto()
    NON_LVALUE_ASSIGNST = auto()
    FACTOR_CONST_EXPECTED = auto()
    FACTOR_VARIABLE_EXPECTED = auto()
    FACTOR_FUNCTION_EXPECTED = auto()


_MESSAGES = {
    ErrorCode.END_OF_COMMENT: "End of comment expected.",
    ErrorCode.IDENT_TOO_LONG: "Identifier too long.",
    ErrorCode.INVALID_CONSTANT_CHAR: "Invalid char constant.",
    ErrorCode.INVALID_SYMBOL: "Invalid symbol.",
    ErrorCode.INVALID_IDENT: "An identifier expected.",
    ErrorCode.INVALID_CONSTANT: "A constant expected.",
    ErrorCode.INVALID_TYPE: "A type expected.",
    ErrorCode.INVALID_BASICTYPE: "A basic type expected.",
    ErrorCode.INVALID_VARIABLE: "A variable expected.",
    ErrorCode.INVALID_FUNCTION: "A function identifier expected.",
    ErrorCode.INVALID_PROCEDURE: "A procedure identifier expected.",
    ErrorCode.INVALID_PARAMETER: "A parameter expected.",
    ErrorCode.INVALID_STATEMENT: "Invalid statement.",
    ErrorCode.INVALID_COMPARATOR: "A comparator expected.",
    ErrorCode.INVALID_EXPRESSION: "Invalid expression.",
    ErrorCode.INVALID_TERM: "Invalid term.",
    ErrorCode.INVALID_FACTOR: "Invalid factor.",
    ErrorCode.INVALID_LVALUE: "Invalid lvalue in assignment.",
    ErrorCode.INVALID_ARGUMENTS: "Wrong arguments.",
    ErrorCode.UNDECLARED_IDENT: "Undeclared identifier.",
    ErrorCode.UNDECLARED_CONSTANT: "Undeclared constant.",
    ErrorCode.UNDECLARED_INT_CONSTANT: "Undeclared integer constant.",
    ErrorCode.UNDECLARED_TYPE: "Undeclared type.",
    ErrorCode.UNDECLARED_VARIABLE: "Undeclared variable.",
    ErrorCode.UNDECLARED_FUNCTION: "Undeclared function.",
    ErrorCode.UNDECLARED_PROCEDURE: "Undeclared procedure.",
    ErrorCode.DUPLICATE_IDENT: "Duplicate identifier.",
    ErrorCode.TYPE_INCONSISTENCY: "Type inconsistency",
    ErrorCode.PARAMETERS_ARGUMENTS_INCONSISTENCY: (
        "The number of arguments and the number of parameters are inconsistent."
    ),
    ErrorCode.NON_LVALUE_ASSIGNST: "Non-lvalue in assignment",
}


def error_message(code: ErrorCode) -> str:
    """Return the message for an error code, or an empty string if it has none."""
    return _MESSAGES.get(code, "")


class CompileError(Exception):
    """An error found in the source text, with its position."""

    def __init__(self, code: ErrorCode, line_no: int, col_no: int) -> None:
        self.code = code
        self.line_no = line_no
        self.col_no = col_no
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.line_no}-{self.col_no}:{error_message(self.code)}"


class MissingTokenError(CompileError):
    """Raised when the parser expects a token that is not there."""

    def __init__(self, token_type: TokenType, line_no: int, col_no: int) -> None:
        self.token_type = token_type
        self.code = None
        self.line_no = line_no
        self.col_no = col_no
        Exception.__init__(self, str(self))

    def __str__(self) -> str:
        return f"{self.line_no}-{self.col_no}:Missing {token_description(self.token_type)}"