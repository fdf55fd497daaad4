"""Declaration checks over the symbol table."""

from __future__ import annotations

from typing import Iterable, Iterator

from .errors import CompileError, ErrorCode
from .symtab import ObjectKind, Symbol, SymbolTable, find_object
from .tokens import Token


class SemanticChecker:
    """Resolves identifiers against the scopes of a symbol table."""

    def __init__(self, symtab: SymbolTable) -> None:
        self.symtab = symtab

    def _candidates(self, name: str) -> Iterator[Symbol]:
        """Yield the visible object of that name in each scope, innermost first, then the global one."""
        scope = self.symtab.current_scope
        while scope is not None:
            obj = find_object(scope.objects, name)
            if obj is not None:
                yield obj
            scope = scope.outer
        obj = find_object(self.symtab.global_objects, name)
        if obj is not None:
            yield obj

    def lookup(self, name: str) -> Symbol | None:
        """Return the innermost visible object named ``name``, or None."""
        return next(self._candidates(name), None)

    def _find(self, token: Token, kinds: Iterable[ObjectKind], code: ErrorCode) -> Symbol:
        wanted = frozenset(kinds)
        for obj in self._candidates(token.string):
            if obj.kind in wanted:
                return obj
        raise CompileError(code, token.line_no, token.col_no)

    def check_fresh_ident(self, token: Token) -> None:
        """Raise if the name is already declared in the current scope."""
        scope = self.symtab.current_scope
        if scope is not None and find_object(scope.objects, token.string) is not None:
            raise CompileError(ErrorCode.DUPLICATE_IDENT, token.line_no, token.col_no)

    def check_declared_ident(self, token: Token) -> Symbol:
        obj = self.lookup(token.string)
        if obj is None:
            raise CompileError(ErrorCode.UNDECLARED_IDENT, token.line_no, token.col_no)
        return obj

    def check_declared_constant(self, token: Token) -> Symbol:
        return self._find(token, [ObjectKind.CONSTANT], ErrorCode.UNDECLARED_CONSTANT)

    def check_declared_type(self, token: Token) -> Symbol:
        return self._find(token, [ObjectKind.TYPE], ErrorCode.UNDECLARED_TYPE)

    def check_declared_variable(self, token: Token) -> Symbol:
        return self._find(token, [ObjectKind.VARIABLE], ErrorCode.UNDECLARED_VARIABLE)

    def check_declared_function(self, token: Token) -> Symbol:
        return self._find(token, [ObjectKind.FUNCTION], ErrorCode.UNDECLARED_FUNCTION)

    def check_declared_procedure(self, token: Token) -> Symbol:
        return self._find(token, [ObjectKind.PROCEDURE], ErrorCode.UNDECLARED_PROCEDURE)

    def check_declared_lvalue_ident(self, token: Token) -> Symbol:
        return self._find(
            token,
            [ObjectKind.FUNCTION, ObjectKind.PARAMETER, ObjectKind.VARIABLE],
            ErrorCode.UNDECLARED_IDENT,
        )