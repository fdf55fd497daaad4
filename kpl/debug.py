"""Text dumps of types, constants and scopes."""

from __future__ import annotations

from .symtab import ConstantValue, ObjectKind, ParamKind, Scope, Symbol, Type, TypeClass


def format_type(type_: Type) -> str:
    """Return the short form of a type, e.g. ``Arr(3,Int)``."""
    if type_.type_class is TypeClass.INT:
        return "Int"
    if type_.type_class is TypeClass.CHAR:
        return "Char"
    return f"Arr({type_.array_size},{format_type(type_.element_type)})"


def format_constant(value: ConstantValue) -> str:
    """Return a constant as written in a dump."""
    if value.type_class is TypeClass.INT:
        return str(value.value)
    if value.type_class is TypeClass.CHAR:
        return f"'{value.value}'"
    return ""


def format_object(obj: Symbol, indent: int = 0) -> str:
    """Return one object, and for blocks their nested scope, indented by ``indent`` spaces."""
    pad = " " * indent
    kind = obj.kind
    if kind is ObjectKind.CONSTANT:
        return f"{pad}Const {obj.name} = {format_constant(obj.value)}"
    if kind is ObjectKind.TYPE:
        return f"{pad}Type {obj.name} = {format_type(obj.type)}"
    if kind is ObjectKind.VARIABLE:
        return f"{pad}Var {obj.name} : {format_type(obj.type)}"
    if kind is ObjectKind.PARAMETER:
        label = "Param" if obj.param_kind is ParamKind.VALUE else "Param VAR"
        return f"{pad}{label} {obj.name} : {format_type(obj.type)}"
    if kind is ObjectKind.FUNCTION:
        header = f"{pad}Function {obj.name} : {format_type(obj.type)}\n"
        return header + format_scope(obj.scope, indent + 4)
    if kind is ObjectKind.PROCEDURE:
        return f"{pad}Procedure {obj.name}\n" + format_scope(obj.scope, indent + 4)
    if kind is ObjectKind.PROGRAM:
        return f"{pad}Program {obj.name}\n" + format_scope(obj.scope, indent + 4)
    return ""


def format_scope(scope: Scope, indent: int = 0) -> str:
    """Return every object of a scope, each followed by a line break."""
    return "".join(format_object(obj, indent) + "\n" for obj in scope.objects)