"""Symbol table: types, constants, declared objects and nested scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class TypeClass(Enum):
    """The kinds of types in the language."""

    INT = auto()
    CHAR = auto()
    ARRAY = auto()


class ObjectKind(Enum):
    """The kinds of named objects a program can declare."""

    CONSTANT = auto()
    VARIABLE = auto()
    TYPE = auto()
    FUNCTION = auto()
    PROCEDURE = auto()
    PARAMETER = auto()
    PROGRAM = auto()


class ParamKind(Enum):
    """How a parameter is passed."""

    VALUE = auto()
    REFERENCE = auto()


@dataclass(frozen=True)
class Type:
    """A type; arrays carry their size and element type.

    Equality compares structure, element types included.
    """

    type_class: TypeClass
    array_size: int = 0
    element_type: Type | None = None


@dataclass(frozen=True)
class ConstantValue:
    """A constant: an integer, or a one-character string for a char."""

    type_class: TypeClass
    value: int | str


def make_int_type() -> Type:
    """Return the integer type."""
    return Type(TypeClass.INT)


def make_char_type() -> Type:
    """Return the char type."""
    return Type(TypeClass.CHAR)


def make_array_type(size: int, element_type: Type) -> Type:
    """Return an array type of ``size`` elements of ``element_type``."""
    return Type(TypeClass.ARRAY, size, element_type)


def make_int_constant(value: int) -> ConstantValue:
    """Return an integer constant."""
    return ConstantValue(TypeClass.INT, value)


def make_char_constant(ch: str) -> ConstantValue:
    """Return a char constant."""
    return ConstantValue(TypeClass.CHAR, ch)


@dataclass(eq=False)
class Scope:
    """A block: the objects declared in it, its owner and the enclosing scope."""

    owner: Symbol | None = field(default=None, repr=False)
    outer: Scope | None = field(default=None, repr=False)
    objects: list[Symbol] = field(default_factory=list)


@dataclass(eq=False)
class Symbol:
    """A declared object.

    ``value`` holds a constant's value; ``type`` the type of a variable or
    parameter, the actual type of a type name, or a function's return type.
    ``scope`` is the own block of a function, procedure or program;
    ``declared_in`` is the scope a variable was declared in.
    """

    name: str
    kind: ObjectKind
    value: ConstantValue | None = None
    type: Type | None = None
    scope: Scope | None = field(default=None, repr=False)
    declared_in: Scope | None = field(default=None, repr=False)
    params: list[Symbol] = field(default_factory=list, repr=False)
    param_kind: ParamKind | None = None
    owner: Symbol | None = field(default=None, repr=False)


def find_object(objects: list[Symbol], name: str) -> Symbol | None:
    """Return the first object whose name matches ``name`` ignoring case."""
    wanted = name.upper()
    return next((obj for obj in objects if obj.name.upper() == wanted), None)


class SymbolTable:
    """Holds the program, the current scope and the predefined objects."""

    def __init__(self) -> None:
        self.program: Symbol | None = None
        self.current_scope: Scope | None = None
        self.global_objects: list[Symbol] = []
        self.int_type = make_int_type()
        self.char_type = make_char_type()

        readc = self.create_function("READC")
        readc.type = make_char_type()
        self.global_objects.append(readc)

        readi = self.create_function("READI")
        readi.type = make_int_type()
        self.global_objects.append(readi)

        writei = self.create_procedure("WRITEI")
        param = self.create_parameter("i", ParamKind.VALUE, writei)
        param.type = make_int_type()
        writei.params.append(param)
        self.global_objects.append(writei)

        writec = self.create_procedure("WRITEC")
        param = self.create_parameter("ch", ParamKind.VALUE, writec)
        param.type = make_char_type()
        writec.params.append(param)
        self.global_objects.append(writec)

        self.global_objects.append(self.create_procedure("WRITELN"))

    def create_program(self, name: str) -> Symbol:
        """Create the program object with its outermost scope."""
        program = Symbol(name, ObjectKind.PROGRAM)
        program.scope = Scope(owner=program, outer=None)
        self.program = program
        return program

    def create_constant(self, name: str) -> Symbol:
        return Symbol(name, ObjectKind.CONSTANT)

    def create_type(self, name: str) -> Symbol:
        return Symbol(name, ObjectKind.TYPE)

    def create_variable(self, name: str) -> Symbol:
        return Symbol(name, ObjectKind.VARIABLE, declared_in=self.current_scope)

    def create_function(self, name: str) -> Symbol:
        function = Symbol(name, ObjectKind.FUNCTION)
        function.scope = Scope(owner=function, outer=self.current_scope)
        return function

    def create_procedure(self, name: str) -> Symbol:
        procedure = Symbol(name, ObjectKind.PROCEDURE)
        procedure.scope = Scope(owner=procedure, outer=self.current_scope)
        return procedure

    def create_parameter(self, name: str, kind: ParamKind, owner: Symbol) -> Symbol:
        return Symbol(name, ObjectKind.PARAMETER, param_kind=kind, owner=owner)

    def enter_block(self, scope: Scope) -> None:
        """Make ``scope`` the current scope."""
        self.current_scope = scope

    def exit_block(self) -> None:
        """Return to the scope enclosing the current one."""
        if self.current_scope is None:
            raise RuntimeError("no block to exit")
        self.current_scope = self.current_scope.outer

    def declare(self, obj: Symbol) -> None:
        """Add an object to the current scope; parameters also join their owner's list."""
        scope = self.current_scope
        if scope is None:
            raise RuntimeError("no block entered")
        if obj.kind is ObjectKind.PARAMETER:
            owner = scope.owner
            if owner is not None and owner.kind in (ObjectKind.FUNCTION, ObjectKind.PROCEDURE):
                owner.params.append(obj)
        scope.objects.append(obj)