"""Instruction set and code blocks of the KPL stack machine."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import BinaryIO, Iterator


class OpCode(IntEnum):
    """Operation codes. The numeric values are those of the executable format."""

    LA = 0     # Load Address:    t := t + 1; s[t] := base(p) + q
    LV = 1     # Load Value:      t := t + 1; s[t] := s[base(p) + q]
    LC = 2     # Load Constant:   t := t + 1; s[t] := q
    LI = 3     # Load Indirect:   s[t] := s[s[t]]
    INT = 4    # Increment t:     t := t + q
    DCT = 5    # Decrement t:     t := t - q
    J = 6      # Jump:            pc := q
    FJ = 7     # False Jump:      if s[t] = 0 then pc := q; t := t - 1
    HL = 8     # Halt
    ST = 9     # Store:           s[s[t-1]] := s[t]; t := t - 2
    CALL = 10  # Call
    EP = 11    # Exit Procedure
    EF = 12    # Exit Function
    RC = 13    # Read Char
    RI = 14    # Read Integer
    WRC = 15   # Write Char
    WRI = 16   # Write Integer
    WLN = 17   # Write a line break
    AD = 18
    SB = 19
    ML = 20
    DV = 21
    NEG = 22
    CV = 23    # Copy top
    EQ = 24
    NE = 25
    GT = 26
    LT = 27
    GE = 28
    LE = 29
    BP = 30    # Break point


_TWO_OPERANDS = frozenset({OpCode.LA, OpCode.LV, OpCode.CALL})
_ONE_OPERAND = frozenset({OpCode.LC, OpCode.INT, OpCode.DCT, OpCode.J, OpCode.FJ})

# One record per instruction: opcode, p, q as 32-bit little-endian integers.
_RECORD = struct.Struct("<3i")


@dataclass(frozen=True)
class Instruction:
    """A single machine instruction with its two operands."""

    op: OpCode
    p: int = 0
    q: int = 0

    def __str__(self) -> str:
        if self.op in _TWO_OPERANDS:
            return f"{self.op.name} {self.p},{self.q}"
        if self.op in _ONE_OPERAND:
            return f"{self.op.name} {self.q}"
        return self.op.name


class CodeBlockFull(Exception):
    """Raised when a code block cannot take any more instructions."""


class CodeBlock:
    """A bounded, growable sequence of instructions."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self._code: list[Instruction] = []

    def emit(self, op: OpCode, p: int = 0, q: int = 0) -> Instruction:
        """Append an instruction and return it."""
        if len(self._code) >= self.max_size:
            raise CodeBlockFull(f"code block is full ({self.max_size} instructions)")
        instruction = Instruction(OpCode(op), p, q)
        self._code.append(instruction)
        return instruction

    def __len__(self) -> int:
        return len(self._code)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._code)

    def __getitem__(self, index):
        return self._code[index]

    def listing(self) -> str:
        """Return a numbered listing, one instruction per line."""
        return "".join(f"{address}:  {instruction}\n" for address, instruction in enumerate(self._code))

    def load(self, stream: BinaryIO) -> None:
        """Replace the contents with the instructions read from a binary stream."""
        data = stream.read()
        usable = len(data) - len(data) % _RECORD.size
        code = []
        for op, p, q in _RECORD.iter_unpack(data[:usable]):
            try:
                opcode = OpCode(op)
            except ValueError:
                raise ValueError(f"unknown opcode {op} in executable") from None
            code.append(Instruction(opcode, p, q))
        if len(code) > self.max_size:
            raise CodeBlockFull(
                f"executable holds {len(code)} instructions, more than {self.max_size}"
            )
        self._code = code

    def save(self, stream: BinaryIO) -> None:
        """Write the instructions to a binary stream."""
        stream.write(b"".join(_RECORD.pack(i.op, i.p, i.q) for i in self._code))