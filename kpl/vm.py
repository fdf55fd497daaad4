"""The KPL stack machine."""

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from .instructions import Instruction, OpCode

TRUE = 1
FALSE = 0


class VMError(Exception):
    """A runtime error of the machine."""


class DivideByZeroError(VMError):
    """Raised on division by zero."""


class StackOverflowError(VMError):
    """Raised when the stack or a memory access leaves the stack area."""


def _wrap(value: int) -> int:
    """Reduce to a signed 32-bit machine word."""
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _truncating_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


_COMPARISONS = {
    OpCode.EQ: lambda a, b: a == b,
    OpCode.NE: lambda a, b: a != b,
    OpCode.GT: lambda a, b: a > b,
    OpCode.LT: lambda a, b: a < b,
    OpCode.GE: lambda a, b: a >= b,
    OpCode.LE: lambda a, b: a <= b,
}

_ARITHMETIC = {
    OpCode.AD: lambda a, b: a + b,
    OpCode.SB: lambda a, b: a - b,
    OpCode.ML: lambda a, b: a * b,
}


class VirtualMachine:
    """Executes a sequence of instructions on a word stack.

    A frame starts at ``frame_base``: the result slot, the dynamic link,
    the return address and the static link, in that order.
    """

    def __init__(
        self,
        code: Sequence[Instruction],
        stack_size: int = 2048,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        debug: bool = False,
    ) -> None:
        self.code = code
        self.stack = [0] * stack_size
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.debug = debug
        self._pushback = ""
        self.reset()

    def reset(self) -> None:
        """Put the registers back to their starting values."""
        self.pc = 0
        self.top = -1
        self.frame_base = 0
        self._running = False

    def base(self, level: int) -> int:
        """Return the frame base ``level`` static links up from the current frame."""
        current = self.frame_base
        for _ in range(level):
            current = self._load(current + 3)
        return current

    def dump_memory(self) -> str:
        """Return the used part of the stack as text."""
        lines = [f"  {i:4d}: {self.stack[i]}\n" for i in range(self.top + 1)]
        return "Start dumping...\n" + "".join(lines) + "Finish dumping!\n"

    # -- memory -----------------------------------------------------------

    def _load(self, address: int) -> int:
        if not 0 <= address < len(self.stack):
            raise StackOverflowError(f"memory access out of range: {address}")
        return self.stack[address]

    def _store(self, address: int, value: int) -> None:
        if not 0 <= address < len(self.stack):
            raise StackOverflowError(f"memory access out of range: {address}")
        self.stack[address] = value

    def _check(self) -> bool:
        """Raise if the top passed the stack end; tell whether the stack is non-empty."""
        if self.top >= len(self.stack):
            raise StackOverflowError("stack overflow")
        return self.top >= 0

    # -- input ------------------------------------------------------------

    def _getc(self) -> str:
        if self._pushback:
            ch, self._pushback = self._pushback, ""
            return ch
        return self.stdin.read(1)

    def _read_char(self) -> int:
        ch = self._getc()
        if not ch:
            raise VMError("IO error: end of input")
        return ord(ch)

    def _read_int(self) -> int:
        ch = self._getc()
        while ch and ch.isspace():
            ch = self._getc()
        text = ""
        if ch in ("+", "-"):
            text, ch = ch, self._getc()
        while ch and ch in "0123456789":
            text += ch
            ch = self._getc()
        self._pushback = ch
        if not text.lstrip("+-"):
            raise VMError("IO error: integer expected")
        return _wrap(int(text))

    def _write(self, text: str) -> None:
        self.stdout.write(text)

    # -- execution --------------------------------------------------------

    def run(self) -> None:
        """Execute from the current pc until the program halts."""
        count = 0
        self._running = True
        while self._running:
            if not 0 <= self.pc < len(self.code):
                self._running = False
                raise VMError(f"program counter out of range: {self.pc}")
            instruction = self.code[self.pc]
            if self.debug:
                self._write(f"{count:6d}-{self.pc:<4d}:  {instruction}\n")
                count += 1
            try:
                self._execute(instruction)
            except VMError:
                self._running = False
                raise
            if self.debug:
                self._interact()
            self.pc += 1

    def _execute(self, instruction: Instruction) -> None:
        op, p, q = instruction.op, instruction.p, instruction.q
        match op:
            case OpCode.LA:
                self.top += 1
                if self._check():
                    self._store(self.top, self.base(p) + q)
            case OpCode.LV:
                self.top += 1
                if self._check():
                    self._store(self.top, self._load(self.base(p) + q))
            case OpCode.LC:
                self.top += 1
                if self._check():
                    self._store(self.top, q)
            case OpCode.LI:
                self._store(self.top, self._load(self._load(self.top)))
            case OpCode.INT:
                self.top += q
                self._check()
            case OpCode.DCT:
                self.top -= q
                self._check()
            case OpCode.J:
                self.pc = q - 1
            case OpCode.FJ:
                if self._load(self.top) == FALSE:
                    self.pc = q - 1
                self.top -= 1
                self._check()
            case OpCode.HL:
                self._running = False
            case OpCode.ST:
                self._store(self._load(self.top - 1), self._load(self.top))
                self.top -= 2
                self._check()
            case OpCode.CALL:
                t = self.top
                self._store(t + 2, self.frame_base)
                self._store(t + 3, self.pc)
                self._store(t + 4, self.base(p))
                self.frame_base = t + 1
                self.pc = q - 1
            case OpCode.EP | OpCode.EF:
                b = self.frame_base
                self.top = b - 1 if op is OpCode.EP else b
                self.pc = self._load(b + 2)
                self.frame_base = self._load(b + 1)
            case OpCode.RC:
                self.top += 1
                self._store(self.top, self._read_char())
                self._check()
            case OpCode.RI:
                self.top += 1
                self._store(self.top, self._read_int())
                self._check()
            case OpCode.WRC:
                self._write(chr(self._load(self.top) & 0xFF))
                self.top -= 1
                self._check()
            case OpCode.WRI:
                self._write(str(self._load(self.top)))
                self.top -= 1
                self._check()
            case OpCode.WLN:
                self._write("\n")
            case OpCode.AD | OpCode.SB | OpCode.ML:
                self.top -= 1
                if self._check():
                    a, b = self._load(self.top), self._load(self.top + 1)
                    self._store(self.top, _wrap(_ARITHMETIC[op](a, b)))
            case OpCode.DV:
                self.top -= 1
                if self._check():
                    divisor = self._load(self.top + 1)
                    if divisor == 0:
                        raise DivideByZeroError("divide by zero")
                    self._store(self.top, _wrap(_truncating_div(self._load(self.top), divisor)))
            case OpCode.NEG:
                self._store(self.top, _wrap(-self._load(self.top)))
            case OpCode.CV:
                self._store(self.top + 1, self._load(self.top))
                self.top += 1
                self._check()
            case OpCode.EQ | OpCode.NE | OpCode.GT | OpCode.LT | OpCode.GE | OpCode.LE:
                self.top -= 1
                a, b = self._load(self.top), self._load(self.top + 1)
                self._store(self.top, TRUE if _COMPARISONS[op](a, b) else FALSE)
                self._check()
            case OpCode.BP:
                self.debug = True

    def _interact(self) -> None:
        """Handle debugger commands read from the input after a step."""
        while True:
            command = self._getc().lower()
            if command == "a":
                self._write("\nEnter memory location (level, offset):")
                level, offset = self._read_int(), self._read_int()
                self._write(f"Absolute address = {self.base(level) + offset}\n")
            elif command == "m":
                self._write("\nEnter memory location (level, offset):")
                level, offset = self._read_int(), self._read_int()
                self._write(f"Value = {self._load(self.base(level) + offset)}\n")
            elif command == "t":
                self._write(f"Top ({self.top}) = {self._load(self.top)}\n")
            else:
                if command == "c":
                    self.debug = False
                elif command == "h":
                    self._running = False
                return