# kpl

Tools for KPL, a small Pascal-like teaching language:

- a scanner that turns KPL source text into tokens (`kpl.scanner`),
- a symbol table with nested scopes (`kpl.symtab`) and checks for declared
  and duplicate identifiers (`kpl.semantics`), with text dumps of scopes
  (`kpl.debug`),
- an instruction set with a binary executable format (`kpl.instructions`)
  and a stack virtual machine that runs it (`kpl.vm`),
- two commands, `kplrun` and `kplscan`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

### Running a compiled program

```
kplrun program.bin [-s=stack_size] [-c=code_size] [-debug] [-dump]
```

- `-s=N` sets the stack size in words (default 2048).
- `-c=N` sets the largest number of instructions the program may hold
  (default 1024).
- `-debug` prints each instruction before it runs and, after each step, reads
  a command from standard input: `a` asks for a level and an offset and prints
  the absolute address, `m` asks for the same and prints the value stored
  there, `t` prints the top of the stack, `c` goes on without stopping and `h`
  halts. Any other character moves on to the next step.
- `-dump` prints the numbered program listing and exits without running it.

An unknown option prints the usage text. A file that cannot be read gives
`kplrun: Can't read input file!`; a file with an unknown opcode or more
instructions than the code size gives `kplrun: Wrong executable format!`.
A run that fails reports `Runtime error: Divide by zero!`,
`Runtime error: Stack overflow!` or `Runtime error: IO error!`; any other
machine error is reported as `Runtime error:` followed by its message.

### Listing the tokens of a source file

```
kplscan program.kpl
```

Each token goes on its own line as `line-column:TOKEN`; for the text
`PROGRAM example;` the first lines are `1-1:KW_PROGRAM` and
`1-9:TK_IDENT(example)`. The first lexical error is printed with its position
and scanning stops there.

## Library use

Tokenizing source text (identifiers and keywords come back in upper case):

```python
from kpl.scanner import tokenize, format_token

for token in tokenize("PROGRAM example; BEGIN END."):
    print(format_token(token))
```

A lexical error raises `kpl.errors.CompileError`, whose message has the form
`line-column:message`.

Building a program and running it on the virtual machine:

```python
import io
from kpl.instructions import CodeBlock, OpCode
from kpl.vm import VirtualMachine

code = CodeBlock(16)
code.emit(OpCode.LC, 0, 6)
code.emit(OpCode.LC, 0, 7)
code.emit(OpCode.ML, 0, 0)
code.emit(OpCode.WRI, 0, 0)
code.emit(OpCode.HL, 0, 0)

out = io.StringIO()
VirtualMachine(code, 64, io.StringIO(), out, False).run()
print(out.getvalue())   # 42
```

`CodeBlock.emit` raises `CodeBlockFull` once the block holds `max_size`
instructions. `CodeBlock.save` and `CodeBlock.load` write and read the binary
executable format that `kplrun` expects, and `CodeBlock.listing` gives the
same listing as `kplrun -dump`. `VirtualMachine.run` raises
`DivideByZeroError`, `StackOverflowError` or another `VMError` on a runtime
error.

Semantic checks go through `kpl.symtab.SymbolTable`, which starts with the
predefined `READC`, `READI`, `WRITEI`, `WRITEC` and `WRITELN`, and
`kpl.semantics.SemanticChecker`, whose `check_*` methods take the token of
the identifier. An undeclared or duplicate identifier raises `CompileError`.
`kpl.debug.format_scope` and `format_object` return a scope's contents as
indented text.

## What the package does not do

There is no parser and no code generator: the package cannot turn KPL source
into an executable. Programs for `kplrun` have to be built with
`CodeBlock.emit` and written out with `CodeBlock.save`.