"""Command that loads a compiled KPL executable and runs it on the stack machine."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass

from .instructions import CodeBlock, CodeBlockFull
from .vm import DivideByZeroError, StackOverflowError, VirtualMachine, VMError

DEFAULT_STACK_SIZE = 2048
DEFAULT_CODE_SIZE = 1024

USAGE = (
    "Usage: kplrun input [-s=stack_size] [-c=code_size] [-debug] [-dump]\n"
    "   input: input kpl program\n"
    "   -s=stack_size: set the stack size\n"
    "   -c=code_size: set the code size\n"
    "   -debug: enable code dump\n"
)


@dataclass
class RunOptions:
    """Settings taken from the command line."""

    stack_size: int = DEFAULT_STACK_SIZE
    code_size: int = DEFAULT_CODE_SIZE
    debug: bool = False
    dump: bool = False


def _leading_int(text: str) -> int:
    """Read the integer at the start of ``text``; 0 if there is none."""
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def parse_options(args) -> RunOptions:
    """Parse the options that follow the input file name; raises ValueError on an unknown one."""
    options = RunOptions()
    for arg in args:
        if arg.startswith("-s="):
            options.stack_size = _leading_int(arg[3:])
        elif arg.startswith("-c="):
            options.code_size = _leading_int(arg[3:])
        elif arg == "-debug":
            options.debug = True
        elif arg == "-dump":
            options.dump = True
        else:
            raise ValueError(f"unknown option: {arg}")
    return options


def main(argv=None) -> int:
    """Run the executable named first in ``argv``; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    out = sys.stdout

    if not args:
        out.write("kplrun: no input file.\n")
        out.write(USAGE)
        return -1

    try:
        options = parse_options(args[1:])
    except ValueError:
        out.write(USAGE)
        return -1

    try:
        stream = open(args[0], "rb")
    except OSError:
        out.write("kplrun: Can't read input file!\n")
        return -1

    code = CodeBlock(options.code_size)
    with stream:
        try:
            code.load(stream)
        except (ValueError, CodeBlockFull):
            out.write("kplrun: Wrong executable format!\n")
            return -1

    if options.dump:
        out.write(code.listing())
        return 0

    machine = VirtualMachine(code, options.stack_size, debug=options.debug)
    try:
        machine.run()
    except DivideByZeroError:
        out.write("Runtime error: Divide by zero!\n")
    except StackOverflowError:
        out.write("Runtime error: Stack overflow!\n")
    except VMError as exc:
        if str(exc).startswith("IO error"):
            out.write("Runtime error: IO error!\n")
        else:
            out.write(f"Runtime error: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())