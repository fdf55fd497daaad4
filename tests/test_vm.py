import io

import pytest

from kpl.instructions import CodeBlock, Instruction, OpCode
from kpl.vm import DivideByZeroError, StackOverflowError, VirtualMachine, VMError


def program(*instructions):
    block = CodeBlock(64)
    for op, *operands in instructions:
        block.emit(op, *operands)
    return block


def execute(code, stdin="", **kwargs):
    out = io.StringIO()
    vm = VirtualMachine(code, stdin=io.StringIO(stdin), stdout=out, **kwargs)
    vm.run()
    return vm, out.getvalue()


def test_add_and_write():
    code = program((OpCode.LC, 0, 2), (OpCode.LC, 0, 3), (OpCode.AD,), (OpCode.WRI,), (OpCode.HL,))
    vm, out = execute(code)
    assert out == "5"
    assert vm.top == -1


def test_division_truncates_toward_zero():
    code = program((OpCode.LC, 0, -7), (OpCode.LC, 0, 2), (OpCode.DV,), (OpCode.WRI,), (OpCode.HL,))
    _, out = execute(code)
    assert out == "-3"


def test_divide_by_zero_raises():
    code = program((OpCode.LC, 0, 1), (OpCode.LC, 0, 0), (OpCode.DV,), (OpCode.HL,))
    with pytest.raises(DivideByZeroError):
        execute(code)


@pytest.mark.parametrize(
    "op, a, b, expected",
    [
        (OpCode.EQ, 3, 3, "1"),
        (OpCode.EQ, 3, 4, "0"),
        (OpCode.NE, 3, 4, "1"),
        (OpCode.GT, 4, 3, "1"),
        (OpCode.LT, 4, 3, "0"),
        (OpCode.GE, 3, 3, "1"),
        (OpCode.LE, 4, 3, "0"),
    ],
)
def test_comparisons(op, a, b, expected):
    code = program((OpCode.LC, 0, a), (OpCode.LC, 0, b), (op,), (OpCode.WRI,), (OpCode.HL,))
    _, out = execute(code)
    assert out == expected


def test_read_integer_echo_with_negation_twice():
    code = program((OpCode.RI,), (OpCode.NEG,), (OpCode.NEG,), (OpCode.WRI,), (OpCode.WLN,), (OpCode.HL,))
    _, out = execute(code, stdin="  42\n")
    assert out == "42\n"


def test_read_char_echo():
    code = program((OpCode.RC,), (OpCode.CV,), (OpCode.WRC,), (OpCode.WRC,), (OpCode.HL,))
    _, out = execute(code, stdin="Q")
    assert out == "QQ"


def test_read_integer_bad_input_raises():
    with pytest.raises(VMError):
        execute(program((OpCode.RI,), (OpCode.HL,)), stdin="abc")


def test_read_char_at_end_of_input_raises():
    with pytest.raises(VMError):
        execute(program((OpCode.RC,), (OpCode.HL,)), stdin="")


def test_store_and_load_variable():
    code = program(
        (OpCode.INT, 0, 5),
        (OpCode.LA, 0, 4),
        (OpCode.RI,),
        (OpCode.ST,),
        (OpCode.LV, 0, 4),
        (OpCode.WRI,),
        (OpCode.HL,),
    )
    vm, out = execute(code, stdin="31")
    assert out == "31"
    assert vm.stack[4] == 31
    assert vm.top == 4


def test_load_indirect():
    code = program((OpCode.INT, 0, 3), (OpCode.LA, 0, 2), (OpCode.RI,), (OpCode.ST,),
                   (OpCode.LA, 0, 2), (OpCode.LI,), (OpCode.WRI,), (OpCode.HL,))
    _, out = execute(code, stdin="12")
    assert out == "12"


def test_false_jump_skips_when_false():
    code = program(
        (OpCode.LC, 0, 0),
        (OpCode.FJ, 0, 4),
        (OpCode.LC, 0, 1),
        (OpCode.WRI,),
        (OpCode.HL,),
    )
    vm, out = execute(code)
    assert out == ""
    assert vm.top == -1


def test_jump():
    code = program((OpCode.J, 0, 2), (OpCode.WLN,), (OpCode.HL,))
    _, out = execute(code)
    assert out == ""


def test_procedure_call_and_return():
    code = program(
        (OpCode.INT, 0, 4),
        (OpCode.CALL, 0, 3),
        (OpCode.HL,),
        (OpCode.INT, 0, 4),
        (OpCode.RC,),
        (OpCode.WRC,),
        (OpCode.EP,),
    )
    vm, out = execute(code, stdin="z")
    assert out == "z"
    assert vm.top == 3
    assert vm.frame_base == 0


def test_function_returns_value_on_top():
    code = program(
        (OpCode.INT, 0, 4),
        (OpCode.CALL, 0, 4),
        (OpCode.WRI,),
        (OpCode.HL,),
        (OpCode.INT, 0, 4),
        (OpCode.LA, 0, 0),
        (OpCode.RI,),
        (OpCode.ST,),
        (OpCode.EF,),
    )
    vm, out = execute(code, stdin="17")
    assert out == "17"
    assert vm.top == 3


def test_stack_overflow():
    with pytest.raises(StackOverflowError):
        execute(program((OpCode.INT, 0, 10), (OpCode.HL,)), stack_size=4)


def test_running_off_the_code_raises():
    with pytest.raises(VMError):
        execute(program((OpCode.WLN,)))


def test_dump_memory():
    vm, _ = execute(program((OpCode.LC, 0, 7), (OpCode.LC, 0, 9), (OpCode.HL,)))
    assert vm.dump_memory() == "Start dumping...\n     0: 7\n     1: 9\nFinish dumping!\n"


def test_reset_and_base():
    vm, _ = execute(program((OpCode.INT, 0, 4), (OpCode.HL,)))
    vm.reset()
    assert (vm.pc, vm.top, vm.frame_base) == (0, -1, 0)
    assert vm.base(0) == 0


def test_breakpoint_then_halt_command():
    code = program((OpCode.BP,), (OpCode.LC, 0, 1), (OpCode.WRI,), (OpCode.HL,))
    _, out = execute(code, stdin="h")
    assert out == ""


def test_breakpoint_then_continue_command():
    code = program((OpCode.BP,), (OpCode.LC, 0, 1), (OpCode.WRI,), (OpCode.HL,))
    _, out = execute(code, stdin="c")
    assert out == "1"


def test_debug_trace_and_top_command():
    code = program((OpCode.LC, 0, 8), (OpCode.HL,))
    _, out = execute(code, stdin="tc", debug=True)
    assert out.splitlines() == ["     0-0   :  LC 8", "Top (0) = 8"]