"""Tests for the in-process stack machine."""

import pytest

from exprcc.environment.exceptions import MachineError
from exprcc.machine import StackMachine, exit_status, parse_program
from exprcc.machine import run as run_assembly


class TestEndToEnd:
    """Compiled expressions produce the expected exit status."""

    @pytest.mark.parametrize(
        ("expected", "source"),
        [
            (0, "0"),
            (42, "42"),
            (47, "5+6*7"),
            (15, "5*(9-6)"),
            (4, "(3+5)/2"),
            (4, "5-(-1+2)"),
            (3, "+5+(-2)"),
            (10, "-10+20"),
            (10, "-(-10)"),
            (1, "0==0"),
            (0, "0==1"),
            (1, "42!=0"),
            (1, "0<1"),
            (0, "1<1"),
            (1, "1<=1"),
            (0, "2<=1"),
            (1, "2>1"),
            (0, "1>1"),
            (1, "1>=1"),
            (0, "1>=2"),
            (1, "1+1==2"),
        ],
    )
    def test_expression(self, run, expected, source):
        assert exit_status(run(source)) == expected

    def test_negative_result(self, run):
        assert run("1-3") == -2
        assert exit_status(run("1-3")) == 254

    def test_comparisons_are_signed(self, run):
        assert run("0-1 < 0") == 1
        assert run("18446744073709551615 < 0") == 1

    def test_wraparound(self, run):
        assert run("9223372036854775807+1") == -(1 << 63)


class TestDivision:
    """idiv truncates toward zero for every sign combination."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("7/2", 3),
            ("-7/2", -3),
            ("7/-2", -3),
            ("-7/-2", 3),
            ("-1/2", 0),
            ("6/3", 2),
            ("-6/3", -2),
        ],
    )
    def test_truncates_toward_zero(self, run, source, expected):
        assert run(source) == expected

    def test_division_by_zero(self, run):
        with pytest.raises(MachineError, match="division by zero"):
            run("1/0")

    def test_quotient_overflow(self, run):
        with pytest.raises(MachineError, match="quotient overflow"):
            run("(0-9223372036854775807-1)/-1")


class TestMachineFaults:
    """Malformed programs fault instead of leaking Python exceptions."""

    def test_missing_entry_point(self):
        with pytest.raises(MachineError, match="entry point"):
            run_assembly("start:\n  ret\n")

    def test_stack_underflow(self):
        with pytest.raises(MachineError, match="empty stack") as exc_info:
            run_assembly("main:\n  pop rax\n  ret\n")
        assert exc_info.value.lineno == 2

    def test_unbalanced_stack_at_ret(self):
        with pytest.raises(MachineError, match="left on the stack"):
            run_assembly("main:\n  push 1\n  push 2\n  pop rax\n  ret\n")

    def test_unknown_instruction(self):
        with pytest.raises(MachineError, match="unsupported"):
            run_assembly("main:\n  jmp main\n")

    def test_push_wide_immediate(self):
        with pytest.raises(MachineError, match="32 bits"):
            run_assembly("main:\n  push 4294967296\n  pop rax\n  ret\n")

    def test_no_ret(self):
        with pytest.raises(MachineError, match="without ret"):
            run_assembly("main:\n  push 1\n")

    def test_setcc_before_cmp(self):
        with pytest.raises(MachineError, match="before cmp"):
            run_assembly("main:\n  sete al\n  ret\n")

    def test_bad_operand(self):
        with pytest.raises(MachineError, match="bad operand"):
            run_assembly("main:\n  push x\n")


class TestParseProgram:
    """Assembly text is split into labels and instructions."""

    def test_directives_and_comments_ignored(self):
        instructions, labels = parse_program(
            ".intel_syntax noprefix\n.globl main\nmain:\n  push 1  # one\n\n  ret\n"
        )
        assert labels == {"main": 0}
        assert [i.mnemonic for i in instructions] == ["push", "ret"]
        assert instructions[0].operands == ("1",)
        assert instructions[0].lineno == 4

    def test_custom_entry_point(self):
        machine = StackMachine(entry_point="f")
        assert machine.run("f:\n  mov rax, 5\n  ret\n") == 5

    def test_state_reset_between_runs(self, machine, env):
        machine.run(env.compile("1"))
        assert machine.run(env.compile("2")) == 2
        assert machine.state.stack == []
