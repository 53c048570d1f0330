"""Tests for stack-machine code generation."""

import pytest

from exprcc import BinOp, Compiler, Environment, NodeKind, Num, generate
from exprcc.compiler import OPERATOR_INSTRUCTIONS
from exprcc.environment.exceptions import ErrorCode, InternalCompilerError
from exprcc.nodes import OPERATOR_KINDS

from .conftest import assert_instructions

K = NodeKind


class TestProgramShape:
    """Prologue, body and epilogue."""

    def test_literal_program(self, env):
        assert env.compile("42") == (
            ".intel_syntax noprefix\n"
            ".globl main\n"
            "main:\n"
            "  push 42\n"
            "  pop rax\n"
            "  ret\n"
        )

    def test_custom_entry_point(self):
        assembly = Environment(entry_point="_compute").compile("1")
        assert ".globl _compute\n_compute:\n" in assembly

    @pytest.mark.parametrize("name", ["", "1abc", "main:", "a b"])
    def test_invalid_entry_point(self, name):
        with pytest.raises(ValueError):
            Compiler(name)

    def test_generate_function(self):
        assert generate(Num(7)).splitlines()[3] == "  push 7"


class TestPostorder:
    """Children first, left before right, then the operator."""

    def test_addition(self, env):
        assert_instructions(
            env.compile("1+2"),
            "push 1",
            "push 2",
            "pop rdi",
            "pop rax",
            "add rax, rdi",
            "push rax",
        )

    def test_precedence_order(self, env):
        assert_instructions(
            env.compile("5+6*7"),
            "push 5",
            "push 6",
            "push 7",
            "pop rdi",
            "pop rax",
            "imul rax, rdi",
            "push rax",
            "pop rdi",
            "pop rax",
            "add rax, rdi",
            "push rax",
        )

    def test_division_sign_extends(self, env):
        assert_instructions(
            env.compile("7/2"),
            "push 7",
            "push 2",
            "pop rdi",
            "pop rax",
            "cqo",
            "idiv rdi",
            "push rax",
        )

    @pytest.mark.parametrize(
        ("source", "setcc"),
        [("1==2", "sete"), ("1!=2", "setne"), ("1<2", "setl"),
         ("1<=2", "setle"), ("1>2", "setg"), ("1>=2", "setge")],
    )
    def test_comparisons(self, env, source, setcc):
        assert_instructions(
            env.compile(source),
            "push 1",
            "push 2",
            "pop rdi",
            "pop rax",
            "cmp rax, rdi",
            f"{setcc} al",
            "movzb rax, al",
            "push rax",
        )

    def test_pushes_equal_pops_plus_one(self, env):
        body = [line.strip() for line in env.compile("(1+2)*3-4/5==6").splitlines()[3:-2]]
        pushes = sum(line.startswith("push") for line in body)
        pops = sum(line.startswith("pop") for line in body)
        assert pushes == pops + 1


class TestLiterals:
    """Immediates that do not fit push's 32-bit field go through rax."""

    def test_imm32_boundary(self, env):
        assert_instructions(env.compile("2147483647"), "push 2147483647")
        assert_instructions(env.compile("2147483648"), "mov rax, 2147483648", "push rax")

    def test_u64_max(self, env):
        assert_instructions(
            env.compile("18446744073709551615"),
            "mov rax, 18446744073709551615",
            "push rax",
        )


class TestInvariantViolations:
    """Hand-built trees that break the operator arity rule fail fast."""

    @pytest.mark.parametrize(
        "tree",
        [
            BinOp(K.ADD, None, Num(1)),
            BinOp(K.ADD, Num(1), None),
            BinOp(K.MUL, BinOp(K.SUB, Num(1), None), Num(2)),
        ],
    )
    def test_missing_child(self, tree):
        with pytest.raises(InternalCompilerError) as exc_info:
            Compiler().compile(tree)
        assert exc_info.value.code is ErrorCode.INVALID_AST
        assert exc_info.value.code.category == "internal"

    def test_leaf_kind_used_as_operator(self):
        with pytest.raises(InternalCompilerError):
            Compiler().compile(BinOp(K.NUM, Num(1), Num(2)))

    def test_foreign_node_type(self):
        with pytest.raises(InternalCompilerError):
            Compiler().compile("1+2")  # type: ignore[arg-type]

    def test_operator_table_is_complete(self):
        assert set(OPERATOR_INSTRUCTIONS) == OPERATOR_KINDS


class TestLargeTrees:
    """Generation does not recurse per tree level."""

    def test_long_chain(self, env, machine):
        assembly = env.compile("+".join(["1"] * 3000))
        assert machine.run(assembly) == 3000
