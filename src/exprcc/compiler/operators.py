"""Instruction selection for binary operators.

Every operator is emitted as::

    pop rdi        # right operand (b)
    pop rax        # left operand (a)
    <body>         # rax = a op b
    push rax

Division sign-extends rax into rdx:rax with ``cqo`` before ``idiv``, which
truncates the quotient toward zero. Comparisons set ``al`` from the flags
and zero-extend it, leaving 1 or 0 in rax.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from exprcc.environment.exceptions import InternalCompilerError
from exprcc.nodes import NodeKind

if TYPE_CHECKING:
    from exprcc.nodes import BinOp


def _compare(setcc: str) -> tuple[str, ...]:
    return ("cmp rax, rdi", f"{setcc} al", "movzb rax, al")


OPERATOR_INSTRUCTIONS: Mapping[NodeKind, tuple[str, ...]] = {
    NodeKind.ADD: ("add rax, rdi",),
    NodeKind.SUB: ("sub rax, rdi",),
    NodeKind.MUL: ("imul rax, rdi",),
    NodeKind.DIV: ("cqo", "idiv rdi"),
    NodeKind.EQ: _compare("sete"),
    NodeKind.NEQ: _compare("setne"),
    NodeKind.LT: _compare("setl"),
    NodeKind.LEQ: _compare("setle"),
    NodeKind.GT: _compare("setg"),
    NodeKind.GEQ: _compare("setge"),
}

# push takes a sign-extended 32-bit immediate
_IMM32_MIN = -(1 << 31)
_IMM32_MAX = (1 << 31) - 1


class OperatorUtilsMixin:
    """Mixin turning leaves and operators into instruction lists."""

    def _literal_instructions(self, value: int) -> tuple[str, ...]:
        if _IMM32_MIN <= value <= _IMM32_MAX:
            return (f"push {value}",)
        return (f"mov rax, {value}", "push rax")

    def _operator_instructions(self, node: BinOp) -> tuple[str, ...]:
        body = OPERATOR_INSTRUCTIONS.get(node.op)
        if body is None:
            raise InternalCompilerError(
                f"expected a binary operator, got {node.op.value}", node
            )
        return ("pop rdi", "pop rax", *body, "push rax")
