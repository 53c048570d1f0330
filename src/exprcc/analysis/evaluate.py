"""Direct evaluation of an expression tree with 64-bit machine semantics.

Literals are unsigned 64-bit values reinterpreted as signed two's
complement, exactly as the generated code sees them once pushed. Addition,
subtraction and multiplication wrap; division truncates toward zero;
comparisons are signed and produce 1 or 0. Division by zero and
``INT64_MIN / -1`` fault the way ``idiv`` does.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from exprcc.analysis.visitor import walk_postorder
from exprcc.environment.exceptions import InternalCompilerError, MachineError
from exprcc.nodes import Expr, NodeKind, Num

INT64_MIN = -(1 << 63)
_MASK = (1 << 64) - 1


def to_signed(value: int) -> int:
    """Reduce ``value`` to a signed 64-bit integer."""
    value &= _MASK
    return value - (1 << 64) if value >> 63 else value


def truncating_div(a: int, b: int) -> int:
    """Signed quotient rounded toward zero, faulting like ``idiv``."""
    if b == 0:
        raise MachineError("division by zero")
    if a == INT64_MIN and b == -1:
        raise MachineError("quotient overflow")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


BINARY_SEMANTICS: Mapping[NodeKind, Callable[[int, int], int]] = {
    NodeKind.ADD: lambda a, b: to_signed(a + b),
    NodeKind.SUB: lambda a, b: to_signed(a - b),
    NodeKind.MUL: lambda a, b: to_signed(a * b),
    NodeKind.DIV: truncating_div,
    NodeKind.EQ: lambda a, b: int(a == b),
    NodeKind.NEQ: lambda a, b: int(a != b),
    NodeKind.LT: lambda a, b: int(a < b),
    NodeKind.LEQ: lambda a, b: int(a <= b),
    NodeKind.GT: lambda a, b: int(a > b),
    NodeKind.GEQ: lambda a, b: int(a >= b),
}


def evaluate(node: Expr) -> int:
    """Evaluate ``node`` to a signed 64-bit integer.

    Raises:
        MachineError: Division by zero or quotient overflow
        InternalCompilerError: An operator node is missing a child
    """
    stack: list[int] = []
    for current in walk_postorder(node):
        if isinstance(current, Num):
            stack.append(to_signed(current.value))
            continue
        if current.left is None or current.right is None:
            raise InternalCompilerError(f"{current.kind.value} node is missing an operand", current)
        semantics = BINARY_SEMANTICS.get(current.kind)
        if semantics is None:
            raise InternalCompilerError(f"{current.kind.value} is not a binary operator", current)
        b = stack.pop()
        a = stack.pop()
        stack.append(semantics(a, b))
    return stack.pop()
