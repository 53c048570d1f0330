"""Expression nodes for the exprcc AST."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from exprcc.nodes.base import Node


class NodeKind(Enum):
    """Closed set of node kinds.

    ``NUM`` is the only leaf kind; every other kind is a binary operator.
    """

    NUM = "Num"
    ADD = "Add"
    SUB = "Sub"
    MUL = "Mul"
    DIV = "Div"
    EQ = "Eq"
    NEQ = "Neq"
    LT = "Lt"
    LEQ = "Leq"
    GT = "Gt"
    GEQ = "Geq"

    @property
    def is_operator(self) -> bool:
        return self is not NodeKind.NUM


OPERATOR_KINDS: frozenset[NodeKind] = frozenset(k for k in NodeKind if k.is_operator)


@dataclass(frozen=True, slots=True)
class Expr(Node):
    """Base class for expressions."""


@dataclass(frozen=True, slots=True)
class Num(Expr):
    """Integer literal (unsigned 64-bit)."""

    value: int

    @property
    def kind(self) -> NodeKind:
        return NodeKind.NUM

    @property
    def left(self) -> None:
        return None

    @property
    def right(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class BinOp(Expr):
    """Binary operation: left op right

    The parser always sets both operands. ``None`` is representable only so
    that hand-built trees violating that rule can be rejected by the
    compiler instead of crashing it.
    """

    op: NodeKind
    left: Expr | None
    right: Expr | None

    @property
    def kind(self) -> NodeKind:
        return self.op


AnyExpr = Num | BinOp
