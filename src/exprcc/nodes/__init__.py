"""AST node types for exprcc.

The tree is built once by the parser and is immutable thereafter:

    >>> from exprcc.nodes import BinOp, NodeKind, Num
    >>> BinOp(NodeKind.SUB, Num(0), Num(5))
    BinOp(op=<NodeKind.SUB: 'Sub'>, left=Num(value=0), right=Num(value=5))

"""

from exprcc.nodes.base import Node
from exprcc.nodes.expressions import OPERATOR_KINDS, AnyExpr, BinOp, Expr, NodeKind, Num

__all__ = [
    "OPERATOR_KINDS",
    "AnyExpr",
    "BinOp",
    "Expr",
    "Node",
    "NodeKind",
    "Num",
]
