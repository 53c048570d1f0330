"""Text dumps of tokens and trees for the CLI's inspection modes."""

from __future__ import annotations

from collections.abc import Iterable

from exprcc._types import Token
from exprcc.analysis.dot import node_label
from exprcc.analysis.visitor import iter_children, walk_postorder
from exprcc.nodes import Expr


def format_token(token: Token) -> str:
    """One line per token: kind, literal value if any, then line:column.

    Example:
        >>> format_token(Token(TokenType.NUM, Location(0, 4), 23))
        'NUM 23 @ 0:4'
    """
    if token.value is not None:
        return f"{token.type.name} {token.value} @ {token.location}"
    return f"{token.type.name} @ {token.location}"


def dump_tokens(tokens: Iterable[Token]) -> str:
    return "\n".join(format_token(t) for t in tokens)


def format_tree(root: Expr) -> str:
    """Compact one-line form, e.g. ``Sub(Sub(Num(1), Num(2)), Num(3))``."""
    done: list[str] = []
    for node in walk_postorder(root):
        arity = len(list(iter_children(node)))
        if arity:
            args = done[-arity:]
            del done[-arity:]
            done.append(f"{node_label(node)}({', '.join(args)})")
        else:
            done.append(node_label(node))
    return done[0]


def dump_tree(root: Expr, indent: str = "  ") -> str:
    """Indented multi-line form, one node per line, children below parents."""
    lines: list[str] = []
    stack: list[tuple[Expr, int]] = [(root, 0)]
    while stack:
        node, level = stack.pop()
        lines.append(f"{indent * level}{node_label(node)} @ {node.location}")
        stack.extend((child, level + 1) for child in reversed(list(iter_children(node))))
    return "\n".join(lines)
