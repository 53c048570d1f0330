"""Read-only traversal of the exprcc AST.

Provides child iteration plus preorder and postorder walks. The walks
use an explicit stack, so left-leaning trees from long operator chains
(``1+1+...+1``) do not hit the recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exprcc.nodes import Expr


def iter_children(node: Expr) -> Iterator[Expr]:
    """Yield the left then right child of ``node``, skipping missing ones."""
    for child in (getattr(node, "left", None), getattr(node, "right", None)):
        if child is not None:
            yield child


def walk(node: Expr) -> Iterator[Expr]:
    """Yield every node in preorder (parent, left subtree, right subtree).

    The position of a node in this sequence is a stable identifier for it.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(iter_children(current))))


def walk_postorder(node: Expr) -> Iterator[Expr]:
    """Yield every node after both of its subtrees (left, right, parent)."""
    stack: list[tuple[Expr, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            yield current
            continue
        stack.append((current, True))
        stack.extend((child, False) for child in reversed(list(iter_children(current))))


def count_nodes(node: Expr) -> int:
    return sum(1 for _ in walk(node))


def depth(node: Expr) -> int:
    """Number of nodes on the longest root-to-leaf path."""
    deepest = 0
    stack = [(node, 1)]
    while stack:
        current, level = stack.pop()
        deepest = max(deepest, level)
        stack.extend((child, level + 1) for child in iter_children(current))
    return deepest
