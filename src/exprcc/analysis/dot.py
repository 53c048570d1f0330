"""Graphviz rendering of the expression tree.

Nodes are numbered in preorder starting from ``start_id``. The counter is
threaded through the traversal explicitly: ``dot_body`` takes the first
free id and returns the next one, so several trees can share one graph
without colliding.

Example:
    >>> print(render_dot(parse(tokenize("1+2"))))
    digraph G {
    0[label="Add"];
    0 -> 1;
    1[label="Num(1)"];
    0 -> 2;
    2[label="Num(2)"];
    }
"""

from __future__ import annotations

from exprcc.analysis.visitor import iter_children
from exprcc.nodes import Expr, Num


def node_label(node: Expr) -> str:
    if isinstance(node, Num):
        return f"Num({node.value})"
    return node.kind.value


def dot_body(root: Expr, start_id: int = 0) -> tuple[list[str], int]:
    """Statements for ``root`` and the next unused node id.

    Each node line is preceded by the edge from its parent, so edges and
    nodes appear in preorder.
    """
    lines: list[str] = []
    next_id = start_id
    stack: list[tuple[Expr, int | None]] = [(root, None)]
    while stack:
        node, parent_id = stack.pop()
        node_id = next_id
        next_id += 1
        if parent_id is not None:
            lines.append(f"{parent_id} -> {node_id};")
        lines.append(f'{node_id}[label="{node_label(node)}"];')
        stack.extend((child, node_id) for child in reversed(list(iter_children(node))))
    return lines, next_id


def render_dot(root: Expr, name: str = "G") -> str:
    """Render ``root`` as a complete Graphviz digraph."""
    lines, _ = dot_body(root)
    return "\n".join([f"digraph {name} {{", *lines, "}"]) + "\n"
