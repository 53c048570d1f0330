"""Read-only consumers of the exprcc AST.

- visitor: child iteration and preorder/postorder walks
- evaluate: direct evaluation with 64-bit machine semantics
- dot: Graphviz rendering with explicit preorder numbering
- dump: token and tree text dumps
"""

from exprcc.analysis.dot import dot_body, render_dot
from exprcc.analysis.dump import dump_tokens, dump_tree, format_token, format_tree
from exprcc.analysis.evaluate import evaluate, to_signed, truncating_div
from exprcc.analysis.visitor import count_nodes, depth, iter_children, walk, walk_postorder

__all__ = [
    "count_nodes",
    "depth",
    "dot_body",
    "dump_tokens",
    "dump_tree",
    "evaluate",
    "format_token",
    "format_tree",
    "iter_children",
    "render_dot",
    "to_signed",
    "truncating_div",
    "walk",
    "walk_postorder",
]
