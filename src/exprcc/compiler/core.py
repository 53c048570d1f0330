"""exprcc Compiler Core: stack-machine code generation.

The Compiler walks the expression tree in strict postorder. Each leaf
pushes its value and each operator pops two values and pushes one, so
after the root is generated exactly one value is left on the stack. The
epilogue pops it into ``rax`` as the routine's return value.

Generated program for ``5+6*7``::

    .intel_syntax noprefix
    .globl main
    main:
      push 5
      push 6
      push 7
      pop rdi
      pop rax
      imul rax, rdi
      push rax
      pop rdi
      pop rax
      add rax, rdi
      push rax
      pop rax
      ret

Output is all-or-nothing: instructions are collected in a buffer and only
joined once the whole tree has been generated.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from exprcc.analysis.visitor import walk_postorder
from exprcc.compiler.operators import OperatorUtilsMixin
from exprcc.environment.exceptions import InternalCompilerError
from exprcc.nodes import BinOp, Expr, Node, Num

logger = logging.getLogger(__name__)

SYMBOL_RE = re.compile(r"[A-Za-z_.$][A-Za-z0-9_.$]*")

INDENT = "  "


class Compiler(OperatorUtilsMixin):
    """Compile an expression tree to x86-64 assembly (Intel syntax).

    Attributes:
        _entry_point: Global label of the generated routine

    Node Dispatch:
        Uses a dict keyed by node class name:
            ```python
            dispatch = {
                "Num": self._compile_num,
                "BinOp": self._compile_binop,
            }
            ```

    Example:
        >>> from exprcc.lexer import tokenize
        >>> from exprcc.parser import parse
        >>> print(Compiler().compile(parse(tokenize("42"))))
        .intel_syntax noprefix
        .globl main
        main:
          push 42
          pop rax
          ret

    """

    __slots__ = ("_entry_point", "_node_dispatch")

    def __init__(self, entry_point: str = "main"):
        if not SYMBOL_RE.fullmatch(entry_point):
            raise ValueError(f"invalid entry point symbol: {entry_point!r}")
        self._entry_point = entry_point
        self._node_dispatch: dict[str, Callable[[Node], tuple[str, ...]]] = {
            "Num": self._compile_num,
            "BinOp": self._compile_binop,
        }

    def prologue(self) -> list[str]:
        return [".intel_syntax noprefix", f".globl {self._entry_point}", f"{self._entry_point}:"]

    def epilogue(self) -> list[str]:
        return [INDENT + "pop rax", INDENT + "ret"]

    def generate(self, node: Expr) -> list[str]:
        """Instructions computing ``node``, leaving its value on the stack.

        Raises:
            InternalCompilerError: An operator node is missing a child, or a
                node is not an expression node.
        """
        body: list[str] = []
        for current in walk_postorder(node):
            handler = self._node_dispatch.get(type(current).__name__)
            if handler is None:
                raise InternalCompilerError(
                    f"unexpected node type {type(current).__name__}", current
                )
            body.extend(INDENT + line for line in handler(current))
        return body

    def compile(self, node: Expr) -> str:
        """Generate the complete program for ``node``."""
        body = self.generate(node)
        logger.debug("generated %d instructions for %s", len(body), self._entry_point)
        return "\n".join([*self.prologue(), *body, *self.epilogue()]) + "\n"

    def _compile_num(self, node: Num) -> tuple[str, ...]:
        return self._literal_instructions(node.value)

    def _compile_binop(self, node: BinOp) -> tuple[str, ...]:
        if node.left is None or node.right is None:
            side = "left" if node.left is None else "right"
            raise InternalCompilerError(
                f"{node.op.value} node at {node.location} has no {side} operand", node
            )
        return self._operator_instructions(node)


def generate(node: Expr, entry_point: str = "main") -> str:
    """Compile ``node`` to a complete assembly program."""
    return Compiler(entry_point).compile(node)
