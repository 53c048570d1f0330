"""Environment: compiler configuration and pipeline entry point."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

from exprcc._types import Token
from exprcc.compiler import Compiler
from exprcc.environment.diagnostics import DiagnosticReporter
from exprcc.lexer import Lexer, LexerConfig, OverflowPolicy
from exprcc.nodes import Expr
from exprcc.parser import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Environment:
    """Immutable compiler configuration.

    Every call runs its own lexer, parser and compiler, so one Environment
    can be shared freely.

    Attributes:
        overflow: Literal overflow policy, "error" or "wrap"
        entry_point: Global label of the generated routine
        max_depth: Maximum parenthesis nesting accepted by the parser
        colors: Diagnostic colors: True/False to force, None to auto-detect

    Example:
        >>> env = Environment()
        >>> print(env.compile("1+2"), end="")
        .intel_syntax noprefix
        .globl main
        main:
          push 1
          push 2
          pop rdi
          pop rax
          add rax, rdi
          push rax
          pop rax
          ret

    """

    overflow: OverflowPolicy = "error"
    entry_point: str = "main"
    max_depth: int = DEFAULT_MAX_DEPTH
    colors: bool | None = None
    _lexer_config: LexerConfig = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_lexer_config", LexerConfig(overflow=self.overflow))
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )
        # Validates the entry point symbol.
        Compiler(self.entry_point)

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize ``source``; see exprcc.lexer."""
        return Lexer(source, self._lexer_config).tokenize()

    def parse(self, source: str) -> Expr:
        """Tokenize and parse ``source`` into an expression tree.

        Tokens are pulled from the lexer lazily, so a lexical error after a
        syntax error is never reached.
        """
        return Parser(Lexer(source, self._lexer_config), source, self.max_depth).parse()

    def compile(self, source: str) -> str:
        """Compile ``source`` to a complete assembly program.

        Raises:
            TokenizeError: Unrecognized character or oversized literal
            ParseError: Malformed expression
            InternalCompilerError: Broken tree invariant (a bug, not bad input)
        """
        tree = self.parse(source)
        assembly = Compiler(self.entry_point).compile(tree)
        logger.debug("compiled %r (%d bytes of assembly)", source, len(assembly))
        return assembly

    def reporter(self, stream: TextIO | None = None) -> DiagnosticReporter:
        """Diagnostic reporter honoring this environment's color setting.

        Writes to ``stream``, or to stderr when it is None.
        """
        return DiagnosticReporter(stream, colors=self.colors)
