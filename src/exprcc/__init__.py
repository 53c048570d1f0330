"""exprcc: compile arithmetic expressions to x86-64 stack-machine assembly.

Quickstart:
    >>> from exprcc import Environment
    >>> env = Environment()
    >>> print(env.compile("(3+5)/2"), end="")  # doctest: +ELLIPSIS
    .intel_syntax noprefix
    .globl main
    main:
    ...
      ret

Architecture:
Source → Lexer → Parser → AST → Compiler → Assembly

Pipeline stages:
1. **Lexer**: Tokenizes the source, tagging each token with its location
2. **Parser**: Recursive descent into an immutable expression tree
3. **Compiler**: Postorder walk emitting push/pop stack-machine code
4. **Diagnostics**: Renders the offending source line with a caret

Every stage either returns its complete result or raises a CompileError;
no partial output is ever produced.

Supported syntax:
- Unsigned decimal literals (64-bit)
- ``+ - * /`` with the usual precedence, left-associative
- ``== != < <= > >=`` producing 1 or 0
- Unary ``+`` and ``-`` (``-x`` is ``0 - x``)
- Parentheses

"""

from exprcc._types import Location, Token, TokenType
from exprcc.environment import (
    CompileError,
    DiagnosticReporter,
    Environment,
    ErrorCode,
    InternalCompilerError,
    LiteralOverflowError,
    MachineError,
    TokenizeError,
    render,
)
from exprcc.compiler import Compiler, generate
from exprcc.lexer import Lexer, LexerConfig, SourceReader, tokenize
from exprcc.nodes import BinOp, Expr, NodeKind, Num
from exprcc.parser import ParseError, Parser, TokenCursor, parse

__version__ = "0.1.0"

__all__ = [
    "BinOp",
    "CompileError",
    "Compiler",
    "DiagnosticReporter",
    "Environment",
    "ErrorCode",
    "Expr",
    "InternalCompilerError",
    "Lexer",
    "LexerConfig",
    "LiteralOverflowError",
    "Location",
    "MachineError",
    "NodeKind",
    "Num",
    "ParseError",
    "Parser",
    "SourceReader",
    "Token",
    "TokenCursor",
    "TokenType",
    "TokenizeError",
    "__version__",
    "generate",
    "parse",
    "render",
    "tokenize",
]
