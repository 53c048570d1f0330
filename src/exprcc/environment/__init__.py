"""Compiler environment: configuration, errors and diagnostics.

Exceptions and diagnostics are imported before the core so that the
lexer and parser can import them while this package is initializing.
"""

from exprcc.environment import terminal
from exprcc.environment.diagnostics import DiagnosticReporter, render
from exprcc.environment.exceptions import (
    CompileError,
    ErrorCode,
    InternalCompilerError,
    LiteralOverflowError,
    MachineError,
    TokenizeError,
)
from exprcc.environment.core import Environment

__all__ = [
    "CompileError",
    "DiagnosticReporter",
    "Environment",
    "ErrorCode",
    "InternalCompilerError",
    "LiteralOverflowError",
    "MachineError",
    "TokenizeError",
    "render",
    "terminal",
]
