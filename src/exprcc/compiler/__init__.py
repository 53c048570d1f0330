"""Code generation for exprcc.

Translates the expression tree into an x86-64 stack-machine routine.
"""

from exprcc.compiler.core import Compiler, generate
from exprcc.compiler.operators import OPERATOR_INSTRUCTIONS

__all__ = ["OPERATOR_INSTRUCTIONS", "Compiler", "generate"]
