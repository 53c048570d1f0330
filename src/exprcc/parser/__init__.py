"""Parser for exprcc.

Builds an immutable expression tree from the lexer's token stream using
recursive descent with one level of lookahead.
"""

from exprcc.parser.core import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, Parser, parse
from exprcc.parser.errors import ParseError
from exprcc.parser.tokens import TokenCursor

__all__ = ["DEFAULT_MAX_DEPTH", "MAX_DEPTH_LIMIT", "ParseError", "Parser", "TokenCursor", "parse"]
