"""Recursive-descent parser producing an immutable expression tree."""

from __future__ import annotations

from collections.abc import Iterable

from exprcc._types import Token, TokenType
from exprcc.environment.exceptions import ErrorCode
from exprcc.nodes import Expr
from exprcc.parser.errors import ParseError
from exprcc.parser.expressions import ExpressionParsingMixin
from exprcc.parser.tokens import TokenCursor

# Each level of parentheses costs about a dozen Python frames, so the
# limit must stay well inside the interpreter's default recursion limit.
MAX_DEPTH_LIMIT = 64
DEFAULT_MAX_DEPTH = 50


class Parser(ExpressionParsingMixin):
    """Parse a token stream into an expression tree.

    A Parser is single-use: ``parse()`` consumes the stream.

    Example:
        >>> from exprcc.lexer import tokenize
        >>> Parser(tokenize("1+2*3")).parse()
        BinOp(op=<NodeKind.ADD: 'Add'>, left=Num(value=1), right=BinOp(op=<NodeKind.MUL: 'Mul'>, left=Num(value=2), right=Num(value=3)))

    """

    __slots__ = ("_cursor", "_depth", "_max_depth", "_source")

    def __init__(
        self,
        tokens: Iterable[Token],
        source: str | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if not 1 <= max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        self._cursor = TokenCursor(tokens, source)
        self._source = source
        self._depth = 0
        self._max_depth = max_depth

    def parse(self) -> Expr:
        """Parse a whole expression and require EOF after it.

        Raises:
            ParseError: On any token mismatch, missing literal, or trailing
                token. No partial tree is ever returned.
        """
        node = self._parse_expr()
        token = self._cursor.peek()
        if token is not None and token.type is not TokenType.EOF:
            raise ParseError(
                f"unexpected trailing token {token.describe()}",
                token,
                expected=TokenType.EOF,
                code=ErrorCode.TRAILING_TOKEN,
                source=self._source,
            )
        self._cursor.advance()
        return node


def parse(tokens: Iterable[Token], source: str | None = None) -> Expr:
    """Parse ``tokens`` into an expression tree."""
    return Parser(tokens, source).parse()
