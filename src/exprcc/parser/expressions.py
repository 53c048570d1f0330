"""Expression parsing for the exprcc parser.

Precedence, lowest to highest:

    expr       := equality
    equality   := relational (("==" | "!=") relational)*
    relational := additive  (("<" | "<=" | ">" | ">=") additive)*
    additive   := term      (("+" | "-") term)*
    term       := unary     (("*" | "/") unary)*
    unary      := ("+" | "-")? primary
    primary    := number | "(" expr ")"

Every binary level folds to the left in a loop, so ``1-2-3`` parses as
``(1-2)-3``. Unary minus desugars to ``0 - x``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from exprcc._types import TokenType
from exprcc.environment.exceptions import ErrorCode
from exprcc.nodes import BinOp, Expr, NodeKind, Num
from exprcc.parser.errors import ParseError

if TYPE_CHECKING:
    from exprcc.parser.tokens import TokenCursor

# Operator tables, one per precedence level: token type -> node kind.
EQUALITY_OPS: Mapping[TokenType, NodeKind] = {
    TokenType.EQ: NodeKind.EQ,
    TokenType.NEQ: NodeKind.NEQ,
}
RELATIONAL_OPS: Mapping[TokenType, NodeKind] = {
    TokenType.LT: NodeKind.LT,
    TokenType.LEQ: NodeKind.LEQ,
    TokenType.GT: NodeKind.GT,
    TokenType.GEQ: NodeKind.GEQ,
}
ADDITIVE_OPS: Mapping[TokenType, NodeKind] = {
    TokenType.PLUS: NodeKind.ADD,
    TokenType.MINUS: NodeKind.SUB,
}
TERM_OPS: Mapping[TokenType, NodeKind] = {
    TokenType.MUL: NodeKind.MUL,
    TokenType.DIV: NodeKind.DIV,
}

PRECEDENCE_LEVELS: tuple[Mapping[TokenType, NodeKind], ...] = (
    EQUALITY_OPS,
    RELATIONAL_OPS,
    ADDITIVE_OPS,
    TERM_OPS,
)


class ExpressionParsingMixin:
    """Mixin for parsing expressions.

    Host attributes:
        _cursor: TokenCursor over the token stream
        _depth: Current parenthesis nesting depth
        _max_depth: Nesting limit
        _source: Source text for error snippets, or None
    """

    if TYPE_CHECKING:
        _cursor: TokenCursor
        _depth: int
        _max_depth: int
        _source: str | None

    def _parse_expr(self) -> Expr:
        return self._parse_equality()

    def _parse_equality(self) -> Expr:
        return self._parse_binary(EQUALITY_OPS, self._parse_relational)

    def _parse_relational(self) -> Expr:
        return self._parse_binary(RELATIONAL_OPS, self._parse_additive)

    def _parse_additive(self) -> Expr:
        return self._parse_binary(ADDITIVE_OPS, self._parse_term)

    def _parse_term(self) -> Expr:
        return self._parse_binary(TERM_OPS, self._parse_unary)

    def _parse_binary(
        self,
        operators: Mapping[TokenType, NodeKind],
        operand: Callable[[], Expr],
    ) -> Expr:
        """Parse ``operand (op operand)*`` folding to the left."""
        node = operand()
        while True:
            token = self._cursor.current()
            if token.type not in operators:
                return node
            self._cursor.advance()
            node = BinOp(operators[token.type], node, operand(), location=token.location)

    def _parse_unary(self) -> Expr:
        token = self._cursor.current()
        if token.type is TokenType.PLUS:
            self._cursor.advance()
            return self._parse_primary()
        if token.type is TokenType.MINUS:
            self._cursor.advance()
            zero = Num(0, location=token.location)
            return BinOp(NodeKind.SUB, zero, self._parse_primary(), location=token.location)
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        token = self._cursor.current()
        if token.type is not TokenType.LPAREN:
            return Num(self._cursor.expect_number(), location=token.location)

        if self._depth >= self._max_depth:
            raise ParseError(
                f"expression nested deeper than {self._max_depth} parentheses",
                token,
                code=ErrorCode.NESTING_TOO_DEEP,
                source=self._source,
            )
        self._cursor.advance()
        self._depth += 1
        node = self._parse_expr()
        self._cursor.expect(TokenType.RPAREN)
        self._depth -= 1
        return node
