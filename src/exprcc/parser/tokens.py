"""Token cursor with one token of lookahead.

The cursor pulls lazily from any iterable of tokens, so it works equally
over a materialized list or a running Lexer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from exprcc._types import Location, Token, TokenType
from exprcc.environment.exceptions import ErrorCode
from exprcc.parser.errors import ParseError


class TokenCursor:
    """peek / consume / expect over a token stream.

    Example:
        >>> cursor = TokenCursor(tokenize("(1)"))
        >>> cursor.consume(TokenType.LPAREN)
        True
        >>> cursor.expect_number()
        1
        >>> cursor.consume(TokenType.PLUS)
        False
    """

    __slots__ = ("_current", "_last_location", "_source", "_tokens")

    def __init__(self, tokens: Iterable[Token], source: str | None = None):
        self._tokens: Iterator[Token] = iter(tokens)
        self._source = source
        self._current: Token | None = next(self._tokens, None)
        self._last_location = self._current.location if self._current else Location()

    def peek(self) -> Token | None:
        """Current token without advancing, or None if the stream is exhausted."""
        return self._current

    def advance(self) -> Token | None:
        """Move past the current token and return it."""
        token = self._current
        if token is not None:
            self._last_location = token.location
            self._current = next(self._tokens, None)
        return token

    def consume(self, kind: TokenType) -> bool:
        """Advance and return True iff the current token is of ``kind``."""
        if self._current is not None and self._current.type is kind:
            self.advance()
            return True
        return False

    def expect(self, kind: TokenType) -> Token:
        """Advance past a token of ``kind`` or raise ParseError."""
        token = self.current()
        if token.type is not kind:
            raise ParseError(
                f"expected {kind.describe()}, found {token.describe()}",
                token,
                expected=kind,
                source=self._source,
            )
        self.advance()
        return token

    def expect_number(self) -> int:
        """Advance past a NUM token and return its value, or raise ParseError."""
        token = self.current()
        if token.type is not TokenType.NUM or token.value is None:
            raise ParseError(
                f"expected number, found {token.describe()}",
                token,
                expected=TokenType.NUM,
                code=ErrorCode.EXPECTED_NUMBER,
                source=self._source,
            )
        self.advance()
        return token.value

    def current(self) -> Token:
        """Current token, never None.

        A stream without a trailing EOF behaves as if it had one right
        after the last token.
        """
        if self._current is None:
            return Token(TokenType.EOF, self._last_location)
        return self._current
