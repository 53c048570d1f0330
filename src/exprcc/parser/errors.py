"""Parser error handling for exprcc.

Provides ParseError, located at the offending token.
"""

from __future__ import annotations

from exprcc._types import Token, TokenType
from exprcc.environment.exceptions import CompileError, ErrorCode


class ParseError(CompileError):
    """Parser error located at the token that could not be used.

    Attributes:
        token: The offending token
        expected: The token kind that was required, if a single one was
    """

    code: ErrorCode | None = ErrorCode.UNEXPECTED_TOKEN

    def __init__(
        self,
        message: str,
        token: Token,
        *,
        expected: TokenType | None = None,
        code: ErrorCode | None = None,
        source: str | None = None,
    ):
        self.token = token
        self.expected = expected
        if code is not None:
            self.code = code
        super().__init__(message, token.location, source)

    @property
    def actual(self) -> TokenType:
        """Kind of the offending token."""
        return self.token.type

    @property
    def line(self) -> int:
        return self.token.line

    @property
    def column(self) -> int:
        return self.token.column
