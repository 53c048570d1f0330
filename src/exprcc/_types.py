"""Core types shared by the lexer, parser and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class Location:
    """Position in source text.

    Both fields are 0-based. ``column`` counts characters from the start
    of ``line``.
    """

    line: int = 0
    column: int = 0

    def advance(self, span: str) -> Location:
        """Location after consuming ``span``.

        A span containing a newline moves to column 0 of the next line;
        otherwise the column moves by the length of the span.
        """
        if "\n" in span:
            return Location(self.line + 1, 0)
        return Location(self.line, self.column + len(span))

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class TokenType(Enum):
    """Token kinds produced by the lexer."""

    NUM = "num"
    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    LPAREN = "("
    RPAREN = ")"
    EQ = "=="
    NEQ = "!="
    LT = "<"
    LEQ = "<="
    GT = ">"
    GEQ = ">="
    EOF = "eof"

    def describe(self) -> str:
        """Human-readable name for error messages."""
        if self is TokenType.NUM:
            return "number"
        if self is TokenType.EOF:
            return "end of input"
        return f"'{self.value}'"


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token.

    ``value`` is set only for ``NUM`` tokens.
    """

    type: TokenType
    location: Location
    value: int | None = None

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def describe(self) -> str:
        if self.type is TokenType.NUM:
            return f"number {self.value}"
        return self.type.describe()

    def __repr__(self) -> str:
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.location})"
        return f"Token({self.type.name}, {self.location})"


# Two-character operators are tried before single-character ones.
OPERATORS_2: dict[str, TokenType] = {
    "==": TokenType.EQ,
    "!=": TokenType.NEQ,
    "<=": TokenType.LEQ,
    ">=": TokenType.GEQ,
}

OPERATORS_1: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MUL,
    "/": TokenType.DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "<": TokenType.LT,
    ">": TokenType.GT,
}

U64_MAX = (1 << 64) - 1
