"""Lexer for arithmetic expressions.

Turns source text into a stream of tokens, each tagged with the 0-based
location of its first character. The stream always ends with exactly one
``EOF`` token located at end of input.

Rules, tried in order at the cursor after skipping spaces:

1. Two-character operators: ``==`` ``!=`` ``<=`` ``>=``
2. Single-character operators: ``+ - * / ( ) < >``
3. A maximal run of decimal digits (unsigned 64-bit literal)
4. Anything else is a ``TokenizeError``

Example:
    >>> [t.type.name for t in tokenize("1 <= 23")]
    ['NUM', 'LEQ', 'NUM', 'EOF']

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Literal

from exprcc._types import OPERATORS_1, OPERATORS_2, U64_MAX, Location, Token, TokenType
from exprcc.environment.exceptions import LiteralOverflowError, TokenizeError

OverflowPolicy = Literal["error", "wrap"]
OVERFLOW_POLICIES: frozenset[str] = frozenset({"error", "wrap"})

_DIGITS = frozenset("0123456789")

# U64_MAX has 20 decimal digits.
_U64_DIGITS = len(str(U64_MAX))
_CHUNK = 18


class SourceReader:
    """Cursor over raw text that tracks the current location.

    Example:
        >>> reader = SourceReader("12+3")
        >>> reader.consume_digits()
        '12'
        >>> reader.location
        Location(line=0, column=2)
        >>> reader.head(2)
        '+3'
    """

    __slots__ = ("_pos", "_text", "location")

    def __init__(self, text: str):
        self._text = text
        self._pos = 0
        self.location = Location()

    def __len__(self) -> int:
        """Number of characters not yet consumed."""
        return len(self._text) - self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self) -> str | None:
        """Current character, or None at end of input."""
        if self.at_end:
            return None
        return self._text[self._pos]

    def head(self, n: int) -> str | None:
        """The next ``n`` characters, or None if fewer remain."""
        if len(self) < n:
            return None
        return self._text[self._pos : self._pos + n]

    def starts_with(self, prefix: str) -> bool:
        return self._text.startswith(prefix, self._pos)

    def advance(self, n: int = 1) -> str:
        """Consume ``n`` characters one at a time and return them."""
        if n > len(self):
            raise ValueError(f"cannot advance {n} characters, {len(self)} remain")
        span = self._text[self._pos : self._pos + n]
        for char in span:
            self.location = self.location.advance(char)
        self._pos += n
        return span

    def consume_digits(self) -> str:
        """Consume a maximal run of decimal digits (possibly empty)."""
        end = self._pos
        while end < len(self._text) and self._text[end] in _DIGITS:
            end += 1
        return self.advance(end - self._pos)


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Lexer options.

    Attributes:
        overflow: What to do with literals above 2**64 - 1: "error" raises
            LiteralOverflowError, "wrap" reduces modulo 2**64.
    """

    overflow: OverflowPolicy = "error"

    def __post_init__(self) -> None:
        if self.overflow not in OVERFLOW_POLICIES:
            raise ValueError(
                f"overflow must be one of {sorted(OVERFLOW_POLICIES)}, got {self.overflow!r}"
            )


DEFAULT_CONFIG = LexerConfig()


class Lexer:
    """Single forward pass over the source text.

    Iterating a Lexer yields tokens lazily; ``tokenize()`` materializes
    them. A Lexer can be iterated only once.
    """

    __slots__ = ("_config", "_reader", "_source")

    def __init__(self, source: str, config: LexerConfig | None = None):
        self._source = source
        self._config = config or DEFAULT_CONFIG
        self._reader = SourceReader(source)

    def __iter__(self) -> Iterator[Token]:
        return self._tokens()

    def tokenize(self) -> list[Token]:
        return list(self._tokens())

    def _tokens(self) -> Iterator[Token]:
        reader = self._reader
        while not reader.at_end:
            if reader.starts_with(" "):
                reader.advance(1)
                continue

            loc = reader.location

            head = reader.head(2)
            if head is not None and head in OPERATORS_2:
                reader.advance(2)
                yield Token(OPERATORS_2[head], loc)
                continue

            char = reader.peek()
            if char in OPERATORS_1:
                reader.advance(1)
                yield Token(OPERATORS_1[char], loc)
                continue

            digits = reader.consume_digits()
            if digits:
                yield Token(TokenType.NUM, loc, self._literal(digits, loc))
                continue

            raise TokenizeError(char, loc, self._source)

        yield Token(TokenType.EOF, reader.location)

    def _literal(self, digits: str, loc: Location) -> int:
        significant = digits.lstrip("0")
        if len(significant) <= _U64_DIGITS:
            value = int(significant or "0")
            if value <= U64_MAX:
                return value
        if self._config.overflow == "error":
            raise LiteralOverflowError(digits, loc, self._source)
        return _wrap_digits(significant)


def _wrap_digits(digits: str) -> int:
    """Value of ``digits`` modulo 2**64, folded in fixed-size chunks.

    Never converts more than ``_CHUNK`` digits at once, so arbitrarily long
    literals stay clear of the interpreter's int/str conversion limit.
    """
    value = 0
    for start in range(0, len(digits), _CHUNK):
        chunk = digits[start : start + _CHUNK]
        value = (value * 10 ** len(chunk) + int(chunk)) & U64_MAX
    return value


def tokenize(source: str, config: LexerConfig | None = None) -> list[Token]:
    """Tokenize ``source`` into a list ending with one EOF token.

    Raises:
        TokenizeError: No rule matches at some location
        LiteralOverflowError: A literal exceeds 64 bits (default policy)
    """
    return Lexer(source, config).tokenize()
