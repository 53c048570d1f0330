"""Exceptions for the exprcc compiler.

Exception Hierarchy:
CompileError (base)
├── TokenizeError             # Unrecognized character in the source
│   └── LiteralOverflowError  # Integer literal wider than 64 bits
├── ParseError                # Token mismatch (exprcc.parser.errors)
└── InternalCompilerError     # Broken AST invariant found during codegen
MachineError                  # Fault while interpreting generated assembly

Error Messages:
Every user-facing error carries the 0-based location of the offending
character or token. When the source text is attached, ``str(error)``
includes the rendered source line and caret:

    ```
    E-LEX-001: unrecognized character '&' at 0:2
    1 & 2
      ^ unrecognized character '&'
    ```

"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from exprcc.environment import diagnostics

if TYPE_CHECKING:
    from exprcc._types import Location
    from exprcc.nodes import Node


class ErrorCode(Enum):
    """Searchable error codes.

    Format: E-{CATEGORY}-{NUMBER}
    Categories: LEX (lexer), PAR (parser), INT (internal), RUN (stack machine)
    """

    # Lexer errors (E-LEX-xxx)
    UNRECOGNIZED_CHARACTER = "E-LEX-001"
    LITERAL_OVERFLOW = "E-LEX-002"

    # Parser errors (E-PAR-xxx)
    UNEXPECTED_TOKEN = "E-PAR-001"
    EXPECTED_NUMBER = "E-PAR-002"
    TRAILING_TOKEN = "E-PAR-003"
    NESTING_TOO_DEEP = "E-PAR-004"

    # Internal errors (E-INT-xxx)
    INVALID_AST = "E-INT-001"

    # Stack machine errors (E-RUN-xxx)
    MACHINE_FAULT = "E-RUN-001"

    @property
    def category(self) -> str:
        """Error category (e.g., 'lexer', 'parser')."""
        prefix = self.value.split("-")[1]
        return {
            "LEX": "lexer",
            "PAR": "parser",
            "INT": "internal",
            "RUN": "machine",
        }.get(prefix, "unknown")


class CompileError(Exception):
    """Base exception for all compilation failures.

    Attributes:
        message: Error description without location or snippet
        location: Where the error occurred, or None
        source: Source text, when known, for snippet rendering
        code: Searchable error code
    """

    code: ErrorCode | None = None

    def __init__(
        self,
        message: str,
        location: Location | None = None,
        source: str | None = None,
    ):
        self.message = message
        self.location = location
        self.source = source
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        header = self.message
        if self.location is not None:
            header += f" at {self.location}"
        if self.code:
            header = f"{self.code.value}: {header}"
        if self.source is not None and self.location is not None:
            return header + "\n" + diagnostics.render(self.source, self.location, self.message)
        return header

    def format_compact(self) -> str:
        """Format as a terminal diagnostic without traceback noise.

        Format::

            E-PAR-003: unexpected trailing token ')'
              --> 0:3
            1+2)
               ^ unexpected trailing token ')'
        """
        parts: list[str] = []
        code_prefix = f"{self.code.value}: " if self.code else ""
        parts.append(f"{code_prefix}{self.message}")
        if self.location is not None:
            parts.append(f"  --> {self.location}")
            if self.source is not None:
                parts.append(diagnostics.render(self.source, self.location, self.message))
        return "\n".join(parts)


class TokenizeError(CompileError):
    """No lexer rule matches at a location.

    Attributes:
        char: The offending character
    """

    code: ErrorCode | None = ErrorCode.UNRECOGNIZED_CHARACTER

    def __init__(self, char: str, location: Location, source: str | None = None):
        self.char = char
        super().__init__(f"unrecognized character {char!r}", location, source)


class LiteralOverflowError(TokenizeError):
    """Integer literal does not fit in 64 bits.

    Raised only under the default ``overflow="error"`` policy. ``char`` is
    the first digit of the literal; ``literal`` is the full digit run.
    """

    code: ErrorCode | None = ErrorCode.LITERAL_OVERFLOW

    def __init__(self, literal: str, location: Location, source: str | None = None):
        self.literal = literal
        self.char = literal[:1]
        CompileError.__init__(
            self,
            f"integer literal {literal} does not fit in 64 bits",
            location,
            source,
        )


class InternalCompilerError(CompileError):
    """An AST invariant was broken.

    This is a defect in the parser or in code constructing nodes by hand,
    never a problem with the user's input.
    """

    code: ErrorCode | None = ErrorCode.INVALID_AST

    def __init__(self, message: str, node: Node | None = None):
        self.node = node
        super().__init__(f"internal compiler error: {message}")


class MachineError(Exception):
    """Fault while interpreting generated assembly.

    Attributes:
        message: Error description
        lineno: 1-based line of the faulting instruction, if known
        instruction: The faulting instruction text, if known
    """

    code: ErrorCode = ErrorCode.MACHINE_FAULT

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        instruction: str | None = None,
    ):
        self.message = message
        self.lineno = lineno
        self.instruction = instruction
        text = f"{self.code.value}: {message}"
        if lineno is not None:
            text += f" (line {lineno}: {instruction!r})"
        super().__init__(text)
