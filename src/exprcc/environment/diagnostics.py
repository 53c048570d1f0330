"""Source-located diagnostic rendering.

The canonical presentation of an error with a location is three lines::

    1 & 2
      ^ unrecognized character '&'

preceded, when reporting, by an optional header line naming the error code.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from exprcc.environment import terminal

if TYPE_CHECKING:
    from exprcc._types import Location
    from exprcc.environment.exceptions import CompileError


def source_line(source: str, line: int) -> str:
    """Return line ``line`` (0-based) of ``source``, or "" past the end."""
    lines = source.split("\n")
    if 0 <= line < len(lines):
        return lines[line]
    return ""


def render(
    source: str,
    location: Location,
    message: str,
    *,
    colors: bool | None = False,
) -> str:
    """Render the source line at ``location`` with a caret and ``message``.

    Args:
        source: Full source text
        location: 0-based position to point at
        message: Text printed after the caret
        colors: True/False to force ANSI colors, None to auto-detect

    Returns:
        Two lines joined by a newline: the source line verbatim, then
        ``location.column`` spaces, a caret and the message.
    """
    pointer = " " * location.column + "^ " + message
    return f"{source_line(source, location.line)}\n{terminal.caret(pointer, colors)}"


class DiagnosticReporter:
    """Write rendered diagnostics to a stream.

    Example:
        >>> reporter = DiagnosticReporter(sys.stdout, colors=False)
        >>> reporter.report("1 & 2", Location(0, 2), "unrecognized character '&'")
        1 & 2
          ^ unrecognized character '&'
    """

    __slots__ = ("_colors", "_stream")

    def __init__(self, stream: TextIO | None = None, colors: bool | None = None):
        self._stream = stream
        self._colors = colors

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the write.
        return self._stream if self._stream is not None else sys.stderr

    def report(
        self,
        source: str,
        location: Location,
        message: str,
        header: str | None = None,
    ) -> None:
        if header:
            print(header, file=self.stream)
        print(render(source, location, message, colors=self._colors), file=self.stream)

    def report_error(self, error: CompileError, source: str) -> None:
        """Report a compile error, with a caret when it carries a location."""
        header = terminal.format_error_header(
            error.code.value if error.code else None,
            f"compile error at {terminal.location(str(error.location), self._colors)}"
            if error.location is not None
            else error.message,
            self._colors,
        )
        if error.location is None:
            print(header, file=self.stream)
            return
        self.report(source, error.location, error.message, header=header)
