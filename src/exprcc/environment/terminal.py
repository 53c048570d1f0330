"""Terminal color utilities for compiler diagnostics.

ANSI color codes with automatic TTY detection and NO_COLOR support.
Diagnostics go to stderr, so detection looks at stderr rather than stdout.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "red": "\033[31m",
    "cyan": "\033[36m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "red", "cyan", "bright_red"]

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def _should_use_colors() -> bool:
    """Check if the terminal supports colors and the user allows them.

    Respects:
        - NO_COLOR environment variable (https://no-color.org/)
        - FORCE_COLOR environment variable (overrides NO_COLOR)
        - sys.stderr.isatty() for TTY detection
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stderr.isatty()


# Cache the color decision
_USE_COLORS = _should_use_colors()


def colorize(text: str, *colors: ColorName, enabled: bool | None = None) -> str:
    """Apply ANSI color codes to text.

    Args:
        text: Text to colorize
        *colors: One or more color names to apply
        enabled: Override the detected color support

    Returns:
        Colorized text if colors are enabled, otherwise plain text

    Example:
        >>> colorize("error", "red", "bold", enabled=True)
        '\033[31m\033[1merror\033[0m'
    """
    use = _USE_COLORS if enabled is None else enabled
    if not use or not colors:
        return text

    prefix = "".join(_COLORS.get(color, "") for color in colors)
    if not prefix:
        return text
    return f"{prefix}{text}{_COLORS['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI color codes from text."""
    return _ANSI_ESCAPE.sub("", text)


# Semantic color helpers
def error_code(text: str, enabled: bool | None = None) -> str:
    """Error code (bright red + bold)."""
    return colorize(text, "bright_red", "bold", enabled=enabled)


def location(text: str, enabled: bool | None = None) -> str:
    """Source location (cyan)."""
    return colorize(text, "cyan", enabled=enabled)


def caret(text: str, enabled: bool | None = None) -> str:
    """Caret pointer and its message (bright red)."""
    return colorize(text, "bright_red", enabled=enabled)


def format_error_header(code: str | None, message: str, enabled: bool | None = None) -> str:
    """Format an error header with an optional code.

    Example:
        >>> format_error_header("E-LEX-001", "unrecognized character '&'", enabled=False)
        "E-LEX-001: unrecognized character '&'"
    """
    if code:
        return f"{error_code(code + ':', enabled)} {message}"
    return message
