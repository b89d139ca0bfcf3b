"""Terminal output for the headless commands.

Markers are colored with ANSI codes when stdout is a terminal and
``NO_COLOR`` is unset; otherwise plain text is written.
"""

import os
import sys
from typing import TextIO

_ANSI = {
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "red": "\033[31m",
    "dim": "\033[2m",
}
_ANSI_RESET = "\033[0m"

MARK_OK = "✓"
MARK_NOTE = "•"
MARK_FAIL = "✗"


def use_color(stream: TextIO | None = None) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def paint(text: str, color: str, stream: TextIO | None = None) -> str:
    """Wrap ``text`` in the named color if the stream shows color."""
    if not use_color(stream):
        return text
    return f"{_ANSI[color]}{text}{_ANSI_RESET}"


def _emit(marker: str, color: str, message: str, stream: TextIO | None = None) -> None:
    stream = stream or sys.stdout
    print(f"{paint(marker, color, stream)} {message}", file=stream)


def success(message: str) -> None:
    _emit(MARK_OK, "green", message)


def info(message: str) -> None:
    _emit(MARK_NOTE, "yellow", message)


def error(message: str) -> None:
    """Report a failure on stderr."""
    _emit(MARK_FAIL, "red", message, sys.stderr)


def header(message: str) -> None:
    print(paint(message, "blue"))


def detail(message: str) -> None:
    """An indented secondary line, such as one result card."""
    print(f"  {paint(message, 'dim')}")
