"""A small logging interface that keeps the UI apart from lower layers."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, TextIO


class Logger(ABC):
    """Writes messages at the usual levels; subclasses decide where lines go."""

    @abstractmethod
    def _write(self, line: str) -> None:
        """Emit one line of output."""

    def debug(self, message: str) -> None:
        """Log at DEBUG level."""
        self._write(message)

    def error(self, message: str) -> None:
        """Log at ERROR level."""
        self._write(message)

    def error_with_context(self, err: Any, sub: str, *args: str) -> None:
        """Log an error followed by a subject line and context lines."""
        self._write(f"err: {err}")
        self._write(sub)
        for entry in args:
            self._write(entry)

    def info(self, message: str) -> None:
        """Log at INFO level."""
        self._write(message)

    def trace(self, message: str) -> None:
        """Log at TRACE level."""
        self._write(message)

    def warning(self, message: str) -> None:
        """Log at WARN level."""
        self._write(message)


class FmtLogger(Logger):
    """Prints every message as a line, to standard output by default."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream

    def _write(self, line: str) -> None:
        print(line, file=self.stream if self.stream is not None else sys.stdout)


class TestLogger(Logger):
    """Passes every line to a callable, such as a test's collector."""

    __test__ = False

    def __init__(self, log: Optional[Callable[..., Any]] = None) -> None:
        self.log = log

    def _write(self, line: str) -> None:
        if self.log is not None:
            self.log(line)


def default() -> FmtLogger:
    """Return a logger that prints to standard output."""
    return FmtLogger()