"""Custom exception hierarchy for test filtering."""
from __future__ import annotations


class FilterError(Exception):
    """Base exception for filter parsing, loading and application."""


class ParseError(FilterError):
    """Raised when filter text does not match the filter grammar.

    Carries the source name and the 1-based line and column of the first
    character that could not be parsed.
    """

    def __init__(
        self,
        message: str,
        source_name: str,
        line: int,
        column: int,
    ) -> None:
        self.message = message
        self.source_name = source_name
        self.line = line
        self.column = column
        super().__init__(f"{source_name}:{line}:{column}: {message}")


class FilterFileError(FilterError):
    """Raised when a filter file cannot be read."""


class ExecutionError(FilterError):
    """Raised when a filtered test run cannot be prepared."""
