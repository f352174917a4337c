from __future__ import annotations


class StrataError(Exception):
    """Base class for pystrata errors."""


class ConfigurationError(StrataError, ValueError):
    """Raised when a source is constructed with invalid settings."""


class ArgumentError(StrataError, ValueError):
    """Raised when a required argument is missing or empty."""


class FormatError(StrataError, ValueError):
    """Raised when a source cannot interpret its input.

    ``line`` and ``column`` are 1-based and set when the underlying parser
    exposes a position.
    """

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} {line_info(line, column)}"
        super().__init__(message)


class SecurityRejectionError(FormatError):
    """Raised when a document uses a construct refused for security reasons."""


def line_info(line: int, column: int | None) -> str:
    if column is None:
        return f"Line {line}."
    return f"Line {line}, column {column}."
