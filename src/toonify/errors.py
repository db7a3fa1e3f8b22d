"""Exception hierarchy for toonify."""

from typing import Optional


class ToonError(Exception):
    """Base class for all toonify errors."""


class ConfigurationError(ToonError, ValueError):
    """Raised when encode or decode options are invalid."""


class EncodingError(ToonError, ValueError):
    """Raised when a value cannot be serialized to TOON."""


class DecodingError(ToonError, ValueError):
    """Raised when TOON text cannot be parsed.

    Attributes:
        message: Description of the problem
        line: 1-based line number where the problem was found, if known
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.message = message
        self.line = line
        super().__init__(f"line {line}: {message}" if line is not None else message)
