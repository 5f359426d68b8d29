"""Exception hierarchy shared by the sitemap, manifest and transport layers."""

from __future__ import annotations


class LLMSTxtError(Exception):
    """Base class for every error raised by llmstxt."""


class ValidationError(LLMSTxtError, ValueError):
    """Raised when a caller passes malformed arguments (titles, items, paths)."""


class DataError(LLMSTxtError):
    """Raised when an operation needs data that has not been loaded yet."""


class ParseError(LLMSTxtError):
    """Raised when a sitemap document yields no usable ``<url>`` entries."""


class StructureError(LLMSTxtError):
    """Raised when manifest text violates the llms.txt grammar beyond repair.

    Attributes:
        line -- the offending line, when the failure is tied to one
        url  -- the offending URL, when the failure is an invalid link target
    """

    def __init__(self, message: str, *, line: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.url = url


class TransportError(LLMSTxtError, OSError):
    """Raised when a location cannot be fetched, read or written.

    Attributes:
        url    -- the location that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
