from __future__ import annotations

from typing import Optional


class HackerNewsError(RuntimeError):
    """Base class for errors surfaced to fetch callers."""


class FetchError(HackerNewsError):
    """Raised when the transport fails (connection error, timeout, non-2xx)."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class PostParseError(HackerNewsError):
    """Raised when a payload is missing a required field or is malformed."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
