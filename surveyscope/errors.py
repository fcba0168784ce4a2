"""Exception types raised by surveyscope.

``CorruptShareToken`` is the one callers are expected to catch and show to
users: it always carries the same human-readable message, regardless of which
decode stage failed.  The underlying cause is chained via ``__cause__``.
"""

from __future__ import annotations

CORRUPT_LINK_MESSAGE = "The shared analysis link is invalid or corrupted."


class SurveyscopeError(Exception):
    """Base class for all surveyscope errors."""


class MalformedResult(SurveyscopeError, ValueError):
    """An analysis result is missing required fields or has the wrong shape."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class CorruptShareToken(SurveyscopeError, ValueError):
    """A share token could not be decoded back into an analysis result."""

    def __init__(self, reason: str = "") -> None:
        super().__init__(CORRUPT_LINK_MESSAGE)
        self.reason = reason


class ExportWriteFailure(SurveyscopeError, OSError):
    """An export artifact could not be written to disk."""
