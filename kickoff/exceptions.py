"""Kickoff exception hierarchy.

The simulation core never raises; these cover configuration and the
commentary collaborator.
"""

from typing import Optional


class KickoffError(Exception):
    """Root of all Kickoff exceptions."""


class ConfigurationError(KickoffError):
    """Invalid configuration values."""


class CommentaryError(KickoffError):
    """Base exception for commentary client errors."""


class CommentaryRateLimitError(CommentaryError):
    """Raised when rate limited (HTTP 429 / RESOURCE_EXHAUSTED)."""


class CommentaryAPIError(CommentaryError):
    """Raised for non-success API responses."""

    def __init__(self, message: str, status_code: int, response_body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
