"""Error taxonomy for the analysis pipeline.

Every stage either returns a well-formed value or raises one of these.
Only FormatError is eligible for the automatic strict-JSON retry.
"""

from typing import Optional


class AuthentiometerError(Exception):
    """Base class. str(error) is the message shown to the user."""


class ValidationError(AuthentiometerError):
    """Caller-supplied input violates a precondition (missing key, bad URL, oversized text)."""


class TransportError(AuthentiometerError):
    """Provider call failed: non-success HTTP status, network error or timeout."""

    def __init__(self, message: str, provider: str, status_code: Optional[int] = None, body_excerpt: str = ""):
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code
        self.body_excerpt = body_excerpt


class FormatError(AuthentiometerError):
    """Model output is not exactly one JSON object."""


class ContentUnavailableError(AuthentiometerError):
    """Extraction produced no usable text."""
