"""
SEOmoz API Errors

Every failure raised by the client derives from MozAPIError, so callers can
catch one type. Nothing here is retried; retry policy belongs to the caller.
"""

from typing import Any, Optional


class MozAPIError(Exception):
    """Base exception for SEOmoz API errors."""
    def __init__(self, message: str, status_code: int = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class TransportError(MozAPIError):
    """Network or connection failure while talking to the API."""
    pass


class APIStatusError(MozAPIError):
    """The API answered with a non-2xx status code."""
    pass


class DecodeError(MozAPIError):
    """Response body is not valid JSON for the expected shape."""
    pass


class CountMismatchError(MozAPIError):
    """
    Batch response length differs from the number of URLs requested.

    The API returns batch results positionally, so a short or long array
    cannot be mapped back onto the request.
    """
    def __init__(self, requested: int, received: int, response: Optional[Any] = None):
        super().__init__(
            "Invalid response: mismatch between number of urls requested "
            f"({requested}) and data received ({received})",
            response=response,
        )
        self.requested = requested
        self.received = received


class ConfigurationError(MozAPIError, ValueError):
    """Client was constructed with unusable settings."""
    pass
