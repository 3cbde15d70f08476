"""
SEOmoz

Async client for the SEOmoz Linkscape url-metrics API:
1. Signs requests with the access id / secret key HMAC scheme
2. Queries single URLs or batches of up to 10
3. Splits larger URL lists into concurrent batches and merges the results
"""

from .collector import MozClient
from .errors import (
    APIStatusError,
    ConfigurationError,
    CountMismatchError,
    DecodeError,
    MozAPIError,
    TransportError,
)
from .models import DEFAULT_COLS, MAX_BATCH_URLS, Cols, URLMetrics

__version__ = "0.1.0"

__all__ = [
    "MozClient",
    "URLMetrics",
    "Cols",
    "DEFAULT_COLS",
    "MAX_BATCH_URLS",
    "MozAPIError",
    "TransportError",
    "APIStatusError",
    "DecodeError",
    "CountMismatchError",
    "ConfigurationError",
]
