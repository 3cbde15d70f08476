"""
Response Reconciliation

Turns raw response bodies into URLMetrics. Batch responses are positional:
element i of the JSON array describes the i-th requested URL, so the array
length must match the request and each record is keyed by the URL the
caller asked for.
"""

import logging
import re
from typing import Dict, List
from urllib.parse import SplitResult, quote, urlsplit

from pydantic import TypeAdapter, ValidationError

from ..errors import CountMismatchError, DecodeError
from ..models import URLMetrics

logger = logging.getLogger(__name__)

_METRICS_LIST = TypeAdapter(List[URLMetrics])

# "%" not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

# Characters left unescaped in a path; "%" keeps existing escapes intact
_PATH_SAFE = "/%:@!$&'()*+,;=~-._"


def _split_url(raw: str) -> SplitResult:
    """
    Strictly parse *raw*, raising ValueError where a lenient urlsplit would
    accept garbage: invalid percent-escapes outside the query, control
    characters, whitespace in the host and non-numeric ports.
    """
    if _CONTROL_CHARS.search(raw):
        raise ValueError("control character in URL")

    parts = urlsplit(raw)
    parts.port  # raises ValueError on an invalid port

    if any(ch.isspace() for ch in parts.netloc):
        raise ValueError(f"invalid character in host {parts.netloc!r}")
    for component in (parts.netloc, parts.path, parts.fragment):
        if _BAD_ESCAPE.search(component):
            raise ValueError(f"invalid URL escape in {component!r}")
    return parts


def synthesize_url(raw: str) -> str:
    """
    Canonical-looking URL for a record the API returned without one.

    ``host + path (+ ?query)`` of the requested URL, e.g.
    ``https://example.com`` -> ``example.com/``. Falls back to *raw*
    unchanged when it cannot be parsed.
    """
    try:
        parts = _split_url(raw)
    except ValueError:
        return raw

    # Host without userinfo, path escaped the way it goes on the wire
    host = parts.netloc.rpartition("@")[2]
    request_uri = quote(parts.path, safe=_PATH_SAFE) or "/"
    if parts.query:
        request_uri = f"{request_uri}?{parts.query}"
    return f"{host}{request_uri}"


def parse_single_response(content: bytes) -> URLMetrics:
    """Decode a single-URL response body."""
    try:
        return URLMetrics.model_validate_json(content)
    except ValidationError as e:
        raise DecodeError(f"Invalid response body: {e}", response=content) from e


def parse_batch_response(urls: List[str], content: bytes) -> Dict[str, URLMetrics]:
    """
    Decode a batch response body and key it by requested URL.

    Records missing their URL get one synthesized from the requested URL.
    Duplicate requested URLs collapse to a single entry, last one wins.
    """
    try:
        metrics = _METRICS_LIST.validate_json(content)
    except ValidationError as e:
        raise DecodeError(f"Invalid batch response body: {e}", response=content) from e

    if len(metrics) != len(urls):
        raise CountMismatchError(len(urls), len(metrics), response=content)

    out: Dict[str, URLMetrics] = {}
    for requested, record in zip(urls, metrics):
        if not record.url:
            record = record.model_copy(update={"url": synthesize_url(requested)})
        out[requested] = record

    if len(out) != len(urls):
        logger.debug(f"Batch of {len(urls)} URLs collapsed to {len(out)} distinct keys")
    return out
