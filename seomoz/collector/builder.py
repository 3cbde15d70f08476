"""
Request Builder

Builds the two request shapes the url-metrics endpoint accepts:

- single URL: GET {endpoint}/{quoted url}
- batch: POST {endpoint} with a JSON array of URLs in the body

Both carry the AccessID, Expires, Signature and Cols query parameters.
"""

import json
from typing import Dict, List
from urllib.parse import quote_plus

import httpx

from ..errors import ConfigurationError
from .signing import expires_at, sign


def validate_endpoint(endpoint: str) -> str:
    """Return *endpoint* unchanged, or raise ConfigurationError if unusable."""
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigurationError(f"Invalid API endpoint {endpoint!r}: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Invalid API endpoint {endpoint!r}: expected an http(s) URL")
    return endpoint


def build_query_params(access_id: str, secret_key: str, cols: int, now: float) -> Dict[str, str]:
    """Authentication and column parameters for a request issued at *now*."""
    expires = expires_at(now)
    return {
        "AccessID": access_id,
        "Expires": str(expires),
        "Signature": sign(access_id, secret_key, expires),
        "Cols": str(int(cols)),
    }


def build_get_request(
    http_client: httpx.AsyncClient,
    endpoint: str,
    link: str,
    params: Dict[str, str],
) -> httpx.Request:
    """Single-URL metrics request."""
    url = f"{endpoint.rstrip('/')}/{quote_plus(link)}"
    return http_client.build_request("GET", url, params=params)


def build_post_request(
    http_client: httpx.AsyncClient,
    endpoint: str,
    urls: List[str],
    params: Dict[str, str],
) -> httpx.Request:
    """Batch metrics request. URLs go in the body as-is, not quoted."""
    return http_client.build_request(
        "POST",
        endpoint,
        params=params,
        content=json.dumps(urls).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
