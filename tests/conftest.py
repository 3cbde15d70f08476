"""
Pytest Configuration and Shared Fixtures

Provides a fake SEOmoz API served through httpx.MockTransport plus common
response payloads.
"""

import json
from typing import Any, Dict, List, Optional, Set

import httpx
import pytest

from seomoz.collector import MozClient


# ============================================================================
# Mock Data
# ============================================================================

SINGLE_RESPONSE = '{"upa": 21, "pda": 42, "uid": 5, "uu": "https://example.com"}'
BATCH_RESPONSE_NO_URL = '[{"upa": 21, "pda": 42, "uid": 5, "uu": ""}]'

FULL_SCHEMA_RECORD: Dict[str, Any] = {
    "ut": "Example Domain",
    "uu": "example.com/",
    "ufq": "example.com",
    "upl": "example.com",
    "ueid": 120,
    "feid": 3400,
    "peid": 3500,
    "ujid": 130,
    "uifq": 60,
    "uipl": 55,
    "uid": 150,
    "fid": 900,
    "pid": 950,
    "umrp": 5.1,
    "umrr": 1.2e-9,
    "fmrp": 6.2,
    "fmrr": 2.1e-8,
    "pmrp": 6.3,
    "pmrr": 2.2e-8,
    "utrp": 5.5,
    "utrr": 3.3e-9,
    "ftrp": 6.1,
    "ftrr": 1.1e-8,
    "ptrp": 6.1,
    "ptrr": 1.1e-8,
    "uemrp": 4.9,
    "uemrr": 9.9e-10,
    "fejp": 5.9,
    "fejr": 1.9e-8,
    "pejp": 5.9,
    "pejr": 1.9e-8,
    "pjp": 6.0,
    "pjr": 2.0e-8,
    "fjp": 6.0,
    "fjr": 2.0e-8,
    "fspsc": 1,
    "us": 200,
    "fuid": 4000,
    "puid": 4100,
    "fipl": 300,
    "upa": 64,
    "pda": 93,
}


def metrics_record(url: str, upa: float = 21, pda: float = 42, uid: float = 5) -> Dict[str, Any]:
    """One metrics object as the API returns it."""
    return {"upa": upa, "pda": pda, "uid": uid, "uu": url}


# ============================================================================
# Fake API
# ============================================================================

class FakeMozAPI:
    """
    In-memory stand-in for the url-metrics endpoint.

    Batch requests are answered with one record per posted URL, echoing the
    URL back. A batch containing any URL in ``fail_urls`` fails with
    ``fail_status`` or, when ``fail_status`` is None, a connection error.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.batches: List[List[str]] = []
        self.fail_urls: Set[str] = set()
        self.fail_status: Optional[int] = 500
        self.single_body: str = SINGLE_RESPONSE

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "GET":
            return httpx.Response(200, content=self.single_body.encode())

        urls = json.loads(request.content)
        self.batches.append(urls)

        if self.fail_urls.intersection(urls):
            if self.fail_status is None:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(self.fail_status, text="Internal Server Error")

        return httpx.Response(200, json=[metrics_record(url) for url in urls])

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def fake_api() -> FakeMozAPI:
    """Fresh fake API per test."""
    return FakeMozAPI()


@pytest.fixture
def make_client():
    """Factory for clients talking to a given transport."""
    def _make(transport: httpx.AsyncBaseTransport, **kwargs) -> MozClient:
        kwargs.setdefault("clock", lambda: 1000.0)
        return MozClient("my_id", "my_secret", transport=transport, **kwargs)
    return _make


def body_transport(body: str, status_code: int = 200) -> httpx.MockTransport:
    """Transport answering every request with the same body."""
    return httpx.MockTransport(lambda request: httpx.Response(status_code, content=body.encode()))


@pytest.fixture
def respond_with():
    """Factory for transports answering every request with one fixed body."""
    return body_transport


@pytest.fixture
def full_schema_record() -> Dict[str, Any]:
    """Metrics object with every documented column populated."""
    return dict(FULL_SCHEMA_RECORD)
