"""
SEOmoz Data Collection Package

- client: signed single, batch and bulk url-metrics queries
- orchestrator: batching and concurrent fan-out for bulk queries
- reconcile: response decoding and mapping back to requested URLs
- builder / signing: request construction and authentication
"""

from .client import MozClient
from .orchestrator import BulkQueryOrchestrator, ChunkOutcome, chunk_urls
from .reconcile import parse_batch_response, parse_single_response, synthesize_url
from .signing import SIGNATURE_TTL, compute_hmac, sign

__all__ = [
    # Client
    "MozClient",

    # Orchestrator
    "BulkQueryOrchestrator",
    "ChunkOutcome",
    "chunk_urls",

    # Reconciliation
    "parse_batch_response",
    "parse_single_response",
    "synthesize_url",

    # Signing
    "SIGNATURE_TTL",
    "compute_hmac",
    "sign",
]
