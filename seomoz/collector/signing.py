"""
Request Signing

The API authenticates each call with an HMAC-SHA1 signature over the access
id and an expiry timestamp. Signatures are valid for SIGNATURE_TTL seconds.
"""

import base64
import hashlib
import hmac

# Signature validity window in seconds
SIGNATURE_TTL = 300


def compute_hmac(message: str, secret: str) -> str:
    """Return the base64-encoded HMAC-SHA1 of *message* keyed by *secret*."""
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("ascii")


def sign(access_id: str, secret_key: str, expires: int) -> str:
    """Signature for *access_id* valid until the Unix timestamp *expires*."""
    return compute_hmac(f"{access_id}\n{expires}", secret_key)


def expires_at(now: float) -> int:
    """Expiry timestamp for a signature created at *now*."""
    return int(now) + SIGNATURE_TTL
