from __future__ import annotations

import base64
import hashlib

SAFETY_TAG_LENGTH = 32


def derive_safety_tag(prefix: str, destination: str) -> str:
    """Content-addressed marker for one (prefix, destination) run.

    SHA-256 over prefix and destination with a NUL separator so that
    ("a", "bc") and ("ab", "c") never share a tag. Encoded with the URL-safe
    base64 alphabet, padding stripped, truncated to 32 characters.
    """
    h = hashlib.sha256()
    h.update(prefix.encode())
    h.update(b"\x00")
    h.update(destination.encode())
    encoded = base64.urlsafe_b64encode(h.digest()).rstrip(b"=").decode("ascii")
    return encoded[:SAFETY_TAG_LENGTH]
