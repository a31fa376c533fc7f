"""
authstore.utils
---------------
Small encoding helpers used by the JSON codec and key generation.
"""

from __future__ import annotations
import base64, secrets


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))

def random_bytes(n: int) -> bytes:
    return secrets.token_bytes(n)
