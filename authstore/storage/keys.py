"""
authstore.storage.keys
----------------------
Logical key -> object key mapping.

``legacy`` keeps the historical substitution (``/`` -> ``__``, ``:`` -> ``-``)
so existing buckets and folders stay readable. It is not injective: ``a/b``
and ``a__b`` land on the same object. ``quoted`` percent-encodes the key and
never collides.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional
from urllib.parse import quote
from .errors import ConfigurationError


def fix_file_name(key: Optional[str]) -> str:
    if not key:
        return ""
    return key.replace("/", "__").replace(":", "-")


def quote_file_name(key: Optional[str]) -> str:
    if not key:
        return ""
    return quote(key, safe="")


KEY_ENCODERS: Dict[str, Callable[[Optional[str]], str]] = {
    "legacy": fix_file_name,
    "quoted": quote_file_name,
}


class ObjectKeyResolver:
    def __init__(self, prefix: str = "", encoding: str = "legacy"):
        if encoding not in KEY_ENCODERS:
            raise ConfigurationError(f"Unknown key encoding: {encoding}")
        self.prefix = prefix or ""
        self.encoding = encoding
        self._encode = KEY_ENCODERS[encoding]

    def resolve(self, key: Optional[str]) -> str:
        return f"{self.prefix}{self._encode(key)}"


def creds_key() -> str:
    return "creds.json"


def signal_key(category: str, key_id: str) -> str:
    return f"{category}-{key_id}.json"
