"""
authstore.codec
---------------
JSON codec for stored auth objects.

Binary values travel as tagged objects so that every reader of the bucket
(or of the multi-file folder) rebuilds the same bytes:

    {"type": "Buffer", "data": [0, 1, 255]}

On the way back in, the legacy base64 form ``{"type": "Buffer", "data": "AAH/"}``
and the ``{"buffer": true, "value": ...}`` form are also accepted.
"""

from __future__ import annotations
import json
from typing import Any, Dict
from .utils import b64d

BUFFER_TYPE = "Buffer"


def buffer_replacer(value: Any) -> Any:
    """``default=`` hook for json.dumps."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return {"type": BUFFER_TYPE, "data": list(bytes(value))}
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def buffer_reviver(obj: Dict[str, Any]) -> Any:
    """``object_hook=`` for json.loads."""
    if obj.get("type") == BUFFER_TYPE or obj.get("buffer") is True:
        val = obj.get("data")
        if val is None:
            val = obj.get("value")
        if isinstance(val, str):
            return b64d(val)
        return bytes(val or [])
    return obj


def buffer_json_dumps(value: Any) -> str:
    return json.dumps(value, default=buffer_replacer, ensure_ascii=False)


def buffer_json_loads(text: str | bytes) -> Any:
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("utf-8")
    return json.loads(text, object_hook=buffer_reviver)
