"""
authstore.storage.keyed_store
-----------------------------
JSON values by logical key over an ObjectBackend.

Every operation resolves its object key first and runs under that key's
named lock, so reads, writes and deletes of one object are strictly ordered
while different objects proceed in parallel.

Failure policy:
- write  -> backend errors propagate as StorageWriteError
- read   -> missing object or backend error yields None
- remove -> backend errors are logged and dropped
- a body that is not valid JSON is logged at ERROR and read as None;
  fetch reports it as CORRUPT
"""

from __future__ import annotations
from typing import Any, Optional
from authstore.codec import buffer_json_dumps, buffer_json_loads
from authstore.logger import get_logger
from .errors import CorruptObjectError, ObjectNotFoundError, StorageWriteError
from .keys import ObjectKeyResolver
from .locks import KeyedLock
from .models import ReadResult, ReadStatus
from .provider import ObjectBackend

log = get_logger("authstore.storage")

CONTENT_TYPE = "application/json"


class KeyedObjectStore:
    def __init__(
        self,
        backend: ObjectBackend,
        prefix: str = "",
        key_encoding: str = "legacy",
        lock: Optional[KeyedLock] = None,
    ):
        self.backend = backend
        self.resolver = ObjectKeyResolver(prefix, key_encoding)
        # pass a shared KeyedLock to serialize with other stores on the same objects
        self.lock = lock if lock is not None else KeyedLock()

    def object_key(self, key: Optional[str]) -> str:
        return self.resolver.resolve(key)

    async def write(self, value: Any, key: str) -> None:
        object_key = self.object_key(key)
        body = buffer_json_dumps(value).encode("utf-8")
        async with self.lock.acquire(object_key):
            try:
                await self.backend.put_object(object_key, body, CONTENT_TYPE)
            except Exception as e:
                log.error(f"write failed for {object_key}: {e}")
                raise StorageWriteError(f"write failed for {object_key}") from e

    async def fetch(self, key: str) -> ReadResult:
        object_key = self.object_key(key)
        async with self.lock.acquire(object_key):
            try:
                body = await self.backend.get_object(object_key)
            except ObjectNotFoundError:
                log.debug(f"no object at {object_key}")
                return ReadResult(ReadStatus.NOT_FOUND)
            except Exception as e:
                log.warning(f"read failed for {object_key}: {e}")
                return ReadResult(ReadStatus.ERROR, error=e)

        if not body:
            return ReadResult(ReadStatus.NOT_FOUND)
        try:
            value = buffer_json_loads(body)
        except (ValueError, TypeError) as e:
            err = CorruptObjectError(f"{object_key} does not hold valid JSON")
            err.__cause__ = e
            log.error(f"corrupt object at {object_key}: {e}")
            return ReadResult(ReadStatus.CORRUPT, error=err)
        return ReadResult(ReadStatus.FOUND, value=value)

    async def read(self, key: str) -> Any:
        result = await self.fetch(key)
        return result.value if result.found else None

    async def remove(self, key: str) -> None:
        object_key = self.object_key(key)
        async with self.lock.acquire(object_key):
            try:
                await self.backend.delete_object(object_key)
            except Exception as e:
                log.warning(f"delete failed for {object_key}: {e}")

    async def close(self) -> None:
        await self.backend.close()
