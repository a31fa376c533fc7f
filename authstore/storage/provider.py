# authstore/storage/provider.py
from __future__ import annotations
from abc import ABC, abstractmethod


class ObjectBackend(ABC):
    """Interface for a flat key -> bytes object store."""

    name: str = "base"

    @abstractmethod
    async def get_object(self, key: str) -> bytes:
        """Return the object body; raise ObjectNotFoundError if missing."""

    @abstractmethod
    async def put_object(self, key: str, body: bytes, content_type: str = "application/json") -> None:
        pass

    @abstractmethod
    async def delete_object(self, key: str) -> None:
        """Delete the object. Deleting a missing key is not an error."""

    async def close(self) -> None:
        return
