from typing import Dict
from authstore.storage.errors import ObjectNotFoundError
from authstore.storage.provider import ObjectBackend


class InMemoryObjectBackend(ObjectBackend):
    name = "memory"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}

    async def get_object(self, key: str) -> bytes:
        try:
            return self.objects[key]
        except KeyError:
            raise ObjectNotFoundError(key) from None

    async def put_object(self, key: str, body: bytes, content_type: str = "application/json") -> None:
        self.objects[key] = bytes(body)
        self.content_types[key] = content_type

    async def delete_object(self, key: str) -> None:
        self.objects.pop(key, None)
        self.content_types.pop(key, None)
