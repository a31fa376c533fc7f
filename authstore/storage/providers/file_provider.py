from __future__ import annotations
import os
import aiofiles
import aiofiles.os
from authstore.logger import get_logger
from authstore.storage.errors import ObjectNotFoundError, StorageError
from authstore.storage.provider import ObjectBackend

log = get_logger("authstore.storage.file")


class FileObjectBackend(ObjectBackend):
    """
    One file per object key inside a single folder.

    This is the multi-file layout: ``creds.json``, ``pre-key-1.json`` ...
    Object keys must already be file-name safe (see storage.keys).
    """
    name = "file"

    def __init__(self, folder: str):
        if os.path.exists(folder) and not os.path.isdir(folder):
            raise StorageError(f"found something that is not a directory at {folder}, "
                               "either delete it or specify a different location")
        os.makedirs(folder, exist_ok=True)
        self.folder = folder

    def _path(self, key: str) -> str:
        return os.path.join(self.folder, key)

    async def get_object(self, key: str) -> bytes:
        try:
            async with aiofiles.open(self._path(key), "rb") as f:
                return await f.read()
        except FileNotFoundError:
            raise ObjectNotFoundError(key) from None

    async def put_object(self, key: str, body: bytes, content_type: str = "application/json") -> None:
        # content type is implied by the .json file name
        async with aiofiles.open(self._path(key), "wb") as f:
            await f.write(body)

    async def delete_object(self, key: str) -> None:
        try:
            await aiofiles.os.remove(self._path(key))
        except FileNotFoundError:
            log.debug(f"delete of missing file {key}")
