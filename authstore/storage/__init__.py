# authstore/storage/__init__.py

from .errors import (
    ConfigurationError,
    CorruptObjectError,
    ObjectNotFoundError,
    StorageError,
    StorageTransientError,
    StorageWriteError,
)
from .keyed_store import KeyedObjectStore
from .keys import ObjectKeyResolver, fix_file_name, quote_file_name
from .locks import KeyedLock
from .models import ReadResult, ReadStatus, S3Config
from .provider import ObjectBackend
from .providers.file_provider import FileObjectBackend
from .providers.memory_provider import InMemoryObjectBackend
import os


def load_object_backend(config: dict | None = None) -> ObjectBackend:
    """
    Factory resolver for the object backend.

        - s3 (default)
        - file
        - memory
    """
    config = dict(config or {})
    provider = config.pop("provider", None) or os.getenv("AUTHSTORE_BACKEND", "s3")

    if provider == "memory":
        return InMemoryObjectBackend()

    if provider == "file":
        folder = config.get("folder") or os.getenv("AUTHSTORE_FOLDER", "auth_info")
        return FileObjectBackend(folder)

    if provider == "s3":
        from .providers.s3_provider import S3ObjectBackend

        s3_config = S3Config.from_dict(config) if config else S3Config.from_env()
        return S3ObjectBackend(s3_config)

    raise ConfigurationError(f"Unknown storage backend: {provider}")


__all__ = [
    "ConfigurationError",
    "CorruptObjectError",
    "FileObjectBackend",
    "InMemoryObjectBackend",
    "KeyedLock",
    "KeyedObjectStore",
    "ObjectBackend",
    "ObjectKeyResolver",
    "ObjectNotFoundError",
    "ReadResult",
    "ReadStatus",
    "S3Config",
    "StorageError",
    "StorageTransientError",
    "StorageWriteError",
    "fix_file_name",
    "load_object_backend",
    "quote_file_name",
]
