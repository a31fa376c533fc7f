# authstore/storage/errors.py


class StorageError(Exception):
    pass


class ObjectNotFoundError(StorageError):
    """The backend has no object under the requested key."""


class StorageTransientError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


class CorruptObjectError(StorageError):
    """A stored object exists but its body is not valid JSON."""


class ConfigurationError(ValueError):
    pass
