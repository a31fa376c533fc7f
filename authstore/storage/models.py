# authstore/storage/models.py
from __future__ import annotations
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional
import os
from .errors import ConfigurationError


class ReadStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"
    CORRUPT = "corrupt"


@dataclass
class ReadResult:
    """
    Outcome of a single object read.

    ``value`` is only meaningful when ``status`` is FOUND; ``error`` holds the
    backend exception when ``status`` is ERROR, or a CorruptObjectError
    when it is CORRUPT.
    """
    status: ReadStatus
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def found(self) -> bool:
        return self.status is ReadStatus.FOUND


KEY_ENCODINGS = ("legacy", "quoted")


@dataclass
class S3Config:
    """
    Connection settings for the S3 backend.

    Retry settings are passed to the botocore client; authstore itself
    never retries.
    """
    bucket: str
    prefix: str = ""
    region_name: Optional[str] = None
    endpoint_url: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    max_attempts: int = 3
    retry_mode: str = "standard"
    key_encoding: str = "legacy"

    def __post_init__(self):
        if not self.bucket:
            raise ConfigurationError("S3Config.bucket is required")
        if self.key_encoding not in KEY_ENCODINGS:
            raise ConfigurationError(f"Unknown key encoding: {self.key_encoding}")
        self.prefix = self.prefix or ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "S3Config":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown S3Config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_env(cls) -> "S3Config":
        bucket = os.getenv("AUTHSTORE_S3_BUCKET")
        if not bucket:
            raise ConfigurationError("AUTHSTORE_S3_BUCKET is not set")
        return cls(
            bucket=bucket,
            prefix=os.getenv("AUTHSTORE_S3_PREFIX", ""),
            region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
            endpoint_url=os.getenv("AUTHSTORE_S3_ENDPOINT"),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
            aws_session_token=os.getenv("AWS_SESSION_TOKEN"),
            max_attempts=int(os.getenv("AUTHSTORE_S3_MAX_ATTEMPTS", "3")),
            retry_mode=os.getenv("AUTHSTORE_S3_RETRY_MODE", "standard"),
            key_encoding=os.getenv("AUTHSTORE_KEY_ENCODING", "legacy"),
        )
