from __future__ import annotations
import asyncio
from contextlib import AsyncExitStack
from typing import Any, Optional
import aioboto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from authstore.logger import get_logger
from authstore.storage.errors import ObjectNotFoundError, StorageTransientError
from authstore.storage.models import S3Config
from authstore.storage.provider import ObjectBackend

log = get_logger("authstore.storage.s3")

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_not_found(err: ClientError) -> bool:
    code = str(err.response.get("Error", {}).get("Code", ""))
    status = err.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3ObjectBackend(ObjectBackend):
    """
    S3 (or S3-compatible) bucket backend built on aioboto3.

    One client is opened on first use and kept until close().
    """
    name = "s3"

    def __init__(self, config: S3Config, session: Optional[Any] = None):
        self.config = config
        self.bucket = config.bucket
        self.session = session or aioboto3.Session(
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            aws_session_token=config.aws_session_token,
            region_name=config.region_name,
        )
        self.client_config = Config(retries={"max_attempts": config.max_attempts, "mode": config.retry_mode})
        self._client: Optional[Any] = None
        self._exit_stack: Optional[AsyncExitStack] = None
        self._client_lock = asyncio.Lock()

    async def _get_client(self):
        if self._client is not None:
            return self._client
        async with self._client_lock:
            if self._client is None:
                stack = AsyncExitStack()
                self._client = await stack.enter_async_context(
                    self.session.client("s3", endpoint_url=self.config.endpoint_url, config=self.client_config)
                )
                self._exit_stack = stack
                log.debug(f"opened S3 client for bucket {self.bucket}")
        return self._client

    async def get_object(self, key: str) -> bytes:
        try:
            s3 = await self._get_client()
            response = await s3.get_object(Bucket=self.bucket, Key=key)
            async with response["Body"] as stream:
                return await stream.read()
        except ClientError as e:
            if _is_not_found(e):
                raise ObjectNotFoundError(key) from e
            raise StorageTransientError(f"GET s3://{self.bucket}/{key} failed: {e}") from e
        except BotoCoreError as e:
            raise StorageTransientError(f"GET s3://{self.bucket}/{key} failed: {e}") from e

    async def put_object(self, key: str, body: bytes, content_type: str = "application/json") -> None:
        s3 = await self._get_client()
        await s3.put_object(Bucket=self.bucket, Key=key, Body=body, ContentType=content_type)
        log.debug(f"PUT s3://{self.bucket}/{key} ({len(body)} bytes)")

    async def delete_object(self, key: str) -> None:
        s3 = await self._get_client()
        await s3.delete_object(Bucket=self.bucket, Key=key)
        log.debug(f"DELETE s3://{self.bucket}/{key}")

    async def close(self) -> None:
        async with self._client_lock:
            stack, self._exit_stack, self._client = self._exit_stack, None, None
        if stack is not None:
            await stack.aclose()
