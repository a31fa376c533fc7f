import asyncio
import pytest
from botocore.exceptions import ClientError
from authstore.storage import InMemoryObjectBackend, KeyedObjectStore, ObjectBackend


class FakeBody:
    def __init__(self, data: bytes):
        self._data = data

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def read(self):
        return self._data


class FakeS3Client:
    """Just enough of an aiobotocore S3 client for get/put/delete."""

    def __init__(self, session):
        self.session = session
        self.bucket_data = session.bucket_data
        self.calls = session.calls

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.session.closed += 1
        return False

    def _maybe_fail(self, op):
        if self.session.fail_with is not None:
            raise self.session.fail_with

    async def put_object(self, Bucket, Key, Body, ContentType):
        self.calls.append(("put", Bucket, Key, ContentType))
        self._maybe_fail("PutObject")
        self.bucket_data[(Bucket, Key)] = Body

    async def get_object(self, Bucket, Key):
        self.calls.append(("get", Bucket, Key))
        self._maybe_fail("GetObject")
        if (Bucket, Key) not in self.bucket_data:
            raise ClientError(
                {"Error": {"Code": "NoSuchKey", "Message": "missing"},
                 "ResponseMetadata": {"HTTPStatusCode": 404}},
                "GetObject",
            )
        return {"Body": FakeBody(self.bucket_data[(Bucket, Key)])}

    async def delete_object(self, Bucket, Key):
        self.calls.append(("delete", Bucket, Key))
        self._maybe_fail("DeleteObject")
        self.bucket_data.pop((Bucket, Key), None)


class FakeS3Session:
    def __init__(self):
        self.bucket_data = {}
        self.calls = []
        self.client_kwargs = []
        self.fail_with = None
        self.closed = 0

    def client(self, service_name, **kwargs):
        assert service_name == "s3"
        self.client_kwargs.append(kwargs)
        return FakeS3Client(self)


class GatedBackend(ObjectBackend):
    """In-memory backend whose operations on chosen keys wait for a gate."""
    name = "gated"

    def __init__(self):
        self.inner = InMemoryObjectBackend()
        self.gates = {}
        self.order = []

    def gate(self, key) -> asyncio.Event:
        event = self.gates[key] = asyncio.Event()
        return event

    async def _pass(self, op, key):
        self.order.append((op, key, "start"))
        if key in self.gates:
            await self.gates[key].wait()
        await asyncio.sleep(0)
        self.order.append((op, key, "end"))

    async def get_object(self, key):
        await self._pass("get", key)
        return await self.inner.get_object(key)

    async def put_object(self, key, body, content_type="application/json"):
        await self._pass("put", key)
        await self.inner.put_object(key, body, content_type)

    async def delete_object(self, key):
        await self._pass("delete", key)
        await self.inner.delete_object(key)


class BrokenBackend(ObjectBackend):
    name = "broken"

    def __init__(self, exc=None):
        self.exc = exc or ConnectionError("storage unreachable")

    async def get_object(self, key):
        raise self.exc

    async def put_object(self, key, body, content_type="application/json"):
        raise self.exc

    async def delete_object(self, key):
        raise self.exc


@pytest.fixture
def fake_session():
    return FakeS3Session()


@pytest.fixture
def memory_backend():
    return InMemoryObjectBackend()


@pytest.fixture
def memory_store(memory_backend):
    return KeyedObjectStore(memory_backend, prefix="session-1/")


@pytest.fixture
def gated_backend():
    return GatedBackend()
