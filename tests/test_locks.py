import asyncio
import pytest
from authstore.storage import KeyedLock


@pytest.mark.asyncio
async def test_same_name_is_fifo():
    lock = KeyedLock()
    order = []

    async def worker(i):
        async with lock.acquire("creds.json"):
            order.append(("in", i))
            await asyncio.sleep(0)
            order.append(("out", i))

    await asyncio.gather(*(worker(i) for i in range(5)))
    assert order == [(step, i) for i in range(5) for step in ("in", "out")]


@pytest.mark.asyncio
async def test_different_names_do_not_block():
    lock = KeyedLock()
    release = asyncio.Event()

    async def holder():
        async with lock.acquire("a"):
            await release.wait()

    task = asyncio.create_task(holder())
    await asyncio.sleep(0)
    assert lock.locked("a")

    async def other():
        async with lock.acquire("b"):
            return "done"

    assert await asyncio.wait_for(other(), timeout=1) == "done"
    release.set()
    await task


@pytest.mark.asyncio
async def test_entries_are_dropped_after_last_release():
    lock = KeyedLock()

    async def use(name):
        async with lock.acquire(name):
            await asyncio.sleep(0)

    await asyncio.gather(*(use(f"k{i % 3}") for i in range(9)))
    assert len(lock) == 0
    assert "k0" not in lock


@pytest.mark.asyncio
async def test_entry_released_when_body_raises():
    lock = KeyedLock()
    with pytest.raises(RuntimeError):
        async with lock.acquire("x"):
            raise RuntimeError("boom")
    assert len(lock) == 0


@pytest.mark.asyncio
async def test_cancelled_waiter_leaves_no_entry():
    lock = KeyedLock()
    release = asyncio.Event()

    async def holder():
        async with lock.acquire("x"):
            await release.wait()

    async def waiter():
        async with lock.acquire("x"):
            pass

    h = asyncio.create_task(holder())
    await asyncio.sleep(0)
    w = asyncio.create_task(waiter())
    await asyncio.sleep(0)
    w.cancel()
    with pytest.raises(asyncio.CancelledError):
        await w
    release.set()
    await h
    assert len(lock) == 0
