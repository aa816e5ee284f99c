import asyncio

import pytest

from junior_bot.utils.locks import KeyedLocks


@pytest.mark.asyncio
async def test_same_key_is_serialized():
    locks = KeyedLocks()
    events = []

    async def worker(name):
        async with locks.hold("5511"):
            events.append(f"{name}:in")
            await asyncio.sleep(0.01)
            events.append(f"{name}:out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events == ["a:in", "a:out", "b:in", "b:out"]
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_different_keys_run_concurrently():
    locks = KeyedLocks()
    events = []

    async def worker(key):
        async with locks.hold(key):
            events.append(f"{key}:in")
            await asyncio.sleep(0.01)
            events.append(f"{key}:out")

    await asyncio.gather(worker("a"), worker("b"))

    assert events[:2] == ["a:in", "b:in"]
