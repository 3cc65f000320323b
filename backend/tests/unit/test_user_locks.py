import asyncio
from uuid import uuid4

import pytest

from app.services.user_locks import UserLockRegistry


async def _hold_until(locks: UserLockRegistry, key, log: list, name: str, release: asyncio.Event):
    async with locks.hold(key):
        log.append(f"{name} in")
        await release.wait()
        log.append(f"{name} out")


@pytest.mark.asyncio
async def test_second_holder_of_same_key_waits():
    locks = UserLockRegistry()
    user_id = uuid4()
    log: list[str] = []
    first_release, second_release = asyncio.Event(), asyncio.Event()

    first = asyncio.create_task(_hold_until(locks, user_id, log, "first", first_release))
    await asyncio.sleep(0)
    second = asyncio.create_task(_hold_until(locks, str(user_id), log, "second", second_release))
    await asyncio.sleep(0)

    assert log == ["first in"]

    second_release.set()
    first_release.set()
    await asyncio.gather(first, second)

    assert log == ["first in", "first out", "second in", "second out"]


@pytest.mark.asyncio
async def test_different_keys_do_not_block_each_other():
    locks = UserLockRegistry()
    log: list[str] = []
    release = asyncio.Event()

    tasks = [
        asyncio.create_task(_hold_until(locks, key, log, key, release))
        for key in ("worker", "manager")
    ]
    await asyncio.sleep(0)

    assert sorted(log) == ["manager in", "worker in"]

    release.set()
    await asyncio.gather(*tasks)
