import asyncio
import weakref
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable


class UserLockRegistry:
    """Per-user mutual exclusion for scheduling writes within one process."""

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, key: Hashable) -> asyncio.Lock:
        name = str(key)
        lock = self._locks.get(name)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[name] = lock
        return lock

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._lock_for(key)
        async with lock:
            yield


scheduling_locks = UserLockRegistry()
