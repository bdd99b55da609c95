"""
LearnHub Platform - Keyed Locks
One asyncio.Lock per key, so writes to the same progress record queue up
"""
import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLock:
    """
    Single-writer-per-key guard for one worker process.

    Locks are created on demand and dropped once nobody holds or waits for
    them. Cross-process safety comes from the record's version check, not
    from here.
    """

    def __init__(self):
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every request handled in this process
progress_locks = KeyedLock()
