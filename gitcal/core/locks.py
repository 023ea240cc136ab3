"""Per-key asyncio locks.

Serializes coroutines that write the same logical record (for example the
daily summary of one repository on one day) while letting unrelated keys run
concurrently. Entries are dropped once no coroutine holds or waits on them.

Note: This is an in-process guard. Cross-process writers are serialized by
the unique index and ON CONFLICT upsert at the database layer.
"""

import asyncio
from collections.abc import AsyncIterator, Hashable
from contextlib import asynccontextmanager


class KeyedLock:
    """Registry of asyncio.Lock objects keyed by an arbitrary hashable."""

    def __init__(self) -> None:
        self._locks: dict[Hashable, asyncio.Lock] = {}
        self._waiters: dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        """Hold the lock for `key` for the duration of the context."""
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
