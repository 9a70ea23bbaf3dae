"""Per-resource locking for state transitions."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Hashable

__all__ = ["KeyedLock"]

K = TypeVar("K", bound="Hashable")


class KeyedLock(Generic[K]):
    """A set of asyncio locks, one per key, created on demand.

    Locks are dropped once no coroutine holds or waits for them, so the map
    only grows with the number of keys in flight.

    Example:
        >>> locks = KeyedLock()
        >>> async with locks.acquire((42, "invoice", 1)):
        ...     ...
    """

    def __init__(self) -> None:
        self._locks: dict[K, asyncio.Lock] = {}
        self._waiters: dict[K, int] = {}

    @asynccontextmanager
    async def acquire(self, key: K) -> AsyncIterator[None]:
        """Hold the lock of ``key`` for the duration of the block.

        Args:
            key: The key to serialize on.
        """
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if not self._waiters[key]:
                del self._waiters[key]
                del self._locks[key]

    def locked(self, key: K) -> bool:
        """Check whether the lock of ``key`` is currently held."""
        lock = self._locks.get(key)
        return lock is not None and lock.locked()

    def __len__(self) -> int:
        return len(self._locks)
