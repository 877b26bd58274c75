import asyncio
import contextlib
import weakref
from typing import AsyncIterator


class TargetLockRegistry:
    """
    Hands out one asyncio.Lock per target key (for example "mentor:12" or "event:7").

    Capacity checks and the writes that depend on them run while holding the
    lock of their target, so two admissions against the same mentor or event
    are serialized within this process. Different keys never share a lock.
    Locks are held weakly and disappear once no coroutine is using them.
    """

    def __init__(self):
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def get_lock(self, key: str) -> asyncio.Lock:
        """
        Return the lock for a key, creating it on first use.

        Args:
            key (str): Target key.

        Returns:
            asyncio.Lock: The lock shared by every caller using the same key.
        """
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        """
        Acquire the lock of a target for the duration of the block.

        Example:
            async with registry.hold(f"event:{event_id}"):
                ...
        """
        lock = self.get_lock(key)
        async with lock:
            yield


def mentor_key(mentor_id: int) -> str:
    return f"mentor:{mentor_id}"


def event_key(event_id: int) -> str:
    return f"event:{event_id}"
