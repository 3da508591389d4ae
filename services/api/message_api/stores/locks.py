"""Keyed mutual exclusion.

Serializes read-modify-write sequences on one document (reply appends
on a parent message). `LocalLocks` covers a single process; `RedisLocks`
covers several processes sharing a Redis.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Protocol

from redis.exceptions import LockError

from message_api.stores import redis as redis_store

logger = logging.getLogger("uvicorn.error")


class LockTimeoutError(RuntimeError):
    """A keyed lock could not be acquired in time."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Timed out waiting for lock {key!r}")
        self.key = key


class KeyedLocks(Protocol):
    def hold(self, key: str) -> AbstractAsyncContextManager[None]: ...


class LocalLocks:
    """One asyncio.Lock per key, dropped when nobody holds or awaits it."""

    def __init__(self, wait: float | None = None) -> None:
        self._wait = wait
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            try:
                async with asyncio.timeout(self._wait):
                    await lock.acquire()
            except TimeoutError:
                logger.warning("Lock wait timed out: %s", key)
                raise LockTimeoutError(key) from None
            try:
                yield
            finally:
                lock.release()
        finally:
            self._users[key] -= 1
            if not self._users[key]:
                del self._users[key]
                del self._locks[key]


class RedisLocks:
    """Distributed locks via redis-py (SET NX with TTL under the hood)."""

    def __init__(self, ttl: int, wait: float) -> None:
        self._ttl = ttl
        self._wait = wait

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = redis_store.get_lock(key, ttl=self._ttl, wait=self._wait)
        if not await lock.acquire():
            logger.warning("Redis lock wait timed out: %s", key)
            raise LockTimeoutError(key)
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                # TTL expired before we finished; someone else may own it now.
                logger.warning("Redis lock expired before release: %s", key)
