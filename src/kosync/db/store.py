"""Key-value store capability and its Redis implementation.

The rest of the package only talks to the KeyValueStore protocol, so the
store can be swapped for an in-memory fake in tests. RedisStore wraps a
single ``redis.asyncio`` client whose connection pool is shared by every
in-flight request.
"""

from __future__ import annotations

from typing import Mapping, Protocol

import structlog
from redis import asyncio as aioredis
from redis.exceptions import RedisError

from kosync.core.errors import StoreError

logger = structlog.get_logger(__name__)

DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"


class KeyValueStore(Protocol):
    """Primitive store operations used by the repositories."""

    async def get(self, key: str) -> str | None:
        """Return the string value at key, or None if absent."""
        ...

    async def exists(self, key: str) -> bool:
        ...

    async def set_if_absent(self, key: str, value: str) -> bool:
        """Atomically set key only if it does not exist.

        Returns False if the key already existed or the write was not applied.
        """
        ...

    async def hgetall(self, key: str) -> dict[str, str]:
        """Return all hash fields at key (empty dict if absent)."""
        ...

    async def hset_mapping(self, key: str, mapping: Mapping[str, str]) -> bool:
        """Write all fields of mapping in a single command."""
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class RedisStore:
    """KeyValueStore backed by Redis.

    Every RedisError is re-raised as StoreError so callers never depend on
    the driver's exception types.
    """

    def __init__(self, client: aioredis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str = DEFAULT_REDIS_URL) -> RedisStore:
        """Create a store from a redis:// URL.

        No connection is made until the first command.
        """
        client = aioredis.Redis.from_url(url, decode_responses=True)
        logger.debug("redis_store_created", url=url)
        return cls(client)

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise StoreError(f"GET {key} failed: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return await self._client.exists(key) > 0
        except RedisError as e:
            raise StoreError(f"EXISTS {key} failed: {e}") from e

    async def set_if_absent(self, key: str, value: str) -> bool:
        try:
            # SET NX replies nil when the key is already present
            return bool(await self._client.set(key, value, nx=True))
        except RedisError as e:
            raise StoreError(f"SET NX {key} failed: {e}") from e

    async def hgetall(self, key: str) -> dict[str, str]:
        try:
            return await self._client.hgetall(key)
        except RedisError as e:
            raise StoreError(f"HGETALL {key} failed: {e}") from e

    async def hset_mapping(self, key: str, mapping: Mapping[str, str]) -> bool:
        try:
            # HSET replies with the number of new fields, which is 0 on a
            # full overwrite; a reply at all means the write was applied.
            await self._client.hset(key, mapping=dict(mapping))
        except RedisError as e:
            raise StoreError(f"HSET {key} failed: {e}") from e
        return True

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning("redis_ping_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._client.aclose()
