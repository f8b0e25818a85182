"""
Cart storage adapters.

A cart store is a small string-keyed get/set/delete interface holding the
JSON-serialized cart. Redis (Upstash) backs deployed instances; the memory
store serves local development without Redis and the test-suite.
"""
from typing import Optional, Protocol

from upstash_redis.asyncio import Redis as AsyncRedis

from core.config import CART_STORAGE_KEY, DEFAULT_CART_TTL_SECONDS


def cart_key(session_id: Optional[str] = None) -> str:
    """Storage key for a visitor's cart; the bare key is the single-cart default."""
    if not session_id:
        return CART_STORAGE_KEY
    return f"{CART_STORAGE_KEY}:{session_id}"


class CartStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...


class RedisCartStore:
    """Carts in Upstash Redis with a TTL for abandoned carts."""

    def __init__(self, redis: AsyncRedis, ttl: int = DEFAULT_CART_TTL_SECONDS):
        self._redis = redis
        self.ttl = ttl

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value, ex=self.ttl)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)


class MemoryCartStore:
    """Process-local store. Carts vanish on restart."""

    def __init__(self):
        self._data: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)
