"""Storage service - thin owner of the Redis client behind the response cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..domain.response_cache import DEFAULT_PREFIX, DEFAULT_TTL_SECONDS, ResponseCache

if TYPE_CHECKING:
    from redis.asyncio import Redis


class CacheStoreConfig(BaseModel):
    """Redis connection and caching policy."""

    url: str | None = None
    enabled: bool = True
    ttl_seconds: int = Field(default=DEFAULT_TTL_SECONDS, gt=0)
    prefix: str = DEFAULT_PREFIX

    model_config = ConfigDict(frozen=True)

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.url)


class StorageService:
    """
    Thin orchestrator - lazy-loads the Redis client from config.

    Responsibilities:
    - Provide the Redis client for whole-response caching
    - Hand out a ResponseCache that is inert when caching is off
    - Lazy initialization for faster startup
    """

    def __init__(self, cache_config: CacheStoreConfig):
        self.cache_config = cache_config
        self._cache_client: Redis | None = None

    def get_cache_client(self) -> Redis | None:
        """Get or create Redis client (lazy); None when caching is inactive."""
        if not self.cache_config.active:
            return None
        if self._cache_client is None:
            from redis.asyncio import Redis

            self._cache_client = Redis.from_url(self.cache_config.url, decode_responses=True)
        return self._cache_client

    def create_response_cache(self) -> ResponseCache:
        return ResponseCache(
            client=self.get_cache_client(),
            ttl_seconds=self.cache_config.ttl_seconds,
            prefix=self.cache_config.prefix,
        )

    async def close(self) -> None:
        if self._cache_client is not None:
            await self._cache_client.aclose()
            self._cache_client = None


def create_storage_service(cache_config: CacheStoreConfig) -> StorageService:
    """Factory from infrastructure config."""
    return StorageService(cache_config)


__all__ = ["CacheStoreConfig", "StorageService", "create_storage_service"]
