"""Response Cache - Whole-Response Memoization in Redis.

A cache hit short-circuits the router before any backend is contacted. Keys
are derived from everything that shapes the answer: the messages, the token
limit, the temperature and the backend the caller asked for (or the default
backend when none was asked for).

Key layout:
    ai_response:<first 16 hex chars of sha256(canonical JSON)>

The cache is advisory. A Redis outage, a corrupt payload or a missing client
all read as a miss and write as a no-op; the router never sees cache errors.
"""

from __future__ import annotations

import hashlib
import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from redis.exceptions import RedisError

from .domain_type import BackendId
from .domain_value import ChatRequest, ChatResponse

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "ai_response:"
DEFAULT_TTL_SECONDS = 3600
KEY_DIGEST_LENGTH = 16


def cache_key(request: ChatRequest, backend: BackendId | None, prefix: str = DEFAULT_PREFIX) -> str:
    """Deterministic key for ``request`` as routed to ``backend``.

    Tools are not part of the key: the same conversation with or without tools
    enabled shares an entry.
    """
    canonical = json.dumps(
        {
            "messages": [message.model_dump(mode="json") for message in request.messages],
            "maxTokens": request.max_tokens,
            "temperature": request.temperature,
            "provider": str(backend) if backend else None,
        },
        sort_keys=True,
    )
    digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"{prefix}{digest[:KEY_DIGEST_LENGTH]}"


class ResponseCache:
    """Redis-backed ChatResponse cache; a ``None`` client makes it inert."""

    def __init__(
        self,
        client: Redis | None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        prefix: str = DEFAULT_PREFIX,
    ):
        self.client = client
        self.ttl_seconds = ttl_seconds
        self.prefix = prefix

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def cache_key(self, request: ChatRequest, backend: BackendId | None) -> str:
        return cache_key(request, backend, self.prefix)

    async def get(self, key: str) -> ChatResponse | None:
        if self.client is None:
            return None
        try:
            payload = await self.client.get(key)
            if payload is None:
                return None
            response = ChatResponse.model_validate_json(payload)
        except (RedisError, OSError) as exc:
            logger.warning("cache_read_failed", extra={"key": key, "error": str(exc)})
            return None
        except ValidationError as exc:
            logger.warning("cache_payload_invalid", extra={"key": key, "error": str(exc)})
            return None

        logger.info("cache_hit", extra={"key": key})
        return response

    async def put(self, key: str, value: ChatResponse, ttl_seconds: int | None = None) -> None:
        if self.client is None:
            return
        try:
            await self.client.setex(key, ttl_seconds or self.ttl_seconds, value.model_dump_json())
        except (RedisError, OSError) as exc:
            logger.warning("cache_write_failed", extra={"key": key, "error": str(exc)})


__all__ = ["DEFAULT_PREFIX", "DEFAULT_TTL_SECONDS", "KEY_DIGEST_LENGTH", "ResponseCache", "cache_key"]
