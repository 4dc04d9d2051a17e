"""AI service wiring - builds the router and everything it owns from settings.

Construction order:
    settings → backends (one per configured API key)
             → tool HTTP client → ToolExecutor
             → StorageService → ResponseCache
             → RequestRouter (default + fallbacks from BACKEND_PRIORITY)

The service owns the long-lived clients (httpx, Redis) and closes them on
shutdown; the router only borrows them.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..domain.backend import PydanticAIBackend, create_backend
from ..domain.domain_type import BackendId
from ..domain.router import RequestRouter
from ..domain.tool_catalog import ToolCatalog
from ..domain.tool_executor import ToolExecutor, create_tool_client
from .storage import CacheStoreConfig, StorageService, create_storage_service

logger = logging.getLogger(__name__)


class AIService:
    """
    Pure infrastructure orchestrator - zero business logic.

    Service responsibilities:
    1. Own the router (single entry point for chat requests)
    2. Own the tool-service HTTP client and the Redis client
    3. Run startup discovery and health probing
    4. Release clients on shutdown
    """

    def __init__(self, router: RequestRouter, storage: StorageService):
        self.router = router
        self.storage = storage

    async def startup(self) -> dict[BackendId, bool]:
        """Discover tools and probe backends; never fails startup."""
        logger.info(
            "ai_service_starting",
            extra={
                "backends": [str(backend_id) for backend_id in self.router.available_backends()],
                "default_backend": str(self.router.default_backend) if self.router.default_backend else None,
            },
        )
        status = await self.router.initialize()
        logger.info("ai_service_started", extra={"tools": len(self.router.available_tools())})
        return status

    async def shutdown(self) -> None:
        await self.router.executor.client.aclose()
        await self.storage.close()
        logger.info("ai_service_stopped")


def create_backends(settings: Settings) -> dict[BackendId, PydanticAIBackend]:
    """One adapter per backend with an API key, in priority order."""
    options = {
        BackendId.CLAUDE: (settings.anthropic_model, settings.anthropic_api_key, settings.anthropic_timeout),
        BackendId.OPENAI: (settings.openai_model, settings.openai_api_key, settings.openai_timeout),
        BackendId.GEMINI: (settings.gemini_model, settings.gemini_api_key, settings.gemini_timeout),
    }
    backends: dict[BackendId, PydanticAIBackend] = {}
    for backend_id in settings.configured_backends():
        model_name, api_key, timeout = options[backend_id]
        backends[backend_id] = create_backend(backend_id, model_name, api_key, timeout)
    return backends


def create_ai_service(settings: Settings | None = None) -> AIService:
    """
    Factory function for creating AIService.

    Service owns its own construction logic - deps.py just calls this.

    Args:
        settings: Application settings (defaults to the cached environment settings)

    Returns:
        AIService with the built-in tool catalog; call ``startup()`` to discover tools
    """
    settings = settings or get_settings()

    executor = ToolExecutor(
        client=create_tool_client(settings.mcp_server_url, settings.mcp_server_timeout),
        timeout=settings.mcp_server_timeout,
        retries=settings.mcp_server_retries,
    )
    storage = create_storage_service(
        CacheStoreConfig(
            url=settings.redis_url,
            enabled=settings.cache_enabled,
            ttl_seconds=settings.cache_ttl_seconds,
            prefix=settings.cache_prefix,
        )
    )
    router = RequestRouter(
        backends=create_backends(settings),
        executor=executor,
        cache=storage.create_response_cache(),
        default_backend=settings.default_backend(),
        fallback_backends=settings.fallback_backends(),
        catalog=ToolCatalog.default(),
    )
    return AIService(router=router, storage=storage)


__all__ = ["AIService", "create_ai_service", "create_backends"]
