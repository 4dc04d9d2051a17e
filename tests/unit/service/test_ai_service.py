"""Unit tests for service wiring.

Tests focus on construction from settings (nothing here touches a network):
- Backend registration and default/fallback selection
- Storage: Redis client only when caching is active
- AIService lifecycle over scripted backends
"""

import pytest

from fantasy_ai.config import Settings
from fantasy_ai.domain.domain_type import BackendId
from fantasy_ai.service import AIService, CacheStoreConfig, StorageService, create_ai_service
from tests.conftest import ScriptedBackend


def settings_with(**values) -> Settings:
    """Settings from explicit values and the process environment only (no .env file)."""
    return Settings(_env_file=None, **values)


class TestBackendSelection:
    def test_priority_order_without_explicit_default(self):
        settings = settings_with(OPENAI_API_KEY="sk-o", GEMINI_API_KEY="g")

        assert settings.configured_backends() == (BackendId.OPENAI, BackendId.GEMINI)
        assert settings.default_backend() == BackendId.OPENAI
        assert settings.fallback_backends() == (BackendId.GEMINI,)

    def test_explicit_default_wins_when_configured(self):
        settings = settings_with(
            ANTHROPIC_API_KEY="sk-a", OPENAI_API_KEY="sk-o", GEMINI_API_KEY="g", DEFAULT_AI_PROVIDER="gemini"
        )

        assert settings.default_backend() == BackendId.GEMINI
        assert settings.fallback_backends() == (BackendId.CLAUDE, BackendId.OPENAI)

    def test_unconfigured_explicit_default_is_ignored(self):
        settings = settings_with(OPENAI_API_KEY="sk-o", DEFAULT_AI_PROVIDER="claude")

        assert settings.default_backend() == BackendId.OPENAI

    def test_no_keys_no_backends(self):
        settings = settings_with()

        assert settings.configured_backends() == ()
        assert settings.default_backend() is None


class TestStorageService:
    def test_inactive_cache_has_no_client(self):
        storage = StorageService(CacheStoreConfig(url="redis://localhost:6379/0", enabled=False))

        assert storage.get_cache_client() is None
        assert not storage.create_response_cache().enabled

    def test_client_is_created_once(self):
        storage = StorageService(CacheStoreConfig(url="redis://localhost:6379/0"))

        assert storage.get_cache_client() is storage.get_cache_client()
        assert storage.create_response_cache().enabled

    @pytest.mark.asyncio
    async def test_close_releases_client(self):
        storage = StorageService(CacheStoreConfig(url="redis://localhost:6379/0"))
        storage.get_cache_client()

        await storage.close()

        assert storage._cache_client is None


class TestCreateAIService:
    @pytest.mark.asyncio
    async def test_builds_router_from_settings(self):
        settings = settings_with(
            ANTHROPIC_API_KEY="sk-a",
            OPENAI_API_KEY="sk-o",
            CACHE_ENABLED=False,
            MCP_SERVER_RETRIES=1,
        )

        service = create_ai_service(settings)

        router = service.router
        assert router.available_backends() == (BackendId.CLAUDE, BackendId.OPENAI)
        assert router.default_backend == BackendId.CLAUDE
        assert router.fallback_backends == (BackendId.OPENAI,)
        assert router.catalog.source == "default"
        assert router.executor.retries == 1
        assert not router.cache.enabled
        await service.shutdown()
        assert router.executor.client.is_closed


class TestAIService:
    @pytest.mark.asyncio
    async def test_startup_discovers_tools_and_probes_backends(self, make_router):
        """
        Demonstrates: Startup never fails, even with an unreachable tool service.
        """
        router = make_router(ScriptedBackend(BackendId.CLAUDE))
        service = AIService(router=router, storage=StorageService(CacheStoreConfig(enabled=False)))

        status = await service.startup()

        assert status == {BackendId.CLAUDE: True}
        assert router.catalog.source == "default"
        await service.shutdown()
