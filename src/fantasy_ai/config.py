"""Application Configuration

Type-safe configuration using Pydantic Settings for environment variable handling.

Every LLM backend is optional: a backend is registered only when its API key is
set. The tool service and Redis cache have development defaults so the service
starts without any infrastructure (tools fall back to the built-in catalog and
the cache becomes a no-op).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .domain.domain_type import BackendId

# Default backend priority when DEFAULT_AI_PROVIDER is unset or unusable
BACKEND_PRIORITY: tuple[BackendId, ...] = (BackendId.CLAUDE, BackendId.OPENAI, BackendId.GEMINI)


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    app_name: str = Field(default="fantasy-ai", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Provider orchestration and tool invocation for fantasy football analysis",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # =============================================================================
    # CORS
    # =============================================================================

    cors_origins: str = Field(default="", alias="CORS_ORIGINS")
    cors_credentials: bool = Field(default=False, alias="CORS_CREDENTIALS")
    cors_methods: str = Field(default="GET", alias="CORS_METHODS")
    cors_headers: str = Field(default="*", alias="CORS_HEADERS")

    # =============================================================================
    # LLM BACKENDS (timeouts in seconds)
    # =============================================================================

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL")
    openai_timeout: float = Field(default=30.0, gt=0, alias="OPENAI_TIMEOUT")

    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field(default="claude-3-5-sonnet-20241022", alias="ANTHROPIC_MODEL")
    anthropic_timeout: float = Field(default=30.0, gt=0, alias="ANTHROPIC_TIMEOUT")

    gemini_api_key: str | None = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-1.5-flash", alias="GEMINI_MODEL")
    gemini_timeout: float = Field(default=30.0, gt=0, alias="GEMINI_TIMEOUT")

    default_ai_provider: BackendId | None = Field(default=None, alias="DEFAULT_AI_PROVIDER")

    # =============================================================================
    # TOOL SERVICE (JSON-RPC / OpenRPC)
    # =============================================================================

    mcp_server_url: str = Field(default="http://localhost:3001", alias="MCP_SERVER_URL")
    mcp_server_timeout: float = Field(default=30.0, gt=0, alias="MCP_SERVER_TIMEOUT")
    mcp_server_retries: int = Field(default=3, ge=0, alias="MCP_SERVER_RETRIES")

    # =============================================================================
    # RESPONSE CACHE
    # =============================================================================

    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    cache_enabled: bool = Field(default=True, alias="CACHE_ENABLED")
    cache_ttl_seconds: int = Field(default=3600, gt=0, alias="CACHE_TTL_SECONDS")
    cache_prefix: str = Field(default="ai_response:", alias="CACHE_PREFIX")

    model_config = {"env_file": ".env", "case_sensitive": False, "extra": "ignore"}

    def configured_backends(self) -> tuple[BackendId, ...]:
        """Backends with an API key, in default priority order."""
        keys = {
            BackendId.CLAUDE: self.anthropic_api_key,
            BackendId.OPENAI: self.openai_api_key,
            BackendId.GEMINI: self.gemini_api_key,
        }
        return tuple(backend for backend in BACKEND_PRIORITY if keys[backend])

    def default_backend(self) -> BackendId | None:
        """Explicit DEFAULT_AI_PROVIDER when configured, else the highest-priority backend."""
        configured = self.configured_backends()
        if self.default_ai_provider in configured:
            return self.default_ai_provider
        return configured[0] if configured else None

    def fallback_backends(self) -> tuple[BackendId, ...]:
        default = self.default_backend()
        return tuple(backend for backend in self.configured_backends() if backend != default)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.model_validate({})


settings = get_settings()
