"""
Shared test fixtures and configuration.

Environment strategy:
- Unit tests: Use .env.test (no API keys, no Redis, nothing leaves the process)
- Integration tests: Use .env (real tool service and Redis if configured)

Test doubles:
- ScriptedBackend: satisfies the Backend protocol with queued responses/errors
- FakeRedis: in-memory stand-in for the two redis.asyncio calls the cache uses
- tool_service(): httpx.MockTransport speaking JSON-RPC
"""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

if "integration" in " ".join(sys.argv):
    ENV_FILE = Path(__file__).parent.parent / ".env"
else:
    ENV_FILE = Path(__file__).parent.parent / ".env.test"

load_dotenv(ENV_FILE, override=True)

import httpx

from fantasy_ai.domain.domain_type import BackendId
from fantasy_ai.domain.domain_value import ChatRequest, ChatResponse, Message, ToolCall
from fantasy_ai.domain.errors import BackendError
from fantasy_ai.domain.response_cache import ResponseCache
from fantasy_ai.domain.router import RequestRouter
from fantasy_ai.domain.tool_catalog import ToolCatalog
from fantasy_ai.domain.tool_executor import ToolExecutor

TOOL_SERVICE_URL = "http://tools.test"


class ScriptedBackend:
    """Backend double: replays ``script`` in order and records every request."""

    def __init__(self, backend_id: BackendId, script: list[ChatResponse | str | Exception] | None = None):
        self._backend_id = backend_id
        self.script = list(script or [])
        self.requests: list[ChatRequest] = []
        self.healthy = True

    @property
    def backend_id(self) -> BackendId:
        return self._backend_id

    @property
    def model_id(self) -> str:
        return f"{self._backend_id}-test"

    async def send(self, request: ChatRequest) -> ChatResponse:
        self.requests.append(request)
        if not self.script:
            raise BackendError(self._backend_id, "script exhausted")
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        if isinstance(step, str):
            return ChatResponse(content=step, backend_id=self._backend_id, model_id=self.model_id)
        return step

    async def is_healthy(self) -> bool:
        return self.healthy


class FakeRedis:
    """Async in-memory Redis covering ``get`` and ``setex``."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.error: Exception | None = None

    async def get(self, key: str) -> str | None:
        if self.error:
            raise self.error
        return self.store.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        if self.error:
            raise self.error
        self.store[key] = value
        self.ttls[key] = ttl


def tool_service(
    results: dict[str, Any] | None = None,
    errors: dict[str, str] | None = None,
    handler: Callable[[httpx.Request], httpx.Response] | None = None,
) -> httpx.AsyncClient:
    """Mock tool service: JSON-RPC results/errors keyed on method name.

    Every request is recorded on ``client.calls`` as decoded JSON-RPC payloads.
    """
    results = results or {}
    errors = errors or {}
    calls: list[dict[str, Any]] = []

    def default_handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(404)
        payload = json.loads(request.content)
        calls.append(payload)
        method = payload["method"]
        if method in errors:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "error": {"message": errors[method]}})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": results.get(method)})

    client = httpx.AsyncClient(base_url=TOOL_SERVICE_URL, transport=httpx.MockTransport(handler or default_handler))
    client.calls = calls  # type: ignore[attr-defined]
    return client


def tool_response(*calls: ToolCall, backend_id: BackendId = BackendId.CLAUDE, content: str = "") -> ChatResponse:
    return ChatResponse(content=content, tool_calls=calls, backend_id=backend_id, model_id=f"{backend_id}-test")


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
def cache(fake_redis: FakeRedis) -> ResponseCache:
    return ResponseCache(client=fake_redis, ttl_seconds=60)


@pytest.fixture
def user_request() -> ChatRequest:
    return ChatRequest(messages=(Message.system("You are helpful."), Message.user("What week is it?")))


@pytest.fixture
def make_router(cache: ResponseCache) -> Callable[..., RequestRouter]:
    """Build a router over scripted backends; default is the first backend given."""

    def build(
        *backends: ScriptedBackend,
        client: httpx.AsyncClient | None = None,
        default: BackendId | None = None,
        catalog: ToolCatalog | None = None,
        response_cache: ResponseCache | None = None,
    ) -> RequestRouter:
        ids = [backend.backend_id for backend in backends]
        default = default or (ids[0] if ids else None)
        return RequestRouter(
            backends={backend.backend_id: backend for backend in backends},
            executor=ToolExecutor(client or tool_service(), timeout=5.0, retries=0, backoff=0.0),
            cache=response_cache or cache,
            default_backend=default,
            fallback_backends=[backend_id for backend_id in ids if backend_id != default],
            catalog=catalog,
        )

    return build
