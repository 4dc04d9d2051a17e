"""Request Router - Backend Selection, Fallback, Tool Round and Caching.

The router is the single entry point for chat requests. It owns the backend
map, the tool catalog snapshot, the tool executor and the response cache, and
is built once at startup with immutable routing configuration.

Request Flow:
    1. Cache lookup (key uses preferred-or-default backend) → hit returns early
    2. Offer the catalog's tools when tools are enabled
    3. Build the candidate list: preferred, default, fallbacks (no duplicates,
       registered backends only)
    4. Try candidates in order; the first success runs at most one tool round,
       is cached, and is returned
    5. Nothing succeeded → AllBackendsFailedError with every attempt recorded

Tool Round:
    The backend's tool calls are executed concurrently, their results are
    folded into one user message, and the same backend is asked once more
    (without tools). Tool calls in that follow-up are ignored. The returned
    response carries the follow-up content and the original tool calls.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence

from .backend import Backend
from .domain_type import BackendId
from .domain_value import ChatRequest, ChatResponse, Message, ToolCall, ToolResult
from .errors import AllBackendsFailedError, BackendAttempt, BackendError
from .response_cache import ResponseCache
from .tool_catalog import ToolCatalog
from .tool_executor import ToolExecutor

logger = logging.getLogger(__name__)

TOOL_RESULTS_HEADER = "Tool execution results:"
TOOL_RESULTS_FOOTER = "Please analyze these results and provide insights."


def format_tool_results(calls: Sequence[ToolCall], results: Sequence[ToolResult]) -> str:
    """Fold tool results into the follow-up user message."""
    entries = []
    for call, result in zip(calls, results, strict=True):
        if result.is_error:
            entries.append(f"{call.name}: Error - {result.error_message}")
        else:
            entries.append(f"{call.name}: {json.dumps(result.content, indent=2, default=str)}")
    return f"{TOOL_RESULTS_HEADER}\n" + "\n\n".join(entries) + f"\n\n{TOOL_RESULTS_FOOTER}"


class RequestRouter:
    """
    Routes chat requests across registered backends.

    Responsibilities:
    - Candidate ordering and sequential fallback
    - One tool round per request
    - Whole-response caching
    - Health reporting for backends and the tool service
    """

    def __init__(
        self,
        backends: Mapping[BackendId, Backend],
        executor: ToolExecutor,
        cache: ResponseCache,
        default_backend: BackendId | None = None,
        fallback_backends: Sequence[BackendId] = (),
        catalog: ToolCatalog | None = None,
    ):
        self.backends = dict(backends)
        self.executor = executor
        self.cache = cache
        self.default_backend = default_backend
        self.fallback_backends = tuple(fallback_backends)
        self._catalog = catalog or ToolCatalog.default()

    @property
    def catalog(self) -> ToolCatalog:
        return self._catalog

    def available_backends(self) -> tuple[BackendId, ...]:
        return tuple(self.backends)

    def available_tools(self) -> tuple[str, ...]:
        return self._catalog.names

    def candidate_order(self, preferred: BackendId | None = None) -> list[BackendId]:
        """Preferred, then default, then fallbacks; registered and unique."""
        order: list[BackendId] = []
        for backend_id in (preferred, self.default_backend, *self.fallback_backends):
            if backend_id is not None and backend_id in self.backends and backend_id not in order:
                order.append(backend_id)
        return order

    async def chat(
        self,
        request: ChatRequest,
        preferred_backend: BackendId | None = None,
        enable_tools: bool = True,
    ) -> ChatResponse:
        keyed_backend = preferred_backend if preferred_backend in self.backends else self.default_backend
        key = self.cache.cache_key(request, keyed_backend)
        cached = await self.cache.get(key)
        if cached is not None:
            return cached

        catalog = self._catalog
        if enable_tools:
            request = request.with_tools(catalog.tools)

        attempts: list[BackendAttempt] = []
        for backend_id in self.candidate_order(preferred_backend):
            backend = self.backends[backend_id]
            logger.info("backend_attempt", extra={"backend": backend_id, "model": backend.model_id})
            try:
                response = await backend.send(request)
                if enable_tools and response.tool_calls:
                    response = await self._run_tool_round(backend, request, response, catalog)
            except BackendError as exc:
                attempts.append(BackendAttempt(backend_id=backend_id, succeeded=False, error=exc.message))
                logger.warning("backend_attempt_failed", extra={"backend": backend_id, "error": exc.message})
                continue

            attempts.append(BackendAttempt(backend_id=backend_id, succeeded=True))
            logger.info("backend_attempt_succeeded", extra={"backend": backend_id})
            await self.cache.put(key, response)
            return response

        logger.error("all_backends_failed", extra={"attempts": [attempt.model_dump() for attempt in attempts]})
        raise AllBackendsFailedError(tuple(attempts))

    async def _run_tool_round(
        self,
        backend: Backend,
        request: ChatRequest,
        response: ChatResponse,
        catalog: ToolCatalog,
    ) -> ChatResponse:
        logger.info(
            "tool_round_started",
            extra={"backend": backend.backend_id, "tools": [call.name for call in response.tool_calls]},
        )
        results = await self.executor.execute_all(response.tool_calls, catalog)

        follow_up = ChatRequest(
            messages=(
                *request.messages,
                Message.assistant(response.content),
                Message.user(format_tool_results(response.tool_calls, results)),
            ),
            max_tokens=request.max_tokens,
            temperature=request.temperature,
        )
        final = await backend.send(follow_up)
        return final.model_copy(update={"tool_calls": response.tool_calls})

    async def reload_catalog(self) -> ToolCatalog:
        """Rediscover tools and swap the snapshot in one assignment."""
        self._catalog = await ToolCatalog.discover(self.executor.client)
        return self._catalog

    async def backend_status(self) -> dict[BackendId, bool]:
        backend_ids = list(self.backends)
        results = await asyncio.gather(*(self.backends[backend_id].is_healthy() for backend_id in backend_ids))
        return dict(zip(backend_ids, results, strict=True))

    async def tool_service_status(self) -> bool:
        return await self.executor.health_check()

    async def initialize(self) -> dict[BackendId, bool]:
        """Discover tools and probe every backend once at startup."""
        await self.reload_catalog()
        status = await self.backend_status()
        for backend_id, healthy in status.items():
            logger.info("backend_health", extra={"backend": backend_id, "healthy": healthy})
        if not any(status.values()):
            logger.warning("no_healthy_backends", extra={"registered": [str(b) for b in self.backends]})
        return status


__all__ = ["TOOL_RESULTS_FOOTER", "TOOL_RESULTS_HEADER", "RequestRouter", "format_tool_results"]
