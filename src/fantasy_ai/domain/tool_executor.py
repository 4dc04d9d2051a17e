"""Tool Invocation Executor - JSON-RPC 2.0 Calls Against the Tool Service.

Turns backend-requested ``ToolCall`` values into ``ToolResult`` values. Calls
are fanned out concurrently and fanned back in call order; a failing call
never affects its siblings and the executor itself never raises.

Wire format (POST to the service root):
    {"jsonrpc": "2.0", "id": <int>, "method": <original name>, "params": {...}}

Failure modes folded into error results:
    - JSON-RPC ``error`` member in the response body
    - Non-2xx HTTP status
    - Transport errors (after linear-backoff retries)
    - Non-JSON body
    - Deadline expiry (per call, retries included)
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from .domain_value import ToolCall, ToolResult
from .errors import ToolExecutionError
from .tool_catalog import ToolCatalog

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"
HEALTH_PROBE_TOOL = "get_nfl_state"


def create_tool_client(base_url: str, timeout: float) -> httpx.AsyncClient:
    """HTTP client bound to the tool service (JSON in, JSON out)."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers={"Content-Type": "application/json", "Accept": "application/json"},
    )


class ToolExecutor:
    """
    Executes tool calls against the tool service.

    Responsibilities:
    - Translate safe names back to service method names via the catalog
    - Retry transport failures with linear backoff
    - Bound every call with a deadline
    - Convert every failure into an error-shaped ToolResult
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = 30.0,
        retries: int = 3,
        backoff: float = 1.0,
    ):
        self.client = client
        self.timeout = timeout
        self.retries = retries
        self.backoff = backoff
        self._ids = itertools.count(1)

    async def execute_all(self, calls: Sequence[ToolCall], catalog: ToolCatalog) -> list[ToolResult]:
        """Run every call concurrently; results line up with ``calls``."""
        if not calls:
            return []
        return list(await asyncio.gather(*(self.call(call, catalog) for call in calls)))

    async def call(self, call: ToolCall, catalog: ToolCatalog) -> ToolResult:
        method = catalog.resolve_original_name(call.name)
        logger.info("tool_call_started", extra={"tool": call.name, "method": method})
        try:
            async with asyncio.timeout(self.timeout):
                content = await self._invoke(method, call.parameters)
        except ToolExecutionError as exc:
            logger.warning("tool_call_failed", extra={"tool": call.name, "error": exc.message})
            return ToolResult.failure(exc.message)
        except TimeoutError:
            message = f"Tool call timed out after {self.timeout}s"
            logger.warning("tool_call_failed", extra={"tool": call.name, "error": message})
            return ToolResult.failure(message)

        logger.info("tool_call_succeeded", extra={"tool": call.name})
        return ToolResult.success(content)

    async def health_check(self) -> bool:
        """``GET /health`` answering 200, or else a probe tool call that succeeds."""
        try:
            response = await self.client.get(HEALTH_PATH)
            if response.status_code == 200:
                return True
        except httpx.HTTPError as exc:
            logger.debug("tool_health_endpoint_unreachable", extra={"error": str(exc)})

        probe = await self.call(ToolCall(name=HEALTH_PROBE_TOOL), ToolCatalog.default())
        return not probe.is_error

    async def _invoke(self, method: str, params: dict[str, Any]) -> Any:
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        response = await self._post(method, payload)

        if not response.is_success:
            raise ToolExecutionError(method, f"HTTP {response.status_code}")
        try:
            body = response.json()
        except ValueError as exc:
            raise ToolExecutionError(method, "Tool service returned a non-JSON response") from exc
        if not isinstance(body, dict):
            raise ToolExecutionError(method, "Tool service returned a malformed JSON-RPC response")

        error = body.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else error
            message = "" if message is None else str(message)
            raise ToolExecutionError(method, message or "Unknown tool service error")
        return body.get("result")

    async def _post(self, method: str, payload: dict[str, Any]) -> httpx.Response:
        attempt = 0
        while True:
            try:
                return await self.client.post("/", json=payload)
            except httpx.TransportError as exc:
                if attempt >= self.retries:
                    raise ToolExecutionError(method, str(exc) or type(exc).__name__) from exc
                attempt += 1
                logger.info("tool_call_retry", extra={"method": method, "attempt": attempt, "retries": self.retries})
                await asyncio.sleep(self.backoff * attempt)
            except httpx.HTTPError as exc:
                raise ToolExecutionError(method, str(exc) or type(exc).__name__) from exc


__all__ = ["HEALTH_PATH", "HEALTH_PROBE_TOOL", "ToolExecutor", "create_tool_client"]
