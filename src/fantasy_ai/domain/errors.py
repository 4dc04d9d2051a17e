"""Domain exceptions.

Only ``AllBackendsFailedError`` is meant to reach callers of the router.
``BackendError`` is raised by adapters and absorbed by the router as a failed
attempt; ``ToolExecutionError`` is raised inside the executor and always turned
into an error-shaped ``ToolResult``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .domain_type import BackendId


class BackendError(Exception):
    """A single backend failed to produce a response."""

    def __init__(self, backend_id: BackendId, message: str):
        super().__init__(f"{backend_id}: {message}")
        self.backend_id = backend_id
        self.message = message


class ToolExecutionError(Exception):
    """A tool call failed (JSON-RPC error, HTTP status, transport, timeout)."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"{tool_name}: {message}")
        self.tool_name = tool_name
        self.message = message


class BackendAttempt(BaseModel):
    """Recorded outcome of trying one candidate backend."""

    backend_id: BackendId
    succeeded: bool
    error: str | None = None

    model_config = ConfigDict(frozen=True)


class AllBackendsFailedError(Exception):
    """Every candidate backend failed, or none was registered."""

    def __init__(self, attempts: tuple[BackendAttempt, ...] = ()):
        self.attempts = attempts
        if attempts:
            last = attempts[-1]
            message = f"All AI providers failed. Last error: {last.error}"
        else:
            message = "No AI providers available"
        super().__init__(message)

    @property
    def last_error(self) -> str | None:
        return self.attempts[-1].error if self.attempts else None


__all__ = ["AllBackendsFailedError", "BackendAttempt", "BackendError", "ToolExecutionError"]
