"""Domain Layer - Backends, Tools, Routing and Sanitized Results.

Key Components:
    - PydanticAIBackend: one adapter class for every LLM backend (send / is_healthy)
    - ToolCatalog: snapshot of the tool service's methods under backend-safe names
    - ToolExecutor: concurrent JSON-RPC tool invocation, errors as results
    - ResponseCache: whole-response Redis cache keyed on request content
    - RequestRouter: candidate ordering, fallback, one tool round, caching
    - sanitize: free-form backend text → bounded result models (never raises)

Design Principles:
    - Immutable by Default: value types and results use frozen=True
    - Explicit Dependencies: the router is handed its backends, executor and cache
    - Total Decoding: results always come back fully populated
"""

from .backend import Backend, BackendConfig, PydanticAIBackend, create_backend
from .domain_type import BackendId, MessageRole, RiskTolerance, StreamingPosition
from .domain_value import ChatRequest, ChatResponse, Message, ToolCall, ToolDescriptor, ToolResult, Usage
from .errors import AllBackendsFailedError, BackendAttempt, BackendError, ToolExecutionError
from .response_cache import ResponseCache, cache_key
from .router import RequestRouter, format_tool_results
from .sanitize import LenientModel, sanitize
from .tool_catalog import ToolCatalog, safe_name
from .tool_executor import ToolExecutor, create_tool_client

__all__ = [
    "AllBackendsFailedError",
    "Backend",
    "BackendAttempt",
    "BackendConfig",
    "BackendError",
    "BackendId",
    "ChatRequest",
    "ChatResponse",
    "LenientModel",
    "Message",
    "MessageRole",
    "PydanticAIBackend",
    "RequestRouter",
    "ResponseCache",
    "RiskTolerance",
    "StreamingPosition",
    "ToolCall",
    "ToolCatalog",
    "ToolDescriptor",
    "ToolExecutionError",
    "ToolExecutor",
    "ToolResult",
    "Usage",
    "cache_key",
    "create_backend",
    "create_tool_client",
    "format_tool_results",
    "safe_name",
    "sanitize",
]
