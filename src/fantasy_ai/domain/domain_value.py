"""Value Layer - Immutable Request/Response Types Shared Across Backends.

Every backend, the tool executor, the cache and the router speak in these
types. Adapters translate them into pydantic-ai message parts on the way out
and back on the way in.

Architecture:
    - Conversation: Message (role + content), ordered in ChatRequest.messages
    - Tools: ToolDescriptor (offered), ToolCall (requested), ToolResult (executed)
    - Outcome: ChatResponse (content, tool calls, usage, which backend answered)

All models are frozen: a request is shared between attempts and a response is
cached as-is.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .domain_type import BackendId, MessageRole

# Backend-safe tool names: what every provider accepts in a function name
SAFE_TOOL_NAME_PATTERN = r"^[A-Za-z0-9_-]+$"

DEFAULT_MAX_TOKENS = 4000
DEFAULT_TEMPERATURE = 0.1


class Message(BaseModel):
    """One conversation turn."""

    role: MessageRole
    content: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> Message:
        return cls(role=MessageRole.ASSISTANT, content=content)


class ToolDescriptor(BaseModel):
    """Tool Offered to a Backend.

    Attributes:
        name: Backend-safe name (letters, digits, underscore, hyphen)
        description: Human-readable purpose shown to the model
        input_schema: JSON Schema object describing the parameters
    """

    name: str = Field(pattern=SAFE_TOOL_NAME_PATTERN)
    description: str
    input_schema: dict[str, Any] = Field(default_factory=lambda: {"type": "object", "properties": {}})

    model_config = ConfigDict(frozen=True)


class ToolCall(BaseModel):
    """Tool Invocation Requested by a Backend (keyed on the safe name)."""

    name: str
    parameters: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ToolResult(BaseModel):
    """Outcome of One Tool Call.

    Either ``content`` holds the decoded JSON-RPC result, or ``is_error`` is set
    and ``error_message`` explains why. The executor produces exactly one of
    these per call, in call order.
    """

    content: Any = None
    is_error: bool = False
    error_message: str | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls, content: Any) -> ToolResult:
        return cls(content=content)

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        return cls(is_error=True, error_message=message)


class Usage(BaseModel):
    """Token accounting reported by the backend."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)


class ChatRequest(BaseModel):
    """Provider-Neutral Chat Request.

    Invariant: at least one message. Whether the last non-system message comes
    from the user is checked by the adapter at send time, because the router
    builds follow-up requests that must satisfy it as well.
    """

    messages: tuple[Message, ...] = Field(min_length=1)
    tools: tuple[ToolDescriptor, ...] = ()
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=2.0)

    model_config = ConfigDict(frozen=True)

    def ends_with_user(self) -> bool:
        """True when the final non-system message is a user turn."""
        for message in reversed(self.messages):
            if message.role != MessageRole.SYSTEM:
                return message.role == MessageRole.USER
        return False

    def with_tools(self, tools: tuple[ToolDescriptor, ...]) -> ChatRequest:
        """Append descriptors not already offered (by name)."""
        offered = {tool.name for tool in self.tools}
        extra = tuple(tool for tool in tools if tool.name not in offered)
        return self.model_copy(update={"tools": self.tools + extra})


class ChatResponse(BaseModel):
    """Backend Answer Plus Provenance."""

    content: str = ""
    tool_calls: tuple[ToolCall, ...] = ()
    usage: Usage | None = None
    finish_reason: str | None = None
    backend_id: BackendId
    model_id: str

    model_config = ConfigDict(frozen=True)


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_TEMPERATURE",
    "SAFE_TOOL_NAME_PATTERN",
    "ChatRequest",
    "ChatResponse",
    "Message",
    "ToolCall",
    "ToolDescriptor",
    "ToolResult",
    "Usage",
]
