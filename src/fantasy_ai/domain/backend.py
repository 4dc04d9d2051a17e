"""Backend Adapter - One Interface Over Every LLM Provider.

Each backend (OpenAI, Claude, Gemini) is a ``PydanticAIBackend`` wrapping a
pydantic-ai ``Model``. The adapter translates our provider-neutral
``ChatRequest`` into pydantic-ai message parts, makes exactly one direct model
request, and translates the ``ModelResponse`` back into a ``ChatResponse``.

Key Insight:
    pydantic-ai already normalizes the three provider wire formats (system
    prompt placement, tool schema encoding, usage fields). Driving it through
    ``pydantic_ai.direct.model_request`` gives us one round trip per call with
    no agent loop, so the router keeps full control of tool execution.

Translation:
    system    → ModelRequest(parts=[SystemPromptPart])
    user      → ModelRequest(parts=[UserPromptPart])
    assistant → ModelResponse(parts=[TextPart])   (empty turns skipped)
    tools     → ToolDefinition(name, description, parameters_json_schema)
    TextPart* → content (concatenated), ToolCallPart* → tool_calls

Every failure (deadline, provider exception, malformed tool arguments, a
conversation that does not end with a user turn) surfaces as ``BackendError``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from .domain_type import BackendId, MessageRole
from .domain_value import ChatRequest, ChatResponse, Message, ToolCall, Usage
from .errors import BackendError

if TYPE_CHECKING:
    from pydantic_ai.messages import ModelMessage, ModelResponse
    from pydantic_ai.models import Model

logger = logging.getLogger(__name__)


class Backend(Protocol):
    """What the router needs from a backend."""

    @property
    def backend_id(self) -> BackendId: ...

    @property
    def model_id(self) -> str: ...

    async def send(self, request: ChatRequest) -> ChatResponse: ...

    async def is_healthy(self) -> bool: ...


class BackendConfig(BaseModel):
    """Connection settings for one backend (timeout in seconds)."""

    backend_id: BackendId
    model_name: str
    api_key: SecretStr | None = None
    timeout: float = Field(default=30.0, gt=0)

    model_config = ConfigDict(frozen=True)


def build_model(config: BackendConfig) -> Model:
    """Instantiate the pydantic-ai model for ``config.backend_id``."""
    api_key = config.api_key.get_secret_value() if config.api_key else None

    if config.backend_id == BackendId.OPENAI:
        from pydantic_ai.models.openai import OpenAIChatModel
        from pydantic_ai.providers.openai import OpenAIProvider

        return OpenAIChatModel(config.model_name, provider=OpenAIProvider(api_key=api_key))
    if config.backend_id == BackendId.CLAUDE:
        from pydantic_ai.models.anthropic import AnthropicModel
        from pydantic_ai.providers.anthropic import AnthropicProvider

        return AnthropicModel(config.model_name, provider=AnthropicProvider(api_key=api_key))
    if config.backend_id == BackendId.GEMINI:
        from pydantic_ai.models.google import GoogleModel
        from pydantic_ai.providers.google import GoogleProvider

        return GoogleModel(config.model_name, provider=GoogleProvider(api_key=api_key))
    raise ValueError(f"Unsupported backend: {config.backend_id}")


def to_model_messages(messages: tuple[Message, ...]) -> list[ModelMessage]:
    from pydantic_ai.messages import (
        ModelRequest,
        ModelResponse,
        SystemPromptPart,
        TextPart,
        UserPromptPart,
    )

    converted: list[ModelMessage] = []
    for message in messages:
        if message.role == MessageRole.SYSTEM:
            converted.append(ModelRequest(parts=[SystemPromptPart(content=message.content)]))
        elif message.role == MessageRole.USER:
            converted.append(ModelRequest(parts=[UserPromptPart(content=message.content)]))
        elif message.content:
            converted.append(ModelResponse(parts=[TextPart(content=message.content)]))
    return converted


class PydanticAIBackend:
    """
    Backend adapter driving a pydantic-ai model with direct requests.

    The model is created on first use so that registering a backend never
    touches the network or the provider SDK. Tests inject a ``FunctionModel``.
    """

    def __init__(self, config: BackendConfig, model: Model | None = None):
        self.config = config
        self._model = model

    @property
    def backend_id(self) -> BackendId:
        return self.config.backend_id

    @property
    def model_id(self) -> str:
        return self.config.model_name

    def get_model(self) -> Model:
        if self._model is None:
            self._model = build_model(self.config)
        return self._model

    async def send(self, request: ChatRequest) -> ChatResponse:
        from pydantic_ai.direct import model_request
        from pydantic_ai.models import ModelRequestParameters
        from pydantic_ai.settings import ModelSettings
        from pydantic_ai.tools import ToolDefinition

        if not request.ends_with_user():
            raise BackendError(self.backend_id, "Conversation must end with a user message")

        parameters = ModelRequestParameters(
            function_tools=[
                ToolDefinition(
                    name=tool.name,
                    description=tool.description,
                    parameters_json_schema=tool.input_schema,
                )
                for tool in request.tools
            ],
            allow_text_output=True,
        )
        settings = ModelSettings(max_tokens=request.max_tokens, temperature=request.temperature)

        try:
            async with asyncio.timeout(self.config.timeout):
                response = await model_request(
                    self.get_model(),
                    to_model_messages(request.messages),
                    model_settings=settings,
                    model_request_parameters=parameters,
                )
        except TimeoutError as exc:
            raise BackendError(self.backend_id, f"Request timed out after {self.config.timeout}s") from exc
        except Exception as exc:
            raise BackendError(self.backend_id, str(exc) or type(exc).__name__) from exc

        return self._to_chat_response(response)

    async def is_healthy(self) -> bool:
        probe = ChatRequest(messages=(Message.user("test"),), max_tokens=1)
        try:
            await self.send(probe)
        except BackendError as exc:
            logger.warning("backend_health_check_failed", extra={"backend": self.backend_id, "error": exc.message})
            return False
        return True

    def _to_chat_response(self, response: ModelResponse) -> ChatResponse:
        from pydantic_ai.messages import TextPart, ToolCallPart

        texts: list[str] = []
        calls: list[ToolCall] = []
        for part in response.parts:
            if isinstance(part, TextPart):
                texts.append(part.content)
            elif isinstance(part, ToolCallPart):
                try:
                    calls.append(ToolCall(name=part.tool_name, parameters=part.args_as_dict()))
                except ValueError as exc:
                    raise BackendError(self.backend_id, f"Malformed arguments for tool '{part.tool_name}'") from exc

        usage = Usage(
            prompt_tokens=response.usage.input_tokens,
            completion_tokens=response.usage.output_tokens,
            total_tokens=response.usage.input_tokens + response.usage.output_tokens,
        )
        return ChatResponse(
            content="".join(texts),
            tool_calls=tuple(calls),
            usage=usage,
            finish_reason=response.finish_reason,
            backend_id=self.backend_id,
            model_id=response.model_name or self.model_id,
        )


def create_backend(
    backend_id: BackendId,
    model_name: str,
    api_key: str | None,
    timeout: float = 30.0,
) -> PydanticAIBackend:
    """Factory from plain settings values."""
    config = BackendConfig(
        backend_id=backend_id,
        model_name=model_name,
        api_key=SecretStr(api_key) if api_key else None,
        timeout=timeout,
    )
    return PydanticAIBackend(config)


__all__ = [
    "Backend",
    "BackendConfig",
    "PydanticAIBackend",
    "build_model",
    "create_backend",
    "to_model_messages",
]
