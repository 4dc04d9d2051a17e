"""Unit tests for the pydantic-ai backend adapter.

Uses pydantic-ai's FunctionModel so the real request path runs without a
provider: message translation, tool definitions, settings, response
translation and error wrapping.
"""

import asyncio

import pytest
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from fantasy_ai.domain.backend import BackendConfig, PydanticAIBackend, create_backend, to_model_messages
from fantasy_ai.domain.domain_type import BackendId
from fantasy_ai.domain.domain_value import ChatRequest, Message
from fantasy_ai.domain.errors import BackendError
from fantasy_ai.domain.tool_catalog import ToolCatalog


def backend_with(function, timeout: float = 5.0) -> PydanticAIBackend:
    config = BackendConfig(backend_id=BackendId.OPENAI, model_name="gpt-test", timeout=timeout)
    return PydanticAIBackend(config, model=FunctionModel(function))


def text_reply(text: str):
    def reply(messages, info: AgentInfo) -> ModelResponse:
        return ModelResponse(parts=[TextPart(content=text)])

    return reply


class TestMessageTranslation:
    def test_roles_map_to_pydantic_ai_parts(self):
        messages = (
            Message.system("Be brief."),
            Message.user("Hi"),
            Message.assistant(""),
            Message.assistant("Hello"),
            Message.user("Week?"),
        )

        converted = to_model_messages(messages)

        assert len(converted) == 4
        assert isinstance(converted[0], ModelRequest)
        assert isinstance(converted[0].parts[0], SystemPromptPart)
        assert isinstance(converted[1].parts[0], UserPromptPart)
        assert isinstance(converted[2], ModelResponse)
        assert converted[2].parts[0].content == "Hello"


class TestSend:
    @pytest.mark.asyncio
    async def test_text_response(self, user_request: ChatRequest):
        response = await backend_with(text_reply("It is week 14.")).send(user_request)

        assert response.content == "It is week 14."
        assert response.tool_calls == ()
        assert response.backend_id == BackendId.OPENAI
        assert response.usage is not None
        assert response.usage.total_tokens == response.usage.prompt_tokens + response.usage.completion_tokens

    @pytest.mark.asyncio
    async def test_tools_and_settings_reach_the_model(self, user_request: ChatRequest):
        """
        Demonstrates: Offered tools and sampling settings are forwarded as-is.
        """
        seen: dict = {}

        def capture(messages, info: AgentInfo) -> ModelResponse:
            seen["tools"] = [tool.name for tool in info.function_tools]
            seen["settings"] = info.model_settings
            seen["messages"] = messages
            return ModelResponse(parts=[TextPart(content="ok")])

        request = user_request.with_tools(ToolCatalog.default().tools).model_copy(
            update={"max_tokens": 123, "temperature": 0.3}
        )

        await backend_with(capture).send(request)

        assert seen["tools"] == list(ToolCatalog.default().names)
        assert seen["settings"]["max_tokens"] == 123
        assert seen["settings"]["temperature"] == 0.3
        system_parts = [part for message in seen["messages"] for part in message.parts if isinstance(part, SystemPromptPart)]
        assert system_parts[0].content == "You are helpful."

    @pytest.mark.asyncio
    async def test_tool_calls_are_translated(self, user_request: ChatRequest):
        def call_tool(messages, info: AgentInfo) -> ModelResponse:
            return ModelResponse(
                parts=[
                    TextPart(content="Let me check."),
                    ToolCallPart(tool_name="get_league", args={"league_id": "123"}),
                    ToolCallPart(tool_name="get_nfl_state", args="{}"),
                ]
            )

        response = await backend_with(call_tool).send(user_request)

        assert response.content == "Let me check."
        assert [call.name for call in response.tool_calls] == ["get_league", "get_nfl_state"]
        assert response.tool_calls[0].parameters == {"league_id": "123"}
        assert response.tool_calls[1].parameters == {}

    @pytest.mark.asyncio
    async def test_malformed_tool_arguments_raise_backend_error(self, user_request: ChatRequest):
        def broken(messages, info: AgentInfo) -> ModelResponse:
            return ModelResponse(parts=[ToolCallPart(tool_name="get_league", args="{not json")])

        with pytest.raises(BackendError, match="Malformed arguments"):
            await backend_with(broken).send(user_request)

    @pytest.mark.asyncio
    async def test_provider_exception_becomes_backend_error(self, user_request: ChatRequest):
        def failing(messages, info: AgentInfo) -> ModelResponse:
            raise RuntimeError("quota exceeded")

        with pytest.raises(BackendError) as exc_info:
            await backend_with(failing).send(user_request)

        assert exc_info.value.backend_id == BackendId.OPENAI
        assert exc_info.value.message == "quota exceeded"

    @pytest.mark.asyncio
    async def test_deadline_expiry_becomes_backend_error(self, user_request: ChatRequest):
        async def slow(messages, info: AgentInfo) -> ModelResponse:
            await asyncio.sleep(1)
            return ModelResponse(parts=[TextPart(content="late")])

        with pytest.raises(BackendError, match="timed out"):
            await backend_with(slow, timeout=0.01).send(user_request)

    @pytest.mark.asyncio
    async def test_conversation_must_end_with_user(self):
        called = []

        def reply(messages, info: AgentInfo) -> ModelResponse:
            called.append(True)
            return ModelResponse(parts=[TextPart(content="x")])

        request = ChatRequest(messages=(Message.user("Hi"), Message.assistant("Hello")))

        with pytest.raises(BackendError, match="end with a user message"):
            await backend_with(reply).send(request)
        assert called == []


class TestHealth:
    @pytest.mark.asyncio
    async def test_answering_backend_is_healthy(self):
        assert await backend_with(text_reply("ok")).is_healthy() is True

    @pytest.mark.asyncio
    async def test_failing_backend_is_unhealthy(self):
        def failing(messages, info: AgentInfo) -> ModelResponse:
            raise RuntimeError("invalid api key")

        assert await backend_with(failing).is_healthy() is False


def test_create_backend_keeps_key_secret():
    backend = create_backend(BackendId.CLAUDE, "claude-test", "sk-secret", timeout=12)

    assert backend.backend_id == BackendId.CLAUDE
    assert backend.model_id == "claude-test"
    assert backend.config.timeout == 12
    assert "sk-secret" not in repr(backend.config)
