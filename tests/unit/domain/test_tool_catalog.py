"""Unit tests for ToolCatalog.

Tests focus on discovery behavior:
- OpenRPC parsing (descriptions, parameter schemas, required lists)
- Safe-name rewriting and the reverse map
- Fallback to the built-in catalog on any discovery failure
"""

import httpx
import pytest

from fantasy_ai.domain.tool_catalog import OPENRPC_PATH, ToolCatalog, safe_name

DEFAULT_TOOLS = (
    "get_nfl_state",
    "get_user",
    "get_user_leagues",
    "get_league",
    "get_league_rosters",
    "get_league_users",
    "get_league_matchups",
    "get_players_nfl",
    "get_player_stats",
    "get_projections",
)


def openrpc_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url="http://tools.test", transport=httpx.MockTransport(handler))


class TestSafeName:
    def test_rewrites_illegal_characters_to_underscore(self):
        assert safe_name("sleeper.get league/v2") == "sleeper_get_league_v2"

    def test_leaves_legal_names_alone(self):
        assert safe_name("get_nfl-state") == "get_nfl-state"


class TestFromOpenRPC:
    def test_builds_descriptor_schema_from_params(self):
        """
        Demonstrates: OpenRPC params become a JSON Schema object.

        Missing param types default to string, enums are carried, and
        required params are listed.
        """
        document = {
            "methods": [
                {
                    "name": "get_league",
                    "summary": "League details",
                    "params": [
                        {"name": "league_id", "required": True, "schema": {"type": "string"}, "description": "ID"},
                        {"name": "sport", "schema": {"enum": ["nfl"]}},
                    ],
                }
            ]
        }

        catalog = ToolCatalog.from_openrpc(document)

        tool = catalog.tools[0]
        assert tool.name == "get_league"
        assert tool.description == "League details"
        assert tool.input_schema["type"] == "object"
        assert tool.input_schema["required"] == ["league_id"]
        assert tool.input_schema["properties"]["league_id"]["type"] == "string"
        assert tool.input_schema["properties"]["sport"]["type"] == "string"
        assert tool.input_schema["properties"]["sport"]["enum"] == ["nfl"]
        assert catalog.source == "discovered"

    def test_description_falls_back_to_description_then_generic(self):
        document = {
            "methods": [
                {"name": "a", "description": "From description"},
                {"name": "b"},
            ]
        }

        catalog = ToolCatalog.from_openrpc(document)

        assert [tool.description for tool in catalog.tools] == ["From description", "Execute b"]

    def test_unsafe_names_resolve_back_to_original(self):
        catalog = ToolCatalog.from_openrpc({"methods": [{"name": "sleeper.get_user"}]})

        assert catalog.names == ("sleeper_get_user",)
        assert catalog.resolve_original_name("sleeper_get_user") == "sleeper.get_user"

    def test_colliding_safe_names_keep_the_first(self, caplog: pytest.LogCaptureFixture):
        catalog = ToolCatalog.from_openrpc({"methods": [{"name": "get.user"}, {"name": "get/user"}]})

        assert catalog.names == ("get_user",)
        assert catalog.resolve_original_name("get_user") == "get.user"
        assert "tool_name_collision" in caplog.text

    @pytest.mark.parametrize(
        "document",
        [
            {},
            {"methods": "nope"},
            {"methods": ["not-an-object"]},
            {"methods": [{"summary": "no name"}]},
            ["methods"],
        ],
    )
    def test_malformed_documents_raise(self, document):
        with pytest.raises(ValueError):
            ToolCatalog.from_openrpc(document)


class TestDefaultCatalog:
    def test_contains_the_sleeper_tools(self):
        catalog = ToolCatalog.default()

        assert catalog.names == DEFAULT_TOOLS
        assert catalog.source == "default"

    def test_matchups_require_league_and_week(self):
        catalog = ToolCatalog.default()
        matchups = next(tool for tool in catalog.tools if tool.name == "get_league_matchups")

        assert matchups.input_schema["required"] == ["league_id", "week"]
        assert matchups.input_schema["properties"]["week"]["type"] == "number"

    def test_unknown_names_resolve_to_themselves(self):
        assert ToolCatalog.default().resolve_original_name("made_up") == "made_up"


class TestDiscover:
    @pytest.mark.asyncio
    async def test_uses_discovered_methods(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == OPENRPC_PATH
            return httpx.Response(200, json={"methods": [{"name": "get_nfl_state", "summary": "State"}]})

        async with openrpc_client(handler) as client:
            catalog = await ToolCatalog.discover(client)

        assert catalog.names == ("get_nfl_state",)
        assert catalog.source == "discovered"

    @pytest.mark.asyncio
    async def test_http_error_falls_back_to_default(self):
        async with openrpc_client(lambda request: httpx.Response(503)) as client:
            catalog = await ToolCatalog.discover(client)

        assert catalog.source == "default"
        assert catalog.names == DEFAULT_TOOLS

    @pytest.mark.asyncio
    async def test_unreachable_service_falls_back_to_default(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with openrpc_client(handler) as client:
            catalog = await ToolCatalog.discover(client)

        assert catalog.source == "default"

    @pytest.mark.asyncio
    async def test_malformed_document_falls_back_to_default(self):
        async with openrpc_client(lambda request: httpx.Response(200, json={"openrpc": "1.2.6"})) as client:
            catalog = await ToolCatalog.discover(client)

        assert catalog.source == "default"

    @pytest.mark.asyncio
    async def test_non_json_body_falls_back_to_default(self):
        async with openrpc_client(lambda request: httpx.Response(200, text="<html>")) as client:
            catalog = await ToolCatalog.discover(client)

        assert catalog.source == "default"
