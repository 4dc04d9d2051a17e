"""Tool Catalog - Snapshot of the Tools the External Tool Service Offers.

The tool service describes itself with an OpenRPC document served at
``/openrpc.json``. Each method becomes a ``ToolDescriptor`` whose name is
rewritten into the backend-safe alphabet; the catalog remembers the original
method name so the executor can call the service with what it expects.

Architecture:
    ToolCatalog: frozen snapshot (descriptors + safe → original map)
    ├─ discover(): fetch + parse, falling back to the built-in catalog
    ├─ from_openrpc(): pure parse of an OpenRPC document
    └─ default(): hand-authored Sleeper fantasy football tools

Key Features:
    - Never fails: discovery errors degrade to the built-in catalog
    - Deterministic names: first method wins when two names collide after rewriting
    - Replaced wholesale on reload; readers never observe a half-built catalog
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .domain_value import ToolDescriptor

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)

OPENRPC_PATH = "/openrpc.json"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def safe_name(name: str) -> str:
    """Rewrite every character outside ``[A-Za-z0-9_-]`` to ``_``."""
    return _UNSAFE_CHARS.sub("_", name)


def _object_schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    return {"type": "object", "properties": properties or {}, "required": required or []}


def _param_schema(param: Mapping[str, Any]) -> dict[str, Any]:
    schema = param.get("schema") or {}
    if not isinstance(schema, Mapping):
        raise ValueError(f"param schema for '{param.get('name')}' is not an object")
    prop: dict[str, Any] = {
        "type": schema.get("type") or "string",
        "description": param.get("description") or "",
    }
    if schema.get("enum"):
        prop["enum"] = list(schema["enum"])
    return prop


class ToolCatalog(BaseModel):
    """Immutable Tool Snapshot.

    Attributes:
        tools: Descriptors in discovery order, names already backend-safe
        original_names: safe name → method name the tool service expects
        source: Where the snapshot came from ("discovered" or "default")
    """

    tools: tuple[ToolDescriptor, ...] = ()
    original_names: dict[str, str] = Field(default_factory=dict)
    source: Literal["discovered", "default"] = "discovered"

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def names(self) -> tuple[str, ...]:
        return tuple(tool.name for tool in self.tools)

    def resolve_original_name(self, name: str) -> str:
        """Map a backend-safe name back to the service's method name.

        Unknown names are returned unchanged so the tool service can report
        the error itself.
        """
        return self.original_names.get(name, name)

    def has_tool(self, name: str) -> bool:
        return name in self.original_names

    @classmethod
    def from_descriptors(
        cls,
        entries: list[tuple[str, str, dict[str, Any]]],
        source: Literal["discovered", "default"] = "discovered",
    ) -> ToolCatalog:
        """Build from ``(original_name, description, input_schema)`` triples.

        When two original names rewrite to the same safe name the first one is
        kept and the later one is skipped.
        """
        tools: list[ToolDescriptor] = []
        original_names: dict[str, str] = {}
        for original, description, schema in entries:
            name = safe_name(original)
            if name in original_names:
                logger.warning(
                    "tool_name_collision",
                    extra={"tool": original, "safe_name": name, "kept": original_names[name]},
                )
                continue
            original_names[name] = original
            tools.append(ToolDescriptor(name=name, description=description, input_schema=schema))
        return cls(tools=tuple(tools), original_names=original_names, source=source)

    @classmethod
    def from_openrpc(cls, document: Any) -> ToolCatalog:
        """Parse an OpenRPC document.

        Raises:
            ValueError: If the document has no ``methods`` list or a method is not an object
        """
        if not isinstance(document, Mapping) or not isinstance(document.get("methods"), list):
            raise ValueError("OpenRPC document has no 'methods' list")

        entries: list[tuple[str, str, dict[str, Any]]] = []
        for method in document["methods"]:
            if not isinstance(method, Mapping) or not isinstance(method.get("name"), str) or not method["name"]:
                raise ValueError(f"malformed OpenRPC method: {method!r}")
            name = method["name"]
            description = method.get("summary") or method.get("description") or f"Execute {name}"
            params = method.get("params") or []
            if not isinstance(params, list) or not all(isinstance(p, Mapping) and "name" in p for p in params):
                raise ValueError(f"malformed params for OpenRPC method '{name}'")
            properties = {param["name"]: _param_schema(param) for param in params}
            required = [param["name"] for param in params if param.get("required")]
            entries.append((name, description, _object_schema(properties, required)))

        return cls.from_descriptors(entries, source="discovered")

    @classmethod
    def default(cls) -> ToolCatalog:
        """Built-in Sleeper fantasy football tools used when discovery fails."""
        league_id = {"league_id": {"type": "string", "description": "Sleeper league ID"}}
        nfl_only = {"type": "string", "description": "Sport (nfl)", "enum": ["nfl"]}
        entries = [
            ("get_nfl_state", "Get current NFL state including week and season information", _object_schema()),
            (
                "get_user",
                "Get user information by username or user ID",
                _object_schema({"username": {"type": "string", "description": "Sleeper username"}}, ["username"]),
            ),
            (
                "get_user_leagues",
                "Get all leagues for a specific user and season",
                _object_schema(
                    {
                        "user_id": {"type": "string", "description": "Sleeper user ID"},
                        "sport": {"type": "string", "description": "Sport (nfl, nba, etc.)", "enum": ["nfl"]},
                        "season": {"type": "string", "description": 'Season year (e.g., "2024")'},
                    },
                    ["user_id", "sport", "season"],
                ),
            ),
            ("get_league", "Get detailed league information", _object_schema(league_id, ["league_id"])),
            ("get_league_rosters", "Get all rosters in a league", _object_schema(league_id, ["league_id"])),
            ("get_league_users", "Get all users in a league", _object_schema(league_id, ["league_id"])),
            (
                "get_league_matchups",
                "Get matchups for a specific week in a league",
                _object_schema(
                    {**league_id, "week": {"type": "number", "description": "Week number (1-18)"}},
                    ["league_id", "week"],
                ),
            ),
            ("get_players_nfl", "Get all NFL players data", _object_schema()),
            (
                "get_player_stats",
                "Get player statistics for a specific season and week",
                _object_schema(
                    {
                        "sport": nfl_only,
                        "season": {"type": "string", "description": "Season year"},
                        "season_type": {"type": "string", "description": "regular or post", "enum": ["regular", "post"]},
                        "week": {"type": "number", "description": "Week number (optional for season stats)"},
                        "position": {"type": "string", "description": "Player position filter (optional)"},
                    },
                    ["sport", "season", "season_type"],
                ),
            ),
            (
                "get_projections",
                "Get player projections for a specific season and week",
                _object_schema(
                    {
                        "sport": nfl_only,
                        "season": {"type": "string", "description": "Season year"},
                        "week": {"type": "number", "description": "Week number"},
                    },
                    ["sport", "season", "week"],
                ),
            ),
        ]
        return cls.from_descriptors(entries, source="default")

    @classmethod
    async def discover(cls, client: httpx.AsyncClient) -> ToolCatalog:
        """Fetch the OpenRPC document; any failure yields ``default()``."""
        import httpx

        try:
            response = await client.get(OPENRPC_PATH)
            response.raise_for_status()
            catalog = cls.from_openrpc(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("tool_discovery_failed", extra={"error": str(exc)})
            return cls.default()

        logger.info("tool_discovery_complete", extra={"tools": list(catalog.names)})
        return catalog


__all__ = ["OPENRPC_PATH", "ToolCatalog", "safe_name"]
