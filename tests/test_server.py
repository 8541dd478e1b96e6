"""Tests for MCP tool registration."""

import asyncio

from tiktokmcp import tools
from tiktokmcp.server import build_server
from tiktokmcp.tools import Toolbox


def _names(search_on: bool) -> list[str]:
    box = Toolbox(client_factory=lambda: None, search_on=search_on)  # type: ignore[arg-type, return-value]
    mcp = build_server(box)
    return [tool.name for tool in asyncio.run(mcp.list_tools())]


class TestBuildServer:
    def test_search_hidden_by_default(self) -> None:
        names = _names(search_on=False)
        assert set(names) == {tools.GET_SUBTITLE, tools.GET_POST_DETAILS, tools.ANALYZE_VIRALITY}

    def test_search_registered_when_enabled(self) -> None:
        assert tools.SEARCH in _names(search_on=True)


class TestParameterDescriptions:
    def _schemas(self) -> dict[str, dict]:
        box = Toolbox(client_factory=lambda: None, search_on=True)  # type: ignore[arg-type, return-value]
        mcp = build_server(box)
        return {tool.name: tool.inputSchema for tool in asyncio.run(mcp.list_tools())}

    def test_descriptions_match_catalogue(self) -> None:
        schemas = self._schemas()
        for name, spec in tools.TOOL_SPECS.items():
            for param, declared in spec.input_schema["properties"].items():
                advertised = schemas[name]["properties"][param]
                assert advertised["description"] == declared["description"]

    def test_required_matches_catalogue(self) -> None:
        schemas = self._schemas()
        for name, spec in tools.TOOL_SPECS.items():
            assert schemas[name]["required"] == spec.input_schema["required"]
