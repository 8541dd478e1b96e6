"""MCP server exposing the TikTok tools over stdio.

Run: ``python -m tiktokmcp serve`` and point an MCP client at the command.
"""

import logging
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from tiktokmcp import tools
from tiktokmcp.tools import Toolbox

logger = logging.getLogger(__name__)

SERVER_NAME = "tiktok-mcp"


def _param(tool: str, name: str) -> str:
    """Argument description from the tool catalogue's input schema."""
    return tools.TOOL_SPECS[tool].input_schema["properties"][name]["description"]


# Parameter types carry the catalogue descriptions into the advertised schemas.
SubtitleUrl = Annotated[
    str, Field(description=_param(tools.GET_SUBTITLE, "tiktok_url"))
]
SubtitleLanguage = Annotated[
    str, Field(description=_param(tools.GET_SUBTITLE, "language_code"))
]
DetailsUrl = Annotated[
    str, Field(description=_param(tools.GET_POST_DETAILS, "tiktok_url"))
]
SearchQuery = Annotated[str, Field(description=_param(tools.SEARCH, "query"))]
SearchCursor = Annotated[str, Field(description=_param(tools.SEARCH, "cursor"))]
SearchUid = Annotated[str, Field(description=_param(tools.SEARCH, "search_uid"))]
AnalyzeUrl = Annotated[
    str, Field(description=_param(tools.ANALYZE_VIRALITY, "tiktok_url"))
]
AnalyzeLanguage = Annotated[
    str, Field(description=_param(tools.ANALYZE_VIRALITY, "language_code"))
]


def build_server(toolbox: Toolbox | None = None) -> FastMCP:
    """Register the tool catalogue on a new FastMCP server.

    Search is only registered when the toolbox has it enabled.
    """
    box = toolbox or Toolbox()
    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "Fetch TikTok post details, subtitles and search results, and assess "
            "a post's virality. Pass a video URL or numeric video ID."
        ),
    )

    def _run(name: str, arguments: dict) -> str:
        result = box.call(name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return result.text

    def _description(name: str) -> str:
        return tools.TOOL_SPECS[name].description

    @mcp.tool(name=tools.GET_SUBTITLE, description=_description(tools.GET_SUBTITLE))
    def get_subtitle(
        tiktok_url: SubtitleUrl, language_code: SubtitleLanguage = ""
    ) -> str:
        return _run(
            tools.GET_SUBTITLE,
            {"tiktok_url": tiktok_url, "language_code": language_code},
        )

    @mcp.tool(
        name=tools.GET_POST_DETAILS, description=_description(tools.GET_POST_DETAILS)
    )
    def get_post_details(tiktok_url: DetailsUrl) -> str:
        return _run(tools.GET_POST_DETAILS, {"tiktok_url": tiktok_url})

    if box.search_on:

        @mcp.tool(name=tools.SEARCH, description=_description(tools.SEARCH))
        def search(
            query: SearchQuery, cursor: SearchCursor = "", search_uid: SearchUid = ""
        ) -> str:
            return _run(
                tools.SEARCH,
                {"query": query, "cursor": cursor, "search_uid": search_uid},
            )

    @mcp.tool(
        name=tools.ANALYZE_VIRALITY, description=_description(tools.ANALYZE_VIRALITY)
    )
    def analyze_virality(
        tiktok_url: AnalyzeUrl, language_code: AnalyzeLanguage = ""
    ) -> str:
        return _run(
            tools.ANALYZE_VIRALITY,
            {"tiktok_url": tiktok_url, "language_code": language_code},
        )

    logger.info(
        "Registered tools: %s", ", ".join(spec.name for spec in box.list_tools())
    )
    return mcp


def run_server() -> None:
    mcp = build_server()
    logger.info("TikTok MCP server running on stdio")
    mcp.run(transport="stdio")
