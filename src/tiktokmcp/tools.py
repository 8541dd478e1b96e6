"""Tool catalogue and dispatch.

Each tool takes a JSON-style argument dict and returns a :class:`ToolResult`
holding plain text. Failures come back as error results; :meth:`Toolbox.call`
never raises.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from tiktokmcp import config
from tiktokmcp.backend_client import BackendClient, BackendClientError
from tiktokmcp.formatting import (
    format_post_details,
    format_search_results,
    format_subtitle,
)
from tiktokmcp.models import PostDetails, ToolResult, ToolSpec
from tiktokmcp.virality import analyze_post, render_report

logger = logging.getLogger(__name__)

GET_SUBTITLE = "tiktok_get_subtitle"
GET_POST_DETAILS = "tiktok_get_post_details"
SEARCH = "tiktok_search"
ANALYZE_VIRALITY = "tiktok_analyze_virality"

_URL_DESCRIPTION = (
    "TikTok video URL, e.g., https://www.tiktok.com/@username/video/1234567890 "
    "or https://vm.tiktok.com/1234567890, or just the video ID like 7409731702890827041"
)

SEARCH_DISABLED_MESSAGE = (
    f"{SEARCH} is disabled. Enable it by setting ENABLE_SEARCH=true in the environment."
)

# ── Catalogue ──────────────────────────────────────────────────────────────
TOOL_SPECS: dict[str, ToolSpec] = {
    GET_SUBTITLE: ToolSpec(
        name=GET_SUBTITLE,
        description=(
            "Get the subtitle (content) for a TikTok video url. "
            "Use it for the spoken content or context of a video. "
            "Accepts a video URL or ID and an optional language code from the post details. "
            "Without a language code the automatic speech recognition track is returned."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "tiktok_url": {"type": "string", "description": _URL_DESCRIPTION},
                "language_code": {
                    "type": "string",
                    "description": "Language code for the subtitle, e.g., en, es, fr.",
                },
            },
            "required": ["tiktok_url"],
        },
    ),
    GET_POST_DETAILS: ToolSpec(
        name=GET_POST_DETAILS,
        description=(
            "Get the details of a TikTok post: description, video ID, creator, hashtags, "
            "likes, shares, comments, views, bookmarks, creation date, duration and "
            "available subtitles with language and source."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "tiktok_url": {"type": "string", "description": _URL_DESCRIPTION},
            },
            "required": ["tiktok_url"],
        },
    ),
    SEARCH: ToolSpec(
        name=SEARCH,
        description=(
            "Search for TikTok videos by keywords, hashtags or other terms. "
            "Returns matching videos with their details plus pagination metadata; "
            "pass cursor and search_uid back to continue a search."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "Search query, e.g., 'funny cats', 'dance', 'cooking tutorial'",
                },
                "cursor": {
                    "type": "string",
                    "description": "Pagination cursor for getting more results (optional)",
                },
                "search_uid": {
                    "type": "string",
                    "description": "Search session identifier for pagination (optional)",
                },
            },
            "required": ["query"],
        },
    ),
    ANALYZE_VIRALITY: ToolSpec(
        name=ANALYZE_VIRALITY,
        description=(
            "Analyze a TikTok video for virality signals. Fetches post details and "
            "subtitles, computes engagement ratios, and heuristically assesses hooks, "
            "CTAs, hashtags, and description cues."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "tiktok_url": {
                    "type": "string",
                    "description": "TikTok video URL or ID, e.g., https://www.tiktok.com/@username/video/123... or 7409731702890827041",
                },
                "language_code": {
                    "type": "string",
                    "description": "Optional language code for subtitle analysis (e.g., en, es, fr). Defaults to ASR language.",
                },
            },
            "required": ["tiktok_url"],
        },
    ),
}


def list_tools(search_on: bool | None = None) -> list[ToolSpec]:
    """Tools to advertise; search sits just before the analysis tool when enabled."""
    if search_on is None:
        search_on = config.search_enabled()
    names = [GET_SUBTITLE, GET_POST_DETAILS, ANALYZE_VIRALITY]
    if search_on:
        names.insert(2, SEARCH)
    return [TOOL_SPECS[n] for n in names]


# ── Arguments ──────────────────────────────────────────────────────────────
class VideoArgs(BaseModel):
    tiktok_url: str
    language_code: str | None = ""


class SearchArgs(BaseModel):
    query: str
    cursor: str | None = None
    search_uid: str | None = None


_ARGS: dict[str, type[BaseModel]] = {
    GET_SUBTITLE: VideoArgs,
    GET_POST_DETAILS: VideoArgs,
    SEARCH: SearchArgs,
    ANALYZE_VIRALITY: VideoArgs,
}


class Toolbox:
    """Validates tool arguments and runs them against a backend client."""

    def __init__(
        self,
        client_factory: Callable[[], BackendClient] = BackendClient.from_config,
        search_on: bool | None = None,
    ) -> None:
        self._client_factory = client_factory
        self._client: BackendClient | None = None
        self._search_on = config.search_enabled() if search_on is None else search_on

    @property
    def search_on(self) -> bool:
        return self._search_on

    def list_tools(self) -> list[ToolSpec]:
        return list_tools(self._search_on)

    # ── public ──────────────────────────────────────────────────────────
    def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        if arguments is None:
            return ToolResult(text="Error: No arguments provided", is_error=True)
        if name not in TOOL_SPECS:
            return ToolResult(text=f"Unknown tool: {name}", is_error=True)
        if name == SEARCH and not self._search_on:
            return ToolResult(text=SEARCH_DISABLED_MESSAGE, is_error=True)

        try:
            args = _ARGS[name].model_validate(arguments)
        except ValidationError:
            logger.warning("Invalid arguments for %s: %r", name, arguments)
            return ToolResult(text=f"Error: Invalid arguments for {name}", is_error=True)

        try:
            text = self._run(name, args)
        except (BackendClientError, config.ConfigError) as exc:
            logger.error("%s failed: %s", name, exc)
            return ToolResult(text=f"Error: {exc}", is_error=True)
        return ToolResult(text=text)

    # ── private ─────────────────────────────────────────────────────────
    def _backend(self) -> BackendClient:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def _run(self, name: str, args: Any) -> str:
        if name == GET_SUBTITLE:
            return format_subtitle(
                self._backend().get_subtitle(args.tiktok_url, args.language_code or "")
            )
        if name == GET_POST_DETAILS:
            return format_post_details(self._backend().get_post_details(args.tiktok_url))
        if name == SEARCH:
            return format_search_results(
                self._backend().search(args.query, args.cursor, args.search_uid)
            )
        return self._analyze(args.tiktok_url, args.language_code or "")

    def _analyze(self, tiktok_url: str, language_code: str) -> str:
        client = self._backend()
        with ThreadPoolExecutor(max_workers=2) as pool:
            details_future = pool.submit(client.get_post_details, tiktok_url)
            subtitle_future = pool.submit(client.get_subtitle, tiktok_url, language_code)

        details: PostDetails | None = None
        subtitle: str | None = None
        failures: list[BackendClientError] = []
        try:
            details = details_future.result()
        except BackendClientError as exc:
            logger.warning("Post details unavailable for %s: %s", tiktok_url, exc)
            failures.append(exc)
        try:
            subtitle = subtitle_future.result()
        except BackendClientError as exc:
            logger.warning("Subtitle unavailable for %s: %s", tiktok_url, exc)
            failures.append(exc)
        if len(failures) == 2:
            raise failures[0]

        report = analyze_post(details, subtitle)
        logger.info(
            "Analyzed %s: rate=%.4f, %d recommendations",
            tiktok_url,
            report.metrics.engagement_rate,
            len(report.recommendations),
        )
        return render_report(report)
