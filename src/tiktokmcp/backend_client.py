"""HTTP client for the TikTok data backend (post details, subtitles, search)."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

import requests
from pydantic import ValidationError

from tiktokmcp import config
from tiktokmcp.models import PostDetails, SearchResult

logger = logging.getLogger(__name__)

_POST_DETAIL_PATH = "post-detail"
_SUBTITLES_PATH = "get-subtitles"
_SEARCH_PATH = "search"


class BackendClientError(Exception):
    """Raised when the backend returns an error or cannot be reached."""


def normalize_base_url(base_url: str) -> str:
    """Append a trailing slash so relative endpoints extend the base path."""
    if not base_url.startswith(("http://", "https://")):
        raise config.ConfigError(f"BACKEND_BASE_URL is not a valid URL: {base_url!r}")
    return base_url if base_url.endswith("/") else f"{base_url}/"


def build_backend_url(base_url: str, endpoint_path: str) -> str:
    """Join *endpoint_path* onto *base_url* without discarding the base path.

    ``build_backend_url("https://h/api", "/search")`` -> ``"https://h/api/search"``.
    """
    return urljoin(normalize_base_url(base_url), endpoint_path.lstrip("/"))


class BackendClient:
    """Thin wrapper around the backend's ``GET`` endpoints."""

    def __init__(
        self,
        base_url: str,
        api_key: str = "",
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = normalize_base_url(base_url)
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {"Accept": "application/json", "Accept-Encoding": "gzip"}
        )
        if api_key:
            self._session.headers.update({"Authorization": f"Bearer {api_key}"})

    @classmethod
    def from_config(cls) -> BackendClient:
        return cls(
            base_url=config.require_backend_url(),
            api_key=config.BACKEND_API_KEY,
            timeout=config.REQUEST_TIMEOUT,
        )

    # ── public ──────────────────────────────────────────────────────────
    def get_post_details(self, tiktok_url: str) -> PostDetails | None:
        """Fetch a post's details; ``None`` when the backend has none."""
        data = self._get(_POST_DETAIL_PATH, {"tiktok_url": tiktok_url})
        raw = data.get("details")
        if not raw:
            logger.info("No details returned for %s", tiktok_url)
            return None
        try:
            return PostDetails.model_validate(raw)
        except ValidationError as exc:
            raise BackendClientError(f"Backend returned malformed post details: {exc}") from exc

    def get_subtitle(self, tiktok_url: str, language_code: str = "") -> str | None:
        """Fetch transcript text; ``None`` when no subtitle is available."""
        params: dict[str, Any] = {"tiktok_url": tiktok_url}
        if language_code:
            params["language_code"] = language_code
        data = self._get(_SUBTITLES_PATH, params)
        content = data.get("subtitle_content")
        if not content:
            logger.info("No subtitle returned for %s", tiktok_url)
            return None
        return str(content)

    def search(
        self,
        query: str,
        cursor: str | None = None,
        search_uid: str | None = None,
    ) -> SearchResult:
        params: dict[str, Any] = {"query": query}
        if cursor:
            params["cursor"] = cursor
        if search_uid:
            params["search_uid"] = search_uid
        data = self._get(_SEARCH_PATH, params)
        try:
            result = SearchResult.model_validate(
                {"videos": data.get("videos") or [], "metadata": data.get("metadata") or {}}
            )
        except ValidationError as exc:
            raise BackendClientError(f"Backend returned malformed search results: {exc}") from exc
        logger.info("Search %r returned %d videos", query, len(result.videos))
        return result

    # ── private ─────────────────────────────────────────────────────────
    def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = build_backend_url(self._base_url, endpoint)
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise BackendClientError(f"Backend request failed: {exc}") from exc
        if not resp.ok:
            raise BackendClientError(
                f"Backend API error: {resp.status_code} {resp.reason}\n{resp.text[:500]}"
            )
        try:
            data = resp.json()
        except ValueError as exc:
            raise BackendClientError(f"Backend returned invalid JSON from {endpoint}") from exc
        if not isinstance(data, dict):
            raise BackendClientError(f"Backend returned unexpected payload from {endpoint}")
        return data
