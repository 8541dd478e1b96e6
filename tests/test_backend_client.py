"""Unit tests for the backend HTTP client."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from tiktokmcp.backend_client import BackendClient, BackendClientError, build_backend_url
from tiktokmcp.config import ConfigError


def _response(payload: Any = None, status: int = 200, reason: str = "OK") -> MagicMock:
    resp = MagicMock()
    resp.ok = 200 <= status < 300
    resp.status_code = status
    resp.reason = reason
    resp.text = "" if payload is None else str(payload)
    resp.json.return_value = payload
    return resp


def _client(resp: MagicMock, api_key: str = "") -> tuple[BackendClient, MagicMock]:
    session = MagicMock()
    session.headers = {}
    session.get.return_value = resp
    client = BackendClient("https://backend.example/api", api_key=api_key, session=session)
    return client, session


class TestBuildBackendUrl:
    def test_keeps_base_path(self) -> None:
        assert build_backend_url("https://h.example/api", "/search") == "https://h.example/api/search"
        assert build_backend_url("https://h.example/api/", "search") == "https://h.example/api/search"

    def test_bare_host(self) -> None:
        assert build_backend_url("https://h.example", "post-detail") == "https://h.example/post-detail"

    def test_invalid_base(self) -> None:
        with pytest.raises(ConfigError):
            build_backend_url("not a url", "search")


class TestHeaders:
    def test_bearer_only_with_key(self) -> None:
        _, session = _client(_response({}), api_key="secret")
        assert session.headers["Authorization"] == "Bearer secret"
        assert session.headers["Accept"] == "application/json"

        _, session = _client(_response({}))
        assert "Authorization" not in session.headers


class TestGetPostDetails:
    def test_parses_details(self) -> None:
        client, session = _client(
            _response({"success": True, "details": {"description": "hi", "video_id": 7409731702890827041, "likes": "1,000"}})
        )
        details = client.get_post_details("7409731702890827041")
        assert details is not None
        assert details.description == "hi"
        assert details.likes == "1,000"

        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://backend.example/api/post-detail"
        assert params == {"tiktok_url": "7409731702890827041"}

    def test_missing_details(self) -> None:
        client, _ = _client(_response({"success": False}))
        assert client.get_post_details("x") is None

    def test_http_error(self) -> None:
        client, _ = _client(_response("boom", status=502, reason="Bad Gateway"))
        with pytest.raises(BackendClientError, match="Backend API error: 502 Bad Gateway"):
            client.get_post_details("x")

    def test_transport_error(self) -> None:
        client, session = _client(_response({}))
        session.get.side_effect = requests.ConnectionError("refused")
        with pytest.raises(BackendClientError, match="refused"):
            client.get_post_details("x")


class TestGetSubtitle:
    def test_language_code_only_when_given(self) -> None:
        client, session = _client(_response({"subtitle_content": "hello there"}))
        assert client.get_subtitle("x") == "hello there"
        assert session.get.call_args.kwargs["params"] == {"tiktok_url": "x"}

        client.get_subtitle("x", "es")
        assert session.get.call_args.kwargs["params"] == {"tiktok_url": "x", "language_code": "es"}

    def test_no_content(self) -> None:
        client, _ = _client(_response({"success": True}))
        assert client.get_subtitle("x") is None


class TestSearch:
    def test_results(self) -> None:
        payload = {
            "success": True,
            "videos": [{"description": "a", "video_id": "1"}, {"description": "b", "video_id": "2"}],
            "metadata": {"cursor": "10", "has_more": True, "search_uid": "u1"},
        }
        client, session = _client(_response(payload))
        result = client.search("cats", cursor="0", search_uid="u1")
        assert [v.video_id for v in result.videos] == ["1", "2"]
        assert result.metadata.has_more is True
        assert session.get.call_args.kwargs["params"] == {"query": "cats", "cursor": "0", "search_uid": "u1"}

    def test_empty(self) -> None:
        client, session = _client(_response({"success": True}))
        result = client.search("cats")
        assert result.videos == []
        assert session.get.call_args.kwargs["params"] == {"query": "cats"}
