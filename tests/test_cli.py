"""Tests for the command-line entry-point."""

from pathlib import Path

import pytest

from tiktokmcp import config
from tiktokmcp.__main__ import main

_DETAILS = """Description: Check this out #fun #cats
    Video ID: 123
    Likes: 1,000
    Shares: 50
    Comments: 25
    Views: 10,000
    Duration: 15 seconds"""


class TestAnalyzeFiles:
    def test_offline_analysis(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        details = tmp_path / "details.txt"
        details.write_text(_DETAILS)
        subtitle = tmp_path / "subtitle.txt"
        subtitle.write_text("wait for it, follow for more")

        with pytest.raises(SystemExit) as exc:
            main(["analyze", "--details-file", str(details), "--subtitle-file", str(subtitle)])
        assert exc.value.code == 0

        out = capsys.readouterr().out
        assert out.startswith("Virality Analysis\n")
        assert "Engagement rate: 10.75%" in out

    def test_missing_details_file(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["analyze", "--details-file", str(tmp_path / "missing.txt")])
        assert exc.value.code == 1
        assert "Cannot read analysis input" in caplog.text

    def test_analyze_needs_input(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["analyze"])
        assert exc.value.code == 2


class TestBackendCommands:
    def test_missing_backend_url_is_an_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(config, "BACKEND_BASE_URL", "")
        with pytest.raises(SystemExit) as exc:
            main(["details", "7409731702890827041"])
        assert exc.value.code == 1
        assert "BACKEND_BASE_URL" in capsys.readouterr().out

    def test_serve_requires_backend_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "BACKEND_BASE_URL", "")
        with pytest.raises(SystemExit) as exc:
            main(["serve"])
        assert exc.value.code == 1

    def test_no_command(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 1
