"""CLI entry-point: ``python -m tiktokmcp serve`` / ``details`` / ``subtitle`` / ``search`` / ``analyze``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tiktokmcp import config, tools
from tiktokmcp.models import ToolResult
from tiktokmcp.tools import Toolbox
from tiktokmcp.virality import compose_report

logger = logging.getLogger(__name__)


def _setup_logging() -> None:
    # stdout carries tool output (and the MCP transport); logs go to stderr.
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _emit(result: ToolResult) -> int:
    print(result.text)
    return 1 if result.is_error else 0


def _analyze_files(details_file: Path, subtitle_file: Path | None) -> int:
    """Analyse saved post-detail / transcript text without touching the backend."""
    try:
        details_text = details_file.read_text(encoding="utf-8")
        subtitle_text = subtitle_file.read_text(encoding="utf-8") if subtitle_file else ""
    except OSError as exc:
        logger.error("Cannot read analysis input: %s", exc)
        return 1
    print(compose_report(details_text, subtitle_text))
    return 0


def _serve() -> int:
    from tiktokmcp.server import run_server

    try:
        config.require_backend_url()
    except config.ConfigError as exc:
        logger.error("%s", exc)
        return 1
    run_server()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiktok-mcp",
        description="TikTok post details, subtitles, search and virality analysis.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── serve ──────────────────────────────────────────────────────────
    sub.add_parser("serve", help="Run the MCP server on stdio.")

    # ── details ────────────────────────────────────────────────────────
    details_parser = sub.add_parser("details", help="Print a post's details.")
    details_parser.add_argument("url", help="TikTok video URL or ID.")

    # ── subtitle ───────────────────────────────────────────────────────
    subtitle_parser = sub.add_parser("subtitle", help="Print a post's subtitle.")
    subtitle_parser.add_argument("url", help="TikTok video URL or ID.")
    subtitle_parser.add_argument(
        "--language", default="", help="Subtitle language code (default: ASR)."
    )

    # ── search ─────────────────────────────────────────────────────────
    search_parser = sub.add_parser(
        "search", help="Search videos (requires ENABLE_SEARCH=true)."
    )
    search_parser.add_argument("query", help="Search terms.")
    search_parser.add_argument("--cursor", default="", help="Pagination cursor.")
    search_parser.add_argument(
        "--search-uid", default="", help="Search session identifier."
    )

    # ── analyze ────────────────────────────────────────────────────────
    analyze_parser = sub.add_parser(
        "analyze",
        help="Virality analysis of a post, fetched live or from saved text files.",
    )
    analyze_parser.add_argument("url", nargs="?", help="TikTok video URL or ID.")
    analyze_parser.add_argument(
        "--language", default="", help="Subtitle language code (default: ASR)."
    )
    analyze_parser.add_argument(
        "--details-file",
        type=Path,
        help="Saved post-details text block; skips the backend.",
    )
    analyze_parser.add_argument(
        "--subtitle-file",
        type=Path,
        help="Saved transcript text, used with --details-file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging()

    if args.command == "serve":
        sys.exit(_serve())

    toolbox = Toolbox()
    if args.command == "details":
        code = _emit(toolbox.call(tools.GET_POST_DETAILS, {"tiktok_url": args.url}))
    elif args.command == "subtitle":
        code = _emit(
            toolbox.call(
                tools.GET_SUBTITLE,
                {"tiktok_url": args.url, "language_code": args.language},
            )
        )
    elif args.command == "search":
        code = _emit(
            toolbox.call(
                tools.SEARCH,
                {
                    "query": args.query,
                    "cursor": args.cursor,
                    "search_uid": args.search_uid,
                },
            )
        )
    elif args.command == "analyze":
        if args.details_file:
            code = _analyze_files(args.details_file, args.subtitle_file)
        elif args.url:
            code = _emit(
                toolbox.call(
                    tools.ANALYZE_VIRALITY,
                    {"tiktok_url": args.url, "language_code": args.language},
                )
            )
        else:
            parser.error("analyze needs a URL or --details-file")
    else:
        parser.print_help()
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
