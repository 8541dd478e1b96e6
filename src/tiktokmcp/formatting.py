"""Render backend records as the labelled text blocks the tools return."""

from __future__ import annotations

from tiktokmcp.models import PostDetails, SearchResult, SubtitleTrack

NO_DETAILS = "No details available"
NO_SUBTITLE = "No subtitle available"
NO_VIDEOS = "No videos found for the search query"


def _or(value: object, default: str) -> str:
    return str(value) if value else default


def _subtitles(tracks: list[SubtitleTrack] | None) -> str:
    if not tracks:
        return "None"
    return ", ".join(
        f"{t.language or 'Unknown'} ({t.source or 'Unknown source'})" for t in tracks
    )


def _detail_lines(details: PostDetails) -> list[str]:
    hashtags = (
        ", ".join(details.hashtags) if isinstance(details.hashtags, list) else "N/A"
    )
    return [
        f"Description: {_or(details.description, 'N/A')}",
        f"Video ID: {_or(details.video_id, 'N/A')}",
        f"Creator: {_or(details.creator, 'N/A')}",
        f"Hashtags: {hashtags}",
        f"Likes: {_or(details.likes, '0')}",
        f"Shares: {_or(details.shares, '0')}",
        f"Comments: {_or(details.comments, '0')}",
        f"Views: {_or(details.views, '0')}",
        f"Bookmarks: {_or(details.bookmarks, '0')}",
        f"Created at: {_or(details.created_at, 'N/A')}",
        f"Duration: {_or(details.duration, '0')} seconds",
        f"Available subtitles: {_subtitles(details.available_subtitles)}",
    ]


def format_post_details(details: PostDetails | None) -> str:
    """Labelled block, one ``Label: value`` per line; ``None`` gives the sentinel."""
    if details is None:
        return NO_DETAILS
    return "\n".join(_detail_lines(details))


def format_subtitle(text: str | None) -> str:
    return text or NO_SUBTITLE


def format_search_results(result: SearchResult) -> str:
    if not result.videos:
        return NO_VIDEOS

    blocks = [
        "\n".join([f"Video {i}:", *_detail_lines(video)])
        for i, video in enumerate(result.videos, start=1)
    ]
    meta = result.metadata
    metadata = "\n".join(
        [
            "",
            "Search Metadata:",
            f"Cursor: {_or(meta.cursor, 'N/A')}",
            f"Has more results: {'Yes' if meta.has_more else 'No'}",
            f"Search UID: {_or(meta.search_uid, 'N/A')}",
        ]
    )
    return "\n\n".join(blocks) + metadata
