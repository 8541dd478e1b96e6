"""Number normalisation and label-based field extraction for post-detail text blocks.

The analysis core works on structured :class:`PostDetails` records. Saved
tool output carries the same data as a labelled text block;
:func:`parse_details_block` lifts such a block back into a record before
it is analysed.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from tiktokmcp.models import PostDetails

logger = logging.getLogger(__name__)

_STRIP_NUMBER_RE = re.compile(r"[,\s]")
_NON_DURATION_RE = re.compile(r"[^0-9.]")

# Labels in the order the details block renders them.
DETAIL_LABELS: tuple[str, ...] = (
    "Description",
    "Video ID",
    "Creator",
    "Hashtags",
    "Likes",
    "Shares",
    "Comments",
    "Views",
    "Bookmarks",
    "Created at",
    "Duration",
    "Available subtitles",
)

_DESCRIPTION_RE = re.compile(r"Description:\s*(.*?)\n\s*Video ID:", re.DOTALL)
_DESCRIPTION_FALLBACK_RE = re.compile(
    r"Description:\s*(.*?)(?=\n\s*(?:"
    + "|".join(re.escape(label) for label in DETAIL_LABELS[1:])
    + r"):|\Z)",
    re.DOTALL,
)


def parse_number(value: Any) -> int | float:
    """Turn a display count such as ``"12,345"`` into a number.

    Numbers pass through untouched. Anything that cannot be read as a finite
    number (``None``, ``""``, ``"N/A"``, booleans, ...) becomes 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return 0

    cleaned = _STRIP_NUMBER_RE.sub("", value)
    # int()/float() accept "1_000"; display counts never use underscores.
    if not cleaned or "_" in cleaned:
        return 0
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        number = float(cleaned)
    except ValueError:
        return 0
    return number if math.isfinite(number) else 0


def extract_field(block: str, label: str) -> str:
    """Return the trimmed rest of the line following ``<label>:``, or ``""``."""
    match = re.search(rf"{re.escape(label)}:\s*(.*)", block)
    return match.group(1).strip() if match else ""


def clean_duration(text: str) -> str:
    """Reduce a duration to digits and decimal points (``"12 seconds"`` -> ``"12"``)."""
    return _NON_DURATION_RE.sub("", text)


def extract_duration(block: str) -> str:
    return clean_duration(extract_field(block, "Duration"))


def extract_description(block: str) -> str:
    """Return the (possibly multi-line) description.

    The description runs up to the ``Video ID:`` label. When that label is
    missing it runs up to the next known label, or to the end of the block.
    """
    match = _DESCRIPTION_RE.search(block)
    if match is None:
        match = _DESCRIPTION_FALLBACK_RE.search(block)
    return match.group(1).strip() if match else ""


def parse_details_block(block: str) -> PostDetails:
    """Lift a labelled post-detail text block into a :class:`PostDetails` record.

    Missing labels leave the corresponding field empty; nothing here raises.
    """
    hashtags = extract_field(block, "Hashtags")
    if hashtags == "N/A":
        hashtags = ""
    details = PostDetails(
        description=extract_description(block),
        video_id=extract_field(block, "Video ID"),
        creator=extract_field(block, "Creator"),
        hashtags=[tag.strip() for tag in hashtags.split(",") if tag.strip()],
        likes=extract_field(block, "Likes"),
        shares=extract_field(block, "Shares"),
        comments=extract_field(block, "Comments"),
        views=extract_field(block, "Views"),
        bookmarks=extract_field(block, "Bookmarks"),
        created_at=extract_field(block, "Created at"),
        duration=extract_duration(block),
    )
    logger.debug("Parsed details block for video %r", details.video_id)
    return details
