"""Engagement ratios derived from a post's public counters."""

from __future__ import annotations

import logging
import math

from tiktokmcp.models import EngagementMetrics, PostDetails, RawCount
from tiktokmcp.parsing import clean_duration, parse_details_block, parse_number

logger = logging.getLogger(__name__)


def _count(value: RawCount) -> int | float:
    # Counters are never negative or infinite; either reads as no data.
    number = parse_number(value)
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    if number < 0:
        return 0
    return number


def engagement_from_counts(
    likes: RawCount,
    shares: RawCount,
    comments: RawCount,
    views: RawCount,
    duration: RawCount = None,
) -> EngagementMetrics:
    """Normalise raw counters and derive engagement, engagement rate and social proof.

    A post with zero (or unknown) views has an engagement rate of 0.
    """
    n_likes = _count(likes)
    n_shares = _count(shares)
    n_comments = _count(comments)
    n_views = _count(views)
    if isinstance(duration, str):
        duration = clean_duration(duration)
    duration_seconds = _count(duration)

    engagement = n_likes + n_shares + n_comments
    engagement_rate = engagement / n_views if n_views > 0 else 0.0

    metrics = EngagementMetrics(
        likes=n_likes,
        shares=n_shares,
        comments=n_comments,
        views=n_views,
        duration_seconds=duration_seconds,
        engagement=engagement,
        engagement_rate=engagement_rate,
        social_proof=n_shares + n_comments,
    )
    logger.debug(
        "Engagement %s over %s views (rate=%.4f)", engagement, n_views, engagement_rate
    )
    return metrics


def metrics_from_details(details: PostDetails) -> EngagementMetrics:
    """Compute metrics from a structured post record."""
    return engagement_from_counts(
        likes=details.likes,
        shares=details.shares,
        comments=details.comments,
        views=details.views,
        duration=details.duration,
    )


def compute_metrics(details_block: str) -> EngagementMetrics:
    """Compute metrics from a labelled post-detail text block.

    Text without the expected labels yields all-zero metrics.
    """
    return metrics_from_details(parse_details_block(details_block))
