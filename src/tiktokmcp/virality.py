"""Virality assessment: merge engagement metrics and narrative signals into a report."""

from __future__ import annotations

import logging

from tiktokmcp.metrics import metrics_from_details
from tiktokmcp.models import EngagementMetrics, PostDetails, TextSignals, ViralityReport
from tiktokmcp.parsing import parse_details_block
from tiktokmcp.signals import analyze_signals

logger = logging.getLogger(__name__)

# ── Thresholds ─────────────────────────────────────────────────────────────
MIN_HASHTAGS = 3
LOW_ENGAGEMENT_RATE = 0.05

# ── Recommendation copy ────────────────────────────────────────────────────
REC_HOOK = "Add a strong first-3-second hook (e.g., a bold claim or curiosity gap)."
REC_CTA = "Add a lightweight CTA (comment a keyword, follow for part 2, save for later)."
REC_STRUCTURE = (
    "Improve structure with explicit steps or narrative beats to boost retention."
)
REC_HASHTAGS = "Add 3–5 relevant, non-spammy hashtags to aid discovery."
REC_LOW_RATE = (
    "Engagement rate is low; test alternative opening frames/captions and tighter pacing."
)


def format_count(value: int | float) -> str:
    """Render a count with ``,`` thousands separators, independent of locale.

    Whole numbers print without a decimal part; fractions keep up to three digits.
    """
    if isinstance(value, float) and not value.is_integer():
        return f"{value:,.3f}".rstrip("0").rstrip(".")
    return f"{int(value):,}"


def format_plain(value: int | float) -> str:
    """Render a number without grouping; whole floats drop the ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def recommend(metrics: EngagementMetrics, signals: TextSignals) -> list[str]:
    """Each rule fires independently; a rule that does not fire adds nothing."""
    recs: list[str] = []
    if not signals.hook_hits:
        recs.append(REC_HOOK)
    if not signals.cta_hits:
        recs.append(REC_CTA)
    if not signals.retention_hits:
        recs.append(REC_STRUCTURE)
    if signals.hashtag_count < MIN_HASHTAGS:
        recs.append(REC_HASHTAGS)
    if metrics.engagement_rate < LOW_ENGAGEMENT_RATE and metrics.views > 0:
        recs.append(REC_LOW_RATE)
    return recs


def build_report(metrics: EngagementMetrics, signals: TextSignals) -> ViralityReport:
    return ViralityReport(
        metrics=metrics,
        signals=signals,
        recommendations=recommend(metrics, signals),
    )


def analyze_post(details: PostDetails | None, subtitle: str | None) -> ViralityReport:
    """Assess a structured post record plus its transcript.

    ``None`` for either input (a failed fetch) is treated as empty data.
    """
    details = details or PostDetails()
    metrics = metrics_from_details(details)
    signals = analyze_signals((details.description or "").strip(), subtitle or "")
    return build_report(metrics, signals)


def _joined(hits: tuple[str, ...]) -> str:
    return ", ".join(hits) if hits else "none"


def render_report(report: ViralityReport) -> str:
    m = report.metrics
    s = report.signals

    lines: list[str] = ["Virality Analysis", ""]
    lines.append(
        f"Engagement: {format_count(m.engagement)} "
        f"(likes {format_count(m.likes)}, shares {format_count(m.shares)}, "
        f"comments {format_count(m.comments)})"
    )
    lines.append(
        f"Views: {format_count(m.views)} | "
        f"Engagement rate: {m.engagement_rate * 100:.2f}%"
    )
    if m.duration_seconds:
        lines.append(f"Duration: {format_plain(m.duration_seconds)} sec")

    lines += ["", "Narrative Signals"]
    lines.append(f"- Hooks detected: {_joined(s.hook_hits)}")
    lines.append(f"- CTAs detected: {_joined(s.cta_hits)}")
    lines.append(f"- Structural cues: {_joined(s.retention_hits)}")
    lines.append(f"- Hashtag count in description: {s.hashtag_count}")

    lines += ["", "Recommendations"]
    lines.extend(f"- {rec}" for rec in report.recommendations)
    return "\n".join(lines)


def compose_report(details_text: str, subtitle_text: str | None) -> str:
    """Analyse a labelled post-detail block and transcript; return the rendered report."""
    report = analyze_post(parse_details_block(details_text), subtitle_text)
    logger.debug("Composed report with %d recommendations", len(report.recommendations))
    return render_report(report)
