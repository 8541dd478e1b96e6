"""Narrative signal detection: hooks, calls-to-action, structural cues and hashtags."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, NamedTuple

import yaml

from tiktokmcp import config
from tiktokmcp.models import TextSignals

logger = logging.getLogger(__name__)

_HASHTAG_RE = re.compile(r"#\w+")


class Vocabulary(NamedTuple):
    hooks: tuple[str, ...]
    ctas: tuple[str, ...]
    retention: tuple[str, ...]


def _phrases(cfg: dict[str, Any], key: str) -> tuple[str, ...]:
    raw = cfg.get(key) or []
    return tuple(str(p).strip().lower() for p in raw if str(p).strip())


def load_vocabulary(path: Path) -> Vocabulary:
    """Read the ``hooks`` / ``ctas`` / ``retention`` phrase lists from a YAML file."""
    with open(path, encoding="utf-8") as fh:
        cfg: dict[str, Any] = yaml.safe_load(fh) or {}

    vocab = Vocabulary(
        hooks=_phrases(cfg, "hooks"),
        ctas=_phrases(cfg, "ctas"),
        retention=_phrases(cfg, "retention"),
    )
    logger.debug(
        "Loaded vocabulary from %s: %d hooks, %d CTAs, %d retention cues",
        path,
        len(vocab.hooks),
        len(vocab.ctas),
        len(vocab.retention),
    )
    return vocab


# Loaded once per process; tuples so nothing downstream can mutate them.
VOCABULARY: Vocabulary = load_vocabulary(config.VOCABULARY_PATH)


def count_hashtags(description: str) -> int:
    return len(_HASHTAG_RE.findall(description))


def _hits(text: str, phrases: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(p for p in phrases if p in text)


def analyze_signals(
    description: str,
    subtitle: str,
    vocabulary: Vocabulary = VOCABULARY,
) -> TextSignals:
    """Scan description + transcript for vocabulary phrases.

    Matching is plain substring containment on the lower-cased text, so
    ``"tip"`` also matches ``"tips"`` and ``"multiplier"``. Hits are reported in
    vocabulary order. Hashtags are counted in the description alone, case
    preserved.
    """
    text = f"{description}\n{subtitle or ''}".lower()
    return TextSignals(
        hashtag_count=count_hashtags(description),
        hook_hits=_hits(text, vocabulary.hooks),
        cta_hits=_hits(text, vocabulary.ctas),
        retention_hits=_hits(text, vocabulary.retention),
    )
