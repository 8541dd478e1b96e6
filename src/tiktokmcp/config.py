"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Raised when a required setting is missing or malformed."""


def parse_timeout(raw: str) -> float:
    """Read a positive number of seconds; anything else is a :class:`ConfigError`."""
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if not value > 0:
        raise ConfigError(f"REQUEST_TIMEOUT must be positive, got {raw!r}")
    return value


# ── Paths ──────────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent

# ── Backend ────────────────────────────────────────────────────────────────
BACKEND_BASE_URL: str = os.getenv("BACKEND_BASE_URL", "")
BACKEND_API_KEY: str = os.getenv("BACKEND_API_KEY", "")
REQUEST_TIMEOUT: float = parse_timeout(os.getenv("REQUEST_TIMEOUT", "30"))

# ── Tools ──────────────────────────────────────────────────────────────────
ENABLE_SEARCH: str = os.getenv("ENABLE_SEARCH", "")

# ── Analysis / runtime ─────────────────────────────────────────────────────
VOCABULARY_PATH: Path = Path(
    os.getenv("VOCABULARY_PATH", str(PACKAGE_DIR / "vocabulary.yml"))
)
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

_TRUTHY = {"1", "true", "yes"}


def search_enabled(value: str | None = None) -> bool:
    """Return True when the search tool should be exposed.

    Accepts ``1``, ``true`` or ``yes`` in any case; everything else disables it.
    """
    raw = ENABLE_SEARCH if value is None else value
    return raw.strip().lower() in _TRUTHY


def require_backend_url() -> str:
    if not BACKEND_BASE_URL:
        raise ConfigError("BACKEND_BASE_URL environment variable is required")
    return BACKEND_BASE_URL
