"""Environment-driven settings for the viewer."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 500
DEFAULT_TIME_RANGE = "7d"
DEFAULT_URL_WIDTH = 48

TIME_RANGES = ("all", "7d", "30d", "90d", "custom")


@dataclass(frozen=True)
class ViewerSettings:
    """Session-wide settings read once at startup."""

    page_size: int = DEFAULT_PAGE_SIZE
    time_range: str = DEFAULT_TIME_RANGE
    url_width: int = DEFAULT_URL_WIDTH


def _int_from_env(name: str, default: int, low: int, high: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if not low <= value <= high:
        logger.warning("Ignoring %s=%d: expected %d..%d", name, value, low, high)
        return default
    return value


def load_settings() -> ViewerSettings:
    """Build settings from HISTORY_VIEWER_* environment variables."""
    time_range = os.environ.get("HISTORY_VIEWER_TIME_RANGE", DEFAULT_TIME_RANGE).strip()
    # Custom ranges need dates, which the environment cannot supply.
    if time_range not in TIME_RANGES or time_range == "custom":
        logger.warning("Ignoring HISTORY_VIEWER_TIME_RANGE=%r", time_range)
        time_range = DEFAULT_TIME_RANGE

    return ViewerSettings(
        page_size=_int_from_env("HISTORY_VIEWER_PAGE_SIZE", DEFAULT_PAGE_SIZE, 1, MAX_PAGE_SIZE),
        time_range=time_range,
        url_width=_int_from_env("HISTORY_VIEWER_URL_WIDTH", DEFAULT_URL_WIDTH, 4, 1000),
    )
