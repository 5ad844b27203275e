"""Formatting helpers for the history table, detail panel and KPI cards."""

from __future__ import annotations

import math
from datetime import datetime, tzinfo

from dateutil import tz as dateutil_tz

from history_viewer.config import DEFAULT_URL_WIDTH
from history_viewer.provider.models import HistoryItem, OverviewStats

MISSING = "-"


def shorten(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 3] + "..."


def format_timestamp(ts: int | None, zone: tzinfo | None = None) -> str:
    """Epoch seconds as local `YYYY-MM-DD HH:MM:SS`; 0/None show as "-"."""
    if not ts:
        return MISSING
    try:
        return datetime.fromtimestamp(ts, zone or dateutil_tz.tzlocal()).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, OSError, OverflowError):
        return MISSING


def page_info(page: int, total: int, page_size: int) -> str:
    return f"{page} / {max(1, math.ceil(total / page_size))}"


def kpi_rows(stats: OverviewStats | None) -> list[tuple[str, int]]:
    stats = stats or OverviewStats()
    return [
        ("Total visits", stats.total_visits),
        ("Distinct sites", stats.distinct_sites),
        ("Top sites", stats.top_entity_count),
    ]


def history_row(
    item: HistoryItem,
    url_width: int = DEFAULT_URL_WIDTH,
    zone: tzinfo | None = None,
) -> tuple[str, str, str, str]:
    """Cells for one table row: title, shortened url, last visit, visit count."""
    return (
        item.title or "",
        shorten(item.url, url_width),
        format_timestamp(item.last_visited_time, zone),
        str(item.num_visits),
    )
