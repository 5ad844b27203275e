"""Parse raw provider payloads into typed records."""

from __future__ import annotations

from history_viewer.exceptions import MalformedResponseError
from history_viewer.provider.models import (
    DEFAULT_TOP_SITES,
    HistoryItem,
    OverviewStats,
    ResultPage,
    SourceConfig,
)


def parse_item(raw: dict) -> HistoryItem:
    """Normalize one history row. `url` is required, the rest is lenient."""
    if not isinstance(raw, dict):
        raise MalformedResponseError(f"History item must be an object, got {type(raw).__name__}")

    url = raw.get("url")
    if not isinstance(url, str) or not url:
        raise MalformedResponseError("History item is missing 'url'")

    title = raw.get("title")
    if title is not None and not isinstance(title, str):
        title = str(title)

    return HistoryItem(
        url=url,
        title=title,
        last_visited_time=_as_int(raw.get("last_visited_time"), "last_visited_time", default=0),
        num_visits=_as_int(raw.get("num_visits"), "num_visits", default=1),
    )


def parse_page(raw: dict) -> ResultPage:
    """Parse a `list_history` response."""
    if not isinstance(raw, dict):
        raise MalformedResponseError("History page must be an object")
    items = raw.get("items")
    if not isinstance(items, list):
        raise MalformedResponseError("History page is missing 'items'")
    total = _as_int(raw.get("total"), "total")
    if total < 0:
        raise MalformedResponseError(f"Negative total: {total}")
    return ResultPage(items=tuple(parse_item(i) for i in items), total=total)


def parse_stats(raw: dict) -> OverviewStats:
    """Parse a `stats_overview` response. Blank site names are dropped."""
    if not isinstance(raw, dict):
        raise MalformedResponseError("Stats must be an object")
    entities = raw.get("top_entities") or []
    if not isinstance(entities, list):
        raise MalformedResponseError("'top_entities' must be a list")
    return OverviewStats(
        total_visits=_as_int(raw.get("total_visits"), "total_visits", default=0),
        distinct_sites=_as_int(raw.get("distinct_sites"), "distinct_sites", default=0),
        top_entities=tuple(str(e) for e in entities if e),
    )


def parse_config(raw: dict) -> SourceConfig:
    """Parse a `get_config` response; unknown keys are ignored."""
    if not isinstance(raw, dict):
        raise MalformedResponseError("Config must be an object")
    return SourceConfig(
        db_path=_optional_path(raw.get("db_path")),
        browser_db_path=_optional_path(raw.get("browser_db_path")),
        top_sites_count=_as_int(raw.get("top_sites_count"), "top_sites_count", default=DEFAULT_TOP_SITES),
    )


def _optional_path(value) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponseError(f"Path must be a string, got {type(value).__name__}")
    value = value.strip()
    return value or None


def _as_int(value, name: str, default: int | None = None) -> int:
    if value is None:
        if default is None:
            raise MalformedResponseError(f"Missing '{name}'")
        return default
    # bool is an int subclass, but never a valid count
    if isinstance(value, bool):
        raise MalformedResponseError(f"'{name}' must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponseError(f"'{name}' must be an integer, got {value!r}") from e
