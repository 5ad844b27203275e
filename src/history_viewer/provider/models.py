"""Data models for provider responses."""

from __future__ import annotations

from dataclasses import dataclass

MIN_TOP_SITES = 1
MAX_TOP_SITES = 50
DEFAULT_TOP_SITES = 6


@dataclass(frozen=True)
class HistoryItem:
    """One row of the history table."""

    url: str
    title: str | None
    last_visited_time: int  # epoch seconds
    num_visits: int = 1


@dataclass(frozen=True)
class ResultPage:
    """One page of list results plus the total for the current filter."""

    items: tuple[HistoryItem, ...] = ()
    total: int = 0


@dataclass(frozen=True)
class OverviewStats:
    """Aggregate counts for the selected time range."""

    total_visits: int = 0
    distinct_sites: int = 0
    top_entities: tuple[str, ...] = ()

    @property
    def top_entity_count(self) -> int:
        return len(self.top_entities)


@dataclass(frozen=True)
class SourceConfig:
    """Data-source configuration as held by the provider."""

    db_path: str | None = None
    browser_db_path: str | None = None
    top_sites_count: int = DEFAULT_TOP_SITES
