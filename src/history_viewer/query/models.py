"""Data models for the history list query."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date

from history_viewer.config import DEFAULT_PAGE_SIZE, DEFAULT_TIME_RANGE
from history_viewer.provider.models import HistoryItem

TITLE = "title"
URL = "url"
LAST_VISITED_TIME = "last_visited_time"
NUM_VISITS = "num_visits"

SORT_COLUMNS = (TITLE, URL, LAST_VISITED_TIME, NUM_VISITS)

ASC = "asc"
DESC = "desc"


def default_sort_order(column: str) -> str:
    """Alphabetic columns start ascending, activity columns descending."""
    return ASC if column == TITLE else DESC


class Refetch(enum.Flag):
    """Which fetches a mutation requires."""

    NONE = 0
    LIST = enum.auto()
    STATS = enum.auto()


class Phase(str, enum.Enum):
    IDLE = "idle"
    DIRTY = "dirty"
    FETCHING = "fetching"


@dataclass
class ListQueryState:
    """Paging, sorting and filtering state for one session."""

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0
    keyword: str | None = None
    locale: str | None = None
    time_range: str = DEFAULT_TIME_RANGE
    start_date: date | None = None
    end_date: date | None = None
    sort_by: str = LAST_VISITED_TIME
    sort_order: str = DESC
    items: tuple[HistoryItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FilterDescriptor:
    """Provider-facing filter for a list query.

    `keyword` and `locale` are always sent, with None meaning "no filter".
    `time_range` is dropped from the payload when there is no time filter.
    """

    keyword: str | None
    locale: str | None
    sort_by: str
    sort_order: str
    time_range: str | None = None

    def to_dict(self) -> dict:
        payload: dict = {
            "keyword": self.keyword,
            "locale": self.locale,
            "sort_by": self.sort_by,
            "sort_order": self.sort_order,
        }
        if self.time_range is not None:
            payload["time_range"] = self.time_range
        return payload


@dataclass(frozen=True)
class QuerySignature:
    """Everything that determines which list page a fetch returns."""

    page: int
    page_size: int
    filters: FilterDescriptor


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one fetch as seen by the caller."""

    applied: bool
    stale: bool = False
    error: str | None = None
    refetch: Refetch = Refetch.NONE

    @property
    def ok(self) -> bool:
        return self.error is None
