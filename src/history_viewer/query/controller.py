"""Query state for the history table: filters, sorting, paging and fetches."""

from __future__ import annotations

import logging
import math
from datetime import date, tzinfo

from history_viewer.config import ViewerSettings, load_settings
from history_viewer.exceptions import InvalidSortColumnError
from history_viewer.provider.base import BaseHistoryProvider
from history_viewer.provider.models import HistoryItem, OverviewStats
from history_viewer.query import timerange
from history_viewer.query.models import (
    ASC,
    DESC,
    SORT_COLUMNS,
    FetchOutcome,
    FilterDescriptor,
    ListQueryState,
    Phase,
    QuerySignature,
    Refetch,
    default_sort_order,
)

logger = logging.getLogger(__name__)


def _normalize_text(text: str | None) -> str | None:
    """Trim; blank input means "no filter", never an empty-string filter."""
    if text is None:
        return None
    text = text.strip()
    return text or None


class QueryController:
    """Owns `ListQueryState` and turns user actions into provider queries.

    Mutating methods return a `Refetch` flag naming the fetches the caller
    should issue next. `fetch_list` and `fetch_stats` record the signature of
    the state that produced the request and drop the response if the state
    moved on while the request was outstanding.

    Args:
        settings: Session settings; defaults to `load_settings()`.
        zone: Time zone for custom date ranges; defaults to the local zone.
    """

    def __init__(self, settings: ViewerSettings | None = None, zone: tzinfo | None = None):
        settings = settings or load_settings()
        self.state = ListQueryState(page_size=settings.page_size, time_range=settings.time_range)
        self.stats: OverviewStats | None = None
        self.last_error: str | None = None
        self.stats_error: str | None = None
        self._zone = zone
        # Nothing has been fetched yet.
        self._list_dirty = True
        self._stats_dirty = True
        self._list_in_flight = 0
        self._stats_in_flight = 0

    # ---- Derived state ----

    @property
    def items(self) -> tuple[HistoryItem, ...]:
        return self.state.items

    @property
    def phase(self) -> Phase:
        if self._list_dirty or self._stats_dirty:
            return Phase.DIRTY
        if self._list_in_flight or self._stats_in_flight:
            return Phase.FETCHING
        return Phase.IDLE

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self.state.total / self.state.page_size))

    @property
    def has_prev_page(self) -> bool:
        return self.state.page > 1

    @property
    def has_next_page(self) -> bool:
        return self.state.page * self.state.page_size < self.state.total

    def resolve_time_range(self) -> timerange.TimeRangeDescriptor:
        s = self.state
        return timerange.resolve(s.time_range, s.start_date, s.end_date, zone=self._zone)

    def build_filter_descriptor(self) -> FilterDescriptor:
        s = self.state
        return FilterDescriptor(
            keyword=s.keyword,
            locale=s.locale,
            sort_by=s.sort_by,
            sort_order=s.sort_order,
            time_range=self.resolve_time_range().token,
        )

    def signature(self) -> QuerySignature:
        return QuerySignature(
            page=self.state.page,
            page_size=self.state.page_size,
            filters=self.build_filter_descriptor(),
        )

    # ---- Mutations ----

    def set_keyword(self, text: str | None) -> Refetch:
        self.state.keyword = _normalize_text(text)
        return self._reset_page(Refetch.LIST)

    def apply_filters(
        self,
        time_range: str,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        locale: str | None = None,
    ) -> Refetch:
        """Apply the filter panel. Raises InvalidTimeRangeError, leaving state as it was."""
        time_range = (time_range or "").strip()
        start = timerange.parse_date(start_date)
        end = timerange.parse_date(end_date)
        timerange.check_time_range(time_range, start, end)

        s = self.state
        s.time_range = time_range
        s.start_date = start
        s.end_date = end
        s.locale = _normalize_text(locale)
        return self._reset_page(Refetch.LIST | Refetch.STATS)

    def set_sort(self, column: str) -> Refetch:
        if column not in SORT_COLUMNS:
            raise InvalidSortColumnError(f"Cannot sort by {column!r}")
        s = self.state
        if column == s.sort_by:
            s.sort_order = ASC if s.sort_order == DESC else DESC
        else:
            s.sort_by = column
            s.sort_order = default_sort_order(column)
        return self._reset_page(Refetch.LIST)

    def next_page(self) -> Refetch:
        if not self.has_next_page:
            return Refetch.NONE
        self.state.page += 1
        self._list_dirty = True
        return Refetch.LIST

    def prev_page(self) -> Refetch:
        if not self.has_prev_page:
            return Refetch.NONE
        self.state.page -= 1
        self._list_dirty = True
        return Refetch.LIST

    def _reset_page(self, refetch: Refetch) -> Refetch:
        self.state.page = 1
        if Refetch.LIST in refetch:
            self._list_dirty = True
        if Refetch.STATS in refetch:
            self._stats_dirty = True
        logger.debug("Query state changed: %s", self.state)
        return refetch

    # ---- Fetches ----

    async def fetch_list(self, provider: BaseHistoryProvider) -> FetchOutcome:
        """Fetch the page for the current state and apply it unless superseded."""
        self.state.page = max(1, self.state.page)
        request = self.signature()
        self._list_dirty = False
        self._list_in_flight += 1
        try:
            result = await provider.alist_history(
                request.page, request.page_size, request.filters.to_dict()
            )
        except Exception as e:
            if request != self.signature():
                logger.debug("Dropping failed stale list response for page %d", request.page)
                return FetchOutcome(applied=False, stale=True)
            logger.warning("History page fetch failed: %s", e)
            self.last_error = str(e)
            return FetchOutcome(applied=False, error=str(e))
        finally:
            self._list_in_flight -= 1

        if request != self.signature():
            logger.debug("Dropping stale list response for page %d", request.page)
            return FetchOutcome(applied=False, stale=True)

        self.state.items = result.items
        self.state.total = result.total
        self.last_error = None

        if self.state.page > self.page_count:
            logger.debug("Page %d past the end, clamping to %d", self.state.page, self.page_count)
            self.state.page = self.page_count
            self._list_dirty = True
            return FetchOutcome(applied=True, refetch=Refetch.LIST)
        return FetchOutcome(applied=True)

    async def fetch_stats(self, provider: BaseHistoryProvider) -> FetchOutcome:
        """Fetch aggregate stats for the current time range."""
        descriptor = self.resolve_time_range()
        self._stats_dirty = False
        self._stats_in_flight += 1
        try:
            stats = await provider.astats_overview(descriptor.token)
        except Exception as e:
            if descriptor != self.resolve_time_range():
                return FetchOutcome(applied=False, stale=True)
            logger.warning("Stats fetch failed: %s", e)
            self.stats_error = str(e)
            return FetchOutcome(applied=False, error=str(e))
        finally:
            self._stats_in_flight -= 1

        if descriptor != self.resolve_time_range():
            logger.debug("Dropping stale stats response for %s", descriptor.token)
            return FetchOutcome(applied=False, stale=True)

        self.stats = stats
        self.stats_error = None
        return FetchOutcome(applied=True)

    async def refresh(self, provider: BaseHistoryProvider, refetch: Refetch) -> dict[Refetch, FetchOutcome]:
        """Issue the fetches named by `refetch`, stats first."""
        outcomes: dict[Refetch, FetchOutcome] = {}
        if Refetch.STATS in refetch:
            outcomes[Refetch.STATS] = await self.fetch_stats(provider)
        if Refetch.LIST in refetch:
            outcomes[Refetch.LIST] = await self.fetch_list(provider)
        return outcomes
