"""Abstract base class for the history/configuration provider."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable

from history_viewer.exceptions import HistoryViewerError, MalformedResponseError, ProviderError
from history_viewer.provider.models import OverviewStats, ResultPage, SourceConfig
from history_viewer.provider.parser import parse_config, parse_page, parse_stats

logger = logging.getLogger(__name__)


class BaseHistoryProvider(ABC):
    """Abstract interface to the backend that owns history data and config.

    Subclasses implement the blocking calls and return raw payloads. The
    controllers use the `a`-prefixed coroutines, which run the blocking call
    in a worker thread, parse the payload, and wrap any failure in
    `ProviderError`.
    """

    @abstractmethod
    def stats_overview(self, time_range: str | None) -> dict:
        """Aggregate counts; `time_range=None` means no time filter."""
        ...

    @abstractmethod
    def list_history(self, page: int, page_size: int, filters: dict) -> dict:
        """One page of history rows plus the total for `filters`."""
        ...

    @abstractmethod
    def get_config(self) -> dict:
        """Current data-source configuration."""
        ...

    @abstractmethod
    def set_db_path(self, path: str) -> str:
        """Point the provider at a new primary database."""
        ...

    @abstractmethod
    def set_browser_db_path(self, path: str) -> str:
        """Remember the external browser database location."""
        ...

    @abstractmethod
    def set_top_sites_count(self, count: int) -> str:
        """Set how many top sites the stats query reports."""
        ...

    @abstractmethod
    def validate_db_path(self, path: str) -> bool:
        """Whether `path` is a readable history database."""
        ...

    @abstractmethod
    def import_source(self, source_path: str) -> str:
        """Copy an external database into managed storage; returns the new path."""
        ...

    @abstractmethod
    def open_db_directory(self) -> str:
        """Reveal the directory holding the primary database."""
        ...

    @abstractmethod
    def cleanup_old_dbs(self) -> str:
        """Delete managed databases other than the current one."""
        ...

    # ---- Async wrappers (asyncio.to_thread) ----

    async def astats_overview(self, time_range: str | None) -> OverviewStats:
        raw = await self._call("fetch stats", self.stats_overview, time_range)
        return parse_stats(raw)

    async def alist_history(self, page: int, page_size: int, filters: dict) -> ResultPage:
        raw = await self._call("fetch history page", self.list_history, page, page_size, filters)
        return parse_page(raw)

    async def aget_config(self) -> SourceConfig:
        raw = await self._call("load config", self.get_config)
        return parse_config(raw)

    async def aset_db_path(self, path: str) -> str:
        return str(await self._call("set database path", self.set_db_path, path))

    async def aset_browser_db_path(self, path: str) -> str:
        return str(await self._call("set browser database path", self.set_browser_db_path, path))

    async def aset_top_sites_count(self, count: int) -> str:
        return str(await self._call("set top sites count", self.set_top_sites_count, count))

    async def avalidate_db_path(self, path: str) -> bool:
        result = await self._call("validate database path", self.validate_db_path, path)
        if not isinstance(result, bool):
            raise MalformedResponseError(f"Validation returned {result!r}, expected a boolean")
        return result

    async def aimport_source(self, source_path: str) -> str:
        managed = await self._call("import source", self.import_source, source_path)
        if not isinstance(managed, str) or not managed.strip():
            raise MalformedResponseError("Import did not return a managed path")
        return managed.strip()

    async def aopen_db_directory(self) -> str:
        return str(await self._call("open database directory", self.open_db_directory))

    async def acleanup_old_dbs(self) -> str:
        return str(await self._call("clean up old databases", self.cleanup_old_dbs))

    @staticmethod
    async def _call(action: str, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except HistoryViewerError:
            raise
        except Exception as e:
            logger.warning("Provider call failed (%s): %s", action, e)
            raise ProviderError(f"Failed to {action}: {e}") from e
