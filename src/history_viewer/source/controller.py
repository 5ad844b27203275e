"""Data-source lifecycle: select, validate, apply, import and clean up."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Awaitable, Callable, Iterator

from history_viewer.exceptions import InvalidTopSitesCountError, OperationInProgressError
from history_viewer.host.shell import BaseHostShell, FileKind
from history_viewer.provider.base import BaseHistoryProvider
from history_viewer.provider.models import MAX_TOP_SITES, MIN_TOP_SITES, SourceConfig
from history_viewer.source.models import (
    FieldStatus,
    OperationResult,
    SyncStep,
    ValidationStatus,
)

logger = logging.getLogger(__name__)

CLEANUP_PROMPT = (
    "Delete every managed history database except the one currently in use? "
    "This cannot be undone."
)


def parse_top_sites_count(candidate: int | str | None) -> int:
    """Validate a top sites count from a spinner or text field."""
    if isinstance(candidate, bool):
        raise InvalidTopSitesCountError("Top sites count must be a number")
    if isinstance(candidate, int):
        value = candidate
    else:
        text = str(candidate or "").strip()
        if not text.lstrip("+-").isdecimal():
            raise InvalidTopSitesCountError(f"Top sites count must be a number, got {text!r}")
        try:
            value = int(text)
        except ValueError as e:
            raise InvalidTopSitesCountError(f"Top sites count must be a number, got {text!r}") from e
    if not MIN_TOP_SITES <= value <= MAX_TOP_SITES:
        raise InvalidTopSitesCountError(
            f"Top sites count must be between {MIN_TOP_SITES} and {MAX_TOP_SITES}, got {value}"
        )
    return value


class SourceLifecycleController:
    """Settings-screen logic for the database the provider reads from.

    Every public coroutine returns an `OperationResult` and never raises;
    provider faults become an `error` status carrying the raw message. The
    local `config` is a cache that is re-read after each successful change.

    Args:
        provider: The history/configuration provider.
        shell: Host collaborator for file pickers and confirmations.
    """

    def __init__(self, provider: BaseHistoryProvider, shell: BaseHostShell):
        self._provider = provider
        self._shell = shell
        self._busy: set[str] = set()
        self.config: SourceConfig | None = None
        self.primary_input = ""
        self.secondary_input = ""
        self.primary_status = FieldStatus()
        self.secondary_status = FieldStatus()

    # ---- Button state ----

    def is_busy(self, operation: str) -> bool:
        return operation in self._busy

    @property
    def can_validate_primary(self) -> bool:
        return bool(self.primary_input.strip()) and not self.is_busy("validate")

    @property
    def can_apply_primary(self) -> bool:
        return bool(self.primary_input.strip()) and not self.is_busy("apply")

    @property
    def can_sync(self) -> bool:
        return bool(self.secondary_input.strip()) and not self.is_busy("sync")

    @property
    def can_cleanup(self) -> bool:
        return self._configured_path() is not None and not self.is_busy("cleanup")

    def can_apply_top_sites_count(self, candidate: int | str | None) -> bool:
        """False for invalid input and for the value already applied."""
        try:
            value = parse_top_sites_count(candidate)
        except InvalidTopSitesCountError:
            return False
        if self.is_busy("top_sites"):
            return False
        return self.config is None or value != self.config.top_sites_count

    def set_primary_input(self, text: str) -> None:
        self.primary_input = text or ""

    def set_secondary_input(self, text: str) -> None:
        self.secondary_input = text or ""

    # ---- Operations ----

    async def load_config(self) -> OperationResult:
        try:
            config = await self._provider.aget_config()
        except Exception as e:
            logger.warning("Failed to load config: %s", e)
            self.primary_status = FieldStatus(ValidationStatus.ERROR, f"Failed to load config: {e}")
            return OperationResult(ValidationStatus.ERROR, str(e))

        self._adopt(config)
        if config.db_path:
            self.primary_status = FieldStatus(ValidationStatus.OK, "Database path configured")
        else:
            self.primary_status = FieldStatus(ValidationStatus.WARNING, "Database path not configured")
        return OperationResult(self.primary_status.status, self.primary_status.message)

    async def browse_primary(self) -> OperationResult:
        try:
            path = await asyncio.to_thread(self._shell.browse_file, FileKind.PRIMARY)
        except Exception as e:
            logger.warning("File selection failed: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"File selection failed: {e}")
        if not path:
            return OperationResult.skipped("Selection cancelled")
        self.primary_input = path
        self.primary_status = FieldStatus(ValidationStatus.WARNING, "Path selected, validate and apply it")
        return OperationResult(ValidationStatus.WARNING, self.primary_status.message)

    async def browse_secondary(self) -> OperationResult:
        try:
            path = await asyncio.to_thread(self._shell.browse_file, FileKind.SECONDARY)
        except Exception as e:
            logger.warning("File selection failed: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"File selection failed: {e}")
        if not path:
            return OperationResult.skipped("Selection cancelled")
        self.secondary_input = path
        self.secondary_status = FieldStatus(ValidationStatus.WARNING, "Browser database selected, sync it to use it")
        return OperationResult(ValidationStatus.WARNING, self.secondary_status.message)

    async def validate_primary(self, path: str | None = None) -> OperationResult:
        path = self._pick(path, self.primary_input)
        if not path:
            return OperationResult.rejected("No database path to validate")
        return await self._run("validate", lambda: self._validate(path))

    async def apply_primary(self, path: str | None = None) -> OperationResult:
        path = self._pick(path, self.primary_input)
        if not path:
            return OperationResult.rejected("No database path to apply")
        return await self._run("apply", lambda: self._commit_primary(path))

    async def apply_secondary(self, path: str | None = None) -> OperationResult:
        path = self._pick(path, self.secondary_input)
        if not path:
            return OperationResult.rejected("No browser database path to save")
        return await self._run("secondary", lambda: self._commit_secondary(path))

    async def sync_secondary_into_primary(self, source_path: str | None = None) -> OperationResult:
        """Import the external database, then make the managed copy primary.

        Stops at the first failing step. The primary path is left as it was
        unless the provider accepted the managed copy.
        """
        source_path = self._pick(source_path, self.secondary_input)
        if not source_path:
            return OperationResult.rejected("No browser database to sync")
        return await self._run("sync", lambda: self._sync(source_path))

    async def apply_top_sites_count(self, candidate: int | str | None) -> OperationResult:
        try:
            count = parse_top_sites_count(candidate)
        except InvalidTopSitesCountError as e:
            return OperationResult.rejected(str(e))
        if self.config is not None and count == self.config.top_sites_count:
            return OperationResult.skipped(f"Top sites count is already {count}", ValidationStatus.OK)
        return await self._run("top_sites", lambda: self._commit_top_sites(count))

    async def open_source_directory(self) -> OperationResult:
        try:
            message = await self._provider.aopen_db_directory()
        except Exception as e:
            logger.warning("Failed to open database directory: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"Failed to open directory: {e}")
        return OperationResult(ValidationStatus.OK, message)

    async def cleanup_stale_sources(self) -> OperationResult:
        """Delete stale managed databases after the user confirms."""
        if self._configured_path() is None:
            return OperationResult.rejected("No database path configured, nothing to clean up")
        return await self._run("cleanup", self._cleanup)

    # ---- Steps ----

    async def _validate(self, path: str) -> OperationResult:
        try:
            valid = await self._provider.avalidate_db_path(path)
        except Exception as e:
            logger.warning("Validation of %s failed: %s", path, e)
            self.primary_status = FieldStatus(ValidationStatus.ERROR, f"Validation failed: {e}")
            return OperationResult(ValidationStatus.ERROR, f"Validation failed: {e}")

        if valid:
            self.primary_status = FieldStatus(ValidationStatus.OK, "Database path is valid")
        else:
            self.primary_status = FieldStatus(ValidationStatus.ERROR, "Database path is invalid")
        return OperationResult(self.primary_status.status, self.primary_status.message)

    async def _commit_primary(self, path: str) -> OperationResult:
        try:
            message = await self._provider.aset_db_path(path)
        except Exception as e:
            logger.warning("Failed to apply database path %s: %s", path, e)
            self.primary_status = FieldStatus(ValidationStatus.ERROR, f"Failed to apply: {e}")
            return OperationResult(ValidationStatus.ERROR, f"Failed to apply: {e}")

        # The provider holds the new path from here on.
        self.primary_input = path
        try:
            config = await self._provider.aget_config()
        except Exception as e:
            logger.warning("Applied %s but reloading config failed: %s", path, e)
            self.primary_status = FieldStatus(
                ValidationStatus.WARNING, f"Applied, but reloading config failed: {e}"
            )
            return OperationResult(ValidationStatus.WARNING, self.primary_status.message)

        self._adopt(config)
        self.primary_status = FieldStatus(ValidationStatus.OK, "Database configured")
        logger.info("Primary database set to %s", config.db_path)
        return OperationResult(ValidationStatus.OK, message)

    async def _commit_secondary(self, path: str) -> OperationResult:
        try:
            message = await self._provider.aset_browser_db_path(path)
            config = await self._provider.aget_config()
        except Exception as e:
            logger.warning("Failed to save browser database path %s: %s", path, e)
            self.secondary_status = FieldStatus(ValidationStatus.ERROR, f"Failed to save: {e}")
            return OperationResult(ValidationStatus.ERROR, f"Failed to save: {e}")

        self._adopt(config)
        self.secondary_status = FieldStatus(ValidationStatus.OK, "Browser database path saved")
        return OperationResult(ValidationStatus.OK, message)

    async def _sync(self, source_path: str) -> OperationResult:
        previous = self.primary_input
        try:
            managed = await self._provider.aimport_source(source_path)
        except Exception as e:
            logger.warning("Import of %s failed: %s", source_path, e)
            self.secondary_status = FieldStatus(ValidationStatus.ERROR, f"Import failed: {e}")
            return OperationResult(ValidationStatus.ERROR, f"Import failed: {e}", step=SyncStep.IMPORT)

        self.primary_input = managed
        try:
            with self._single_flight("apply"):
                result = await self._commit_primary(managed)
        except OperationInProgressError as e:
            result = OperationResult(ValidationStatus.ERROR, str(e))
        if result.status is ValidationStatus.ERROR:
            self.primary_input = previous
            self.secondary_status = FieldStatus(ValidationStatus.ERROR, result.message)
            return replace(result, step=SyncStep.APPLY)
        if result.status is ValidationStatus.WARNING:
            self.secondary_status = FieldStatus(ValidationStatus.WARNING, result.message)
            return replace(result, step=SyncStep.APPLY)

        logger.info("Imported %s as %s", source_path, managed)
        self.secondary_status = FieldStatus(ValidationStatus.OK, f"Synced into {managed}")
        return OperationResult(ValidationStatus.OK, f"Synced into {managed}")

    async def _commit_top_sites(self, count: int) -> OperationResult:
        try:
            message = await self._provider.aset_top_sites_count(count)
            config = await self._provider.aget_config()
        except Exception as e:
            logger.warning("Failed to set top sites count: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"Failed to set top sites count: {e}")
        self._adopt(config)
        return OperationResult(ValidationStatus.OK, message)

    async def _cleanup(self) -> OperationResult:
        try:
            confirmed = await asyncio.to_thread(self._shell.confirm, CLEANUP_PROMPT)
        except Exception as e:
            logger.warning("Confirmation dialog failed: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"Confirmation failed: {e}")
        if not confirmed:
            return OperationResult.skipped("Cleanup cancelled")

        try:
            message = await self._provider.acleanup_old_dbs()
        except Exception as e:
            logger.warning("Cleanup failed: %s", e)
            return OperationResult(ValidationStatus.ERROR, f"Cleanup failed: {e}")
        logger.info("Cleanup finished: %s", message)
        return OperationResult(ValidationStatus.OK, message)

    # ---- Helpers ----

    @contextmanager
    def _single_flight(self, operation: str) -> Iterator[None]:
        if operation in self._busy:
            raise OperationInProgressError(f"{operation.capitalize()} is already running")
        self._busy.add(operation)
        try:
            yield
        finally:
            self._busy.discard(operation)

    async def _run(self, operation: str, action: Callable[[], Awaitable[OperationResult]]) -> OperationResult:
        try:
            with self._single_flight(operation):
                return await action()
        except OperationInProgressError as e:
            return OperationResult.skipped(str(e))

    def _adopt(self, config: SourceConfig) -> None:
        self.config = config
        self.primary_input = config.db_path or ""
        if config.browser_db_path:
            self.secondary_input = config.browser_db_path

    def _configured_path(self) -> str | None:
        return self.config.db_path if self.config else None

    @staticmethod
    def _pick(explicit: str | None, field_value: str) -> str:
        return (explicit if explicit is not None else field_value).strip()
