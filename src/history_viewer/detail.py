"""Actions on the history entry selected in the detail panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from history_viewer.exceptions import HostError
from history_viewer.host.shell import BaseHostShell
from history_viewer.provider.models import HistoryItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    message: str


class DetailActions:
    """Copy/open actions bound once and applied to whatever item is selected."""

    def __init__(self, shell: BaseHostShell):
        self._shell = shell
        self.selected: HistoryItem | None = None

    def select(self, item: HistoryItem | None) -> None:
        self.selected = item

    def copy_title(self) -> ActionResult:
        if self.selected is None:
            return ActionResult(False, "No entry selected")
        return self._copy(self.selected.title or "", "Title")

    def copy_url(self) -> ActionResult:
        if self.selected is None:
            return ActionResult(False, "No entry selected")
        return self._copy(self.selected.url, "Link")

    def open_url(self) -> ActionResult:
        if self.selected is None:
            return ActionResult(False, "No entry selected")
        try:
            self._shell.open_url(self.selected.url)
        except HostError as e:
            logger.warning("Failed to open link: %s", e)
            return ActionResult(False, f"Failed to open link: {e}")
        return ActionResult(True, "Opened link in the default browser")

    def _copy(self, text: str, what: str) -> ActionResult:
        try:
            self._shell.copy_text(text)
        except HostError as e:
            logger.warning("Copy failed: %s", e)
            return ActionResult(False, f"Copy failed: {e}")
        return ActionResult(True, f"{what} copied to clipboard")
