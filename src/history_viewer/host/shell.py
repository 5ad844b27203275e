"""Host collaborators: file picker, confirmation, browser and clipboard."""

from __future__ import annotations

import enum
import logging
import shutil
import subprocess
import sys
import webbrowser
from abc import ABC, abstractmethod
from typing import Callable

from history_viewer.exceptions import HostError

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


class FileKind(str, enum.Enum):
    """Which database a file picker is choosing."""

    PRIMARY = "primary"  # the viewer's history database
    SECONDARY = "secondary"  # a browser's own history file


class BaseHostShell(ABC):
    """Abstract interface to the host environment the viewer runs in."""

    @abstractmethod
    def browse_file(self, kind: FileKind) -> str | None:
        """Ask the user for a file; None when the user cancels."""
        ...

    @abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Yes/no gate before a destructive action."""
        ...

    @abstractmethod
    def open_url(self, url: str) -> None:
        """Open `url` in the default browser."""
        ...

    @abstractmethod
    def copy_text(self, text: str) -> None:
        """Put `text` on the system clipboard."""
        ...


def _clipboard_command() -> list[str] | None:
    """Pick the clipboard writer available on this platform."""
    if sys.platform == "darwin":
        return ["pbcopy"]
    if sys.platform.startswith("win"):
        return ["clip"]
    for candidate in (["wl-copy"], ["xclip", "-selection", "clipboard"], ["xsel", "--clipboard", "--input"]):
        if shutil.which(candidate[0]):
            return candidate
    return None


class SystemShell(BaseHostShell):
    """Terminal host: prompts on stdin, system browser, clipboard command.

    Args:
        prompt: Line reader used for file selection and confirmation.
        timeout: Seconds to wait for the clipboard command.
    """

    def __init__(self, prompt: Callable[[str], str] = input, timeout: int = 5):
        self._prompt = prompt
        self._timeout = timeout

    def browse_file(self, kind: FileKind) -> str | None:
        label = "history database" if kind is FileKind.PRIMARY else "browser history file"
        try:
            answer = self._prompt(f"Path to {label} (blank to cancel): ")
        except EOFError:
            return None
        return answer.strip() or None

    def confirm(self, prompt: str) -> bool:
        try:
            answer = self._prompt(f"{prompt} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in _YES

    def open_url(self, url: str) -> None:
        try:
            opened = webbrowser.open(url)
        except (webbrowser.Error, OSError) as e:
            raise HostError(f"Failed to open {url}: {e}") from e
        if not opened:
            raise HostError(f"No browser available to open {url}")
        logger.debug("Opened %s", url)

    def copy_text(self, text: str) -> None:
        command = _clipboard_command()
        if command is None:
            raise HostError("No clipboard command found (install wl-clipboard or xclip)")
        try:
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise HostError(f"Clipboard command timed out after {self._timeout}s") from e
        except OSError as e:
            raise HostError(f"Clipboard command failed: {e}") from e
        if result.returncode != 0:
            raise HostError(f"Clipboard command failed: {result.stderr.strip()}")
