"""Host environment collaborators."""

from history_viewer.host.shell import BaseHostShell, FileKind, SystemShell

__all__ = [
    "BaseHostShell",
    "FileKind",
    "SystemShell",
]
