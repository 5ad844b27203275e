"""Data models for the data-source lifecycle."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ValidationStatus(str, enum.Enum):
    UNKNOWN = "unknown"
    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class SyncStep(str, enum.Enum):
    """Stages of importing an external database as the primary source."""

    IMPORT = "import"
    APPLY = "apply"


@dataclass(frozen=True)
class FieldStatus:
    """Persistent status indicator for one path field."""

    status: ValidationStatus = ValidationStatus.UNKNOWN
    message: str = ""


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one lifecycle action, shown to the user as a notification.

    `performed` is False when the action never reached the provider: input
    rejected locally, the user cancelled, or the action was already running.
    `step` names the failing stage of a multi-step sync.
    """

    status: ValidationStatus
    message: str = ""
    performed: bool = True
    step: SyncStep | None = None

    @property
    def ok(self) -> bool:
        return self.status is ValidationStatus.OK

    @classmethod
    def rejected(cls, message: str) -> OperationResult:
        return cls(ValidationStatus.ERROR, message, performed=False)

    @classmethod
    def skipped(cls, message: str, status: ValidationStatus = ValidationStatus.UNKNOWN) -> OperationResult:
        return cls(status, message, performed=False)
