"""Data-source configuration and lifecycle workflow."""

from history_viewer.source.controller import SourceLifecycleController, parse_top_sites_count
from history_viewer.source.models import FieldStatus, OperationResult, SyncStep, ValidationStatus

__all__ = [
    "SourceLifecycleController",
    "parse_top_sites_count",
    "FieldStatus",
    "OperationResult",
    "SyncStep",
    "ValidationStatus",
]
