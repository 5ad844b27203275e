"""History list querying: filter resolution, sorting, paging."""

from history_viewer.query.controller import QueryController
from history_viewer.query.models import (
    FetchOutcome,
    FilterDescriptor,
    ListQueryState,
    Phase,
    QuerySignature,
    Refetch,
)
from history_viewer.query.timerange import TimeRangeDescriptor

__all__ = [
    "QueryController",
    "FetchOutcome",
    "FilterDescriptor",
    "ListQueryState",
    "Phase",
    "QuerySignature",
    "Refetch",
    "TimeRangeDescriptor",
]
