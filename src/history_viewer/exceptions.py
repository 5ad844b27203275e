"""Unified exception hierarchy for history-viewer."""


class HistoryViewerError(Exception):
    """Base exception for all history-viewer errors."""


# Input
class InputRejectedError(HistoryViewerError):
    """Invalid user input detected locally, before any provider call."""


class InvalidTimeRangeError(InputRejectedError):
    """Unknown time range token or an incomplete/inverted custom range."""


class InvalidSortColumnError(InputRejectedError):
    """Sort column is not one of the sortable columns."""


class InvalidTopSitesCountError(InputRejectedError):
    """Top sites count is non-numeric or outside 1..50."""


# Provider
class ProviderError(HistoryViewerError):
    """A call to the history provider failed."""


class MalformedResponseError(ProviderError):
    """The provider answered with a payload that cannot be parsed."""


# Source lifecycle
class SourceError(HistoryViewerError):
    """Base exception for data-source lifecycle operations."""


class OperationInProgressError(SourceError):
    """A single-flight operation was started while one is outstanding."""


# Host shell
class HostError(HistoryViewerError):
    """A host collaborator (clipboard, browser, dialog) failed."""
