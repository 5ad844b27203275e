"""Tests for exception hierarchy."""

from history_viewer.exceptions import (
    HistoryViewerError,
    InputRejectedError,
    InvalidTimeRangeError,
    InvalidSortColumnError,
    InvalidTopSitesCountError,
    ProviderError,
    MalformedResponseError,
    SourceError,
    OperationInProgressError,
    HostError,
)


def test_all_inherit_from_base():
    for exc_class in [
        InputRejectedError, InvalidTimeRangeError, InvalidSortColumnError, InvalidTopSitesCountError,
        ProviderError, MalformedResponseError,
        SourceError, OperationInProgressError,
        HostError,
    ]:
        assert issubclass(exc_class, HistoryViewerError)


def test_input_hierarchy():
    assert issubclass(InvalidTimeRangeError, InputRejectedError)
    assert issubclass(InvalidSortColumnError, InputRejectedError)
    assert issubclass(InvalidTopSitesCountError, InputRejectedError)


def test_provider_hierarchy():
    assert issubclass(MalformedResponseError, ProviderError)
    assert not issubclass(ProviderError, InputRejectedError)


def test_exception_message():
    e = ProviderError("test error")
    assert str(e) == "test error"
