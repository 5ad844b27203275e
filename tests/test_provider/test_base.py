"""Tests for the provider base class and its async wrappers."""

import asyncio

import pytest

from history_viewer.exceptions import MalformedResponseError, ProviderError
from history_viewer.provider.base import BaseHistoryProvider


def test_base_provider_is_abstract():
    with pytest.raises(TypeError):
        BaseHistoryProvider()


def test_async_wrapper_parses_payload(provider):
    provider.page = {"items": [{"url": "https://a.com/", "num_visits": 2}], "total": 1}
    page = asyncio.run(provider.alist_history(1, 20, {"keyword": None}))
    assert page.total == 1
    assert page.items[0].num_visits == 2


def test_async_wrapper_wraps_failures(provider):
    provider.failures["get_config"] = KeyError("db_path")
    with pytest.raises(ProviderError, match="Failed to load config"):
        asyncio.run(provider.aget_config())


def test_validate_must_return_bool(provider):
    provider.valid = "yes"
    with pytest.raises(MalformedResponseError):
        asyncio.run(provider.avalidate_db_path("/data/history.db"))


def test_import_must_return_path(provider):
    provider.managed_path = ""
    with pytest.raises(MalformedResponseError):
        asyncio.run(provider.aimport_source("/home/me/History"))
