"""Tests for provider payload parsing."""

import pytest

from history_viewer.exceptions import MalformedResponseError
from history_viewer.provider.models import HistoryItem, SourceConfig
from history_viewer.provider.parser import parse_config, parse_item, parse_page, parse_stats


def test_parse_valid_item():
    raw = {
        "url": "https://example.com/page",
        "title": "Example Page",
        "last_visited_time": 1717200000,
        "num_visits": 3,
    }
    item = parse_item(raw)
    assert isinstance(item, HistoryItem)
    assert item.num_visits == 3
    assert item.last_visited_time == 1717200000


def test_parse_item_allows_missing_title():
    item = parse_item({"url": "https://example.com/", "last_visited_time": 0, "num_visits": 1})
    assert item.title is None


def test_parse_item_requires_url():
    with pytest.raises(MalformedResponseError, match="url"):
        parse_item({"title": "No url"})


def test_parse_page():
    page = parse_page({"items": [{"url": "https://a.com/"}], "total": 41})
    assert page.total == 41
    assert page.items[0].url == "https://a.com/"


def test_parse_page_rejects_bad_total():
    with pytest.raises(MalformedResponseError):
        parse_page({"items": [], "total": "many"})
    with pytest.raises(MalformedResponseError):
        parse_page({"items": [], "total": -1})
    with pytest.raises(MalformedResponseError):
        parse_page({"total": 3})


def test_parse_stats_defaults():
    stats = parse_stats({"total_visits": None, "distinct_sites": 4})
    assert stats.total_visits == 0
    assert stats.distinct_sites == 4
    assert stats.top_entities == ()


def test_parse_config_blank_path_is_unconfigured():
    config = parse_config({"db_path": "  ", "top_sites_count": 10, "last_updated": 1717200000})
    assert config == SourceConfig(db_path=None, browser_db_path=None, top_sites_count=10)


def test_parse_config_rejects_non_object():
    with pytest.raises(MalformedResponseError):
        parse_config(["db_path"])
