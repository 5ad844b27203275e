"""Tests for display formatting helpers."""

from history_viewer.display import format_timestamp, history_row, kpi_rows, page_info, shorten
from history_viewer.provider.models import HistoryItem, OverviewStats


def test_shorten():
    assert shorten("short", 48) == "short"
    long_url = "https://example.com/" + "x" * 60
    assert len(shorten(long_url, 48)) == 48
    assert shorten(long_url, 48).endswith("...")


def test_format_timestamp(utc):
    assert format_timestamp(1717200000, utc) == "2024-06-01 00:00:00"
    assert format_timestamp(0) == "-"
    assert format_timestamp(None) == "-"


def test_page_info():
    assert page_info(1, 0, 20) == "1 / 1"
    assert page_info(2, 41, 20) == "2 / 3"


def test_kpi_rows():
    rows = kpi_rows(OverviewStats(total_visits=12, distinct_sites=5, top_entities=("a.com", "b.com")))
    assert rows == [("Total visits", 12), ("Distinct sites", 5), ("Top sites", 2)]
    assert kpi_rows(None)[0] == ("Total visits", 0)


def test_history_row(utc):
    item = HistoryItem(url="https://example.com/" + "y" * 80, title=None, last_visited_time=1717200000, num_visits=7)
    title, url, visited, count = history_row(item, url_width=30, zone=utc)
    assert title == ""
    assert len(url) == 30
    assert visited == "2024-06-01 00:00:00"
    assert count == "7"
