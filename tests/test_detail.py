"""Tests for detail panel actions."""

from history_viewer.detail import DetailActions
from history_viewer.exceptions import HostError
from history_viewer.provider.models import HistoryItem

ITEM = HistoryItem(url="https://example.com/a", title="Example A", last_visited_time=1717200000, num_visits=2)


def test_actions_need_a_selection(shell):
    actions = DetailActions(shell)
    assert not actions.copy_title().ok
    assert not actions.open_url().ok
    assert shell.copied == [] and shell.opened == []


def test_actions_follow_current_selection(shell):
    actions = DetailActions(shell)
    actions.select(ITEM)
    actions.copy_url()
    actions.select(HistoryItem(url="https://example.com/b", title=None, last_visited_time=0))
    result = actions.copy_title()
    actions.open_url()
    assert result.ok
    assert shell.copied == ["https://example.com/a", ""]
    assert shell.opened == ["https://example.com/b"]


def test_host_failure_becomes_result(shell):
    def broken(text):
        raise HostError("clipboard unavailable")

    shell.copy_text = broken
    actions = DetailActions(shell)
    actions.select(ITEM)
    result = actions.copy_title()
    assert not result.ok
    assert "clipboard unavailable" in result.message
