"""Shared fakes for controller tests."""

import pytest
from dateutil import tz

from history_viewer.config import ViewerSettings
from history_viewer.host.shell import BaseHostShell
from history_viewer.provider.base import BaseHistoryProvider


class FakeProvider(BaseHistoryProvider):
    """In-memory provider that records every call."""

    def __init__(self):
        self.calls: list[tuple] = []
        self.config = {"db_path": None, "browser_db_path": None, "top_sites_count": 6}
        self.page = {"items": [], "total": 0}
        self.stats = {"total_visits": 0, "distinct_sites": 0, "top_entities": []}
        self.valid = True
        self.managed_path = "/data/history_20240601_120000.db"
        self.failures: dict[str, Exception] = {}

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name in self.failures:
            raise self.failures[name]

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    def stats_overview(self, time_range):
        self._record("stats_overview", time_range)
        return self.stats

    def list_history(self, page, page_size, filters):
        self._record("list_history", page, page_size, filters)
        return self.page

    def get_config(self):
        self._record("get_config")
        return dict(self.config)

    def set_db_path(self, path):
        self._record("set_db_path", path)
        self.config["db_path"] = path
        return "Database path updated"

    def set_browser_db_path(self, path):
        self._record("set_browser_db_path", path)
        self.config["browser_db_path"] = path
        return "Browser database path saved"

    def set_top_sites_count(self, count):
        self._record("set_top_sites_count", count)
        self.config["top_sites_count"] = count
        return "Top sites count updated"

    def validate_db_path(self, path):
        self._record("validate_db_path", path)
        return self.valid

    def import_source(self, source_path):
        self._record("import_source", source_path)
        return self.managed_path

    def open_db_directory(self):
        self._record("open_db_directory")
        return "Directory opened"

    def cleanup_old_dbs(self):
        self._record("cleanup_old_dbs")
        return "Removed 2 old database files"


class FakeShell(BaseHostShell):
    def __init__(self, browse_result=None, confirm_result=True):
        self.browse_result = browse_result
        self.confirm_result = confirm_result
        self.prompts: list[str] = []
        self.opened: list[str] = []
        self.copied: list[str] = []

    def browse_file(self, kind):
        return self.browse_result

    def confirm(self, prompt):
        self.prompts.append(prompt)
        return self.confirm_result

    def open_url(self, url):
        self.opened.append(url)

    def copy_text(self, text):
        self.copied.append(text)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def settings():
    return ViewerSettings(page_size=20, time_range="all")


@pytest.fixture
def utc():
    return tz.UTC
