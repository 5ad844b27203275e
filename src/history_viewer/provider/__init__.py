"""Boundary to the external history/configuration provider."""

from history_viewer.provider.base import BaseHistoryProvider
from history_viewer.provider.models import HistoryItem, OverviewStats, ResultPage, SourceConfig
from history_viewer.provider.parser import parse_config, parse_item, parse_page, parse_stats

__all__ = [
    "BaseHistoryProvider",
    "HistoryItem",
    "OverviewStats",
    "ResultPage",
    "SourceConfig",
    "parse_config",
    "parse_item",
    "parse_page",
    "parse_stats",
]
