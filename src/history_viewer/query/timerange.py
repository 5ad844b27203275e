"""Time range selection and its provider-facing encoding."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, tzinfo

import dateutil.parser as parser
from dateutil import tz as dateutil_tz

from history_viewer.config import TIME_RANGES
from history_viewer.exceptions import InvalidTimeRangeError

ALL = "all"
CUSTOM = "custom"

_END_OF_DAY = time(23, 59, 59)


@dataclass(frozen=True)
class TimeRangeDescriptor:
    """Resolved time filter.

    `token` is what goes on the wire: None for no time filter, a symbolic
    range such as "7d", or "<start>-<end>" epoch seconds for custom ranges.
    """

    token: str | None
    start: int | None = None
    end: int | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.token is None


def parse_date(value: date | str | None) -> date | None:
    """Accept a `date`, an ISO calendar date string, or nothing."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return parser.isoparse(text).date()
    except (ValueError, OverflowError) as e:
        raise InvalidTimeRangeError(f"Invalid date: {text!r}") from e


def check_time_range(time_range: str, start: date | None, end: date | None) -> None:
    """Raise InvalidTimeRangeError unless the selection can be resolved."""
    if time_range not in TIME_RANGES:
        raise InvalidTimeRangeError(f"Unknown time range: {time_range!r}")
    if time_range != CUSTOM:
        return
    if start is None or end is None:
        raise InvalidTimeRangeError("Custom range needs both a start and an end date")
    if start > end:
        raise InvalidTimeRangeError(f"Start date {start} is after end date {end}")


def resolve(
    time_range: str,
    start: date | None = None,
    end: date | None = None,
    zone: tzinfo | None = None,
) -> TimeRangeDescriptor:
    """Map a selection to its descriptor.

    Custom ranges cover start 00:00:00 through end 23:59:59 in `zone`
    (the local zone by default), both ends inclusive.
    """
    if time_range == ALL:
        return TimeRangeDescriptor(token=None)
    if time_range != CUSTOM:
        return TimeRangeDescriptor(token=time_range)

    check_time_range(time_range, start, end)
    zone = zone or dateutil_tz.tzlocal()
    start_ts = int(datetime.combine(start, time.min, tzinfo=zone).timestamp())
    end_ts = int(datetime.combine(end, _END_OF_DAY, tzinfo=zone).timestamp())
    return TimeRangeDescriptor(token=f"{start_ts}-{end_ts}", start=start_ts, end=end_ts)
