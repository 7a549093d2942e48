"""Lookback periods, date-range filtering and day bucketing.

This is the shared foundation for all aggregators.  It provides:
  - The fixed set of rolling lookback periods (2, 7, 14, 30 days)
  - Resolution of a period + reference instant into an inclusive DateRange
  - Filtering of a cached activity collection to one baby and one range
  - Grouping of activities by the calendar day of their defining timestamp
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import IntEnum
from typing import Iterable, Sequence

from babystats.records import ActivityRecord


class Period(IntEnum):
    """Rolling lookback length in days."""

    TWO_DAYS = 2
    SEVEN_DAYS = 7
    FOURTEEN_DAYS = 14
    THIRTY_DAYS = 30

    @property
    def days(self) -> int:
        return int(self.value)

    @classmethod
    def parse(cls, value: Period | int | str) -> Period:
        """Accept a Period, a day count, or a selector like ``"7day"``."""
        if isinstance(value, Period):
            return value
        text = str(value).strip().lower()
        if text.endswith("day"):
            text = text[: -len("day")]
        try:
            return cls(int(text))
        except ValueError:
            valid = ", ".join(str(p.days) for p in cls)
            raise ValueError(f"Unknown period {value!r} (expected one of {valid})") from None


# Widest supported period; the activity cache must cover at least this much
MAX_PERIOD = Period.THIRTY_DAYS


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] instant range."""

    start: datetime
    end: datetime

    def __contains__(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def as_instant(dt: datetime) -> datetime:
    """Normalize an aware timestamp to UTC; naive ones are returned as-is.

    Aware datetimes sharing one tzinfo subtract and compare on wall-clock
    time, which is off by the DST shift across a transition.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc)


def elapsed_seconds(start: datetime, end: datetime) -> float:
    """Real seconds from *start* to *end*, negative when *end* is earlier."""
    return (as_instant(end) - as_instant(start)).total_seconds()


def resolve_date_range(period: Period | int | str, now: datetime) -> DateRange:
    """Map a period selector onto a concrete date range ending today.

    The range starts at 00:00:00.000 of ``today - (N - 1)`` days and ends at
    23:59:59.999 of today, where "today" is the calendar day of *now*.  The
    tzinfo of *now* (if any) is carried onto both ends.
    """
    p = Period.parse(period)
    first_day = now - timedelta(days=p.days - 1)
    start = first_day.replace(hour=0, minute=0, second=0, microsecond=0)
    end = now.replace(hour=23, minute=59, second=59, microsecond=999000)
    return DateRange(start=start, end=end)


def filter_activities(
    activities: Iterable[ActivityRecord],
    subject_id: str,
    date_range: DateRange,
) -> list[ActivityRecord]:
    """Keep records for *subject_id* whose defining timestamp is in range.

    No re-fetch happens here: if the cached collection is narrower than the
    range, the result silently undercounts.
    """
    return [
        a for a in activities
        if a.subject_id == subject_id and a.time in date_range
    ]


def bucket_by_day(activities: Sequence[ActivityRecord]) -> dict[date, list[ActivityRecord]]:
    """Group activities by the calendar day of their defining timestamp.

    Days are returned in chronological order; records keep their input
    order within a day.
    """
    buckets: dict[date, list[ActivityRecord]] = defaultdict(list)
    for a in activities:
        buckets[a.time.date()].append(a)
    return {day: buckets[day] for day in sorted(buckets)}
