"""Shared fixtures and helpers for the babystats test suite."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from dateutil import tz

from babystats.records import (
    DiaperEvent,
    DiaperKind,
    FeedEvent,
    FeedKind,
    SleepSession,
    VolumeUnit,
)

BABY = "baby-1"
OTHER_BABY = "baby-2"

# Pinned reference instant: Wednesday evening
NOW = datetime(2024, 5, 15, 20, 0)

# A zone with DST: 2024-03-10 08:00Z springs forward, 2024-11-03 07:00Z falls back
CHICAGO = tz.gettz("America/Chicago")


# ---------------------------------------------------------------------------
# Record-building helpers
# ---------------------------------------------------------------------------


def at(day: int, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """A local timestamp in May 2024."""
    return datetime(2024, 5, day, hour, minute, second)


def chicago(month: int, day: int, hour: int, minute: int = 0) -> datetime:
    """A 2024 UTC instant localized to Chicago, as the timeline reader does it."""
    return datetime(2024, month, day, hour, minute, tzinfo=tz.UTC).astimezone(CHICAGO)


def make_sleep(
    start: datetime,
    end: datetime | None = None,
    minutes: float | None = None,
    subject_id: str = BABY,
) -> SleepSession:
    """Build a sleep session.  *minutes* is a shortcut for ``end = start + minutes``."""
    if end is None and minutes is not None:
        end = start + timedelta(minutes=minutes)
    return SleepSession(subject_id=subject_id, start_time=start, end_time=end)


def make_feed(
    time: datetime,
    kind: FeedKind = FeedKind.BOTTLE,
    amount: float | None = None,
    unit: VolumeUnit | None = None,
    subject_id: str = BABY,
) -> FeedEvent:
    return FeedEvent(
        subject_id=subject_id,
        time=time,
        feed_kind=kind,
        amount=amount,
        amount_unit=unit,
    )


def make_diaper(
    time: datetime,
    kind: DiaperKind = DiaperKind.WET,
    subject_id: str = BABY,
) -> DiaperEvent:
    return DiaperEvent(subject_id=subject_id, time=time, diaper_kind=kind)


# ---------------------------------------------------------------------------
# A realistic two-day log (14th-15th May) plus out-of-range noise
# ---------------------------------------------------------------------------


def make_two_day_log() -> list:
    """Two days of activity for BABY, one day earlier, and another baby.

    Over the 2-day period ending NOW:
      wake windows 30, 60, 150, 150 min   -> avg 97.5 -> 98
      one night (14th): 210 + 150 + 210   -> 570 min, 1 waking
      naps 90 and 60 min                  -> avg 75
      4 feeds, liquid 4 oz and 120 ml     -> 2.0/day, ~4.0 oz
      5 diapers, 2 with poop              -> 2.5/day, 1.0/day
    """
    return [
        # the 13th, only visible to wider periods
        make_diaper(at(13, 10), DiaperKind.DIRTY),
        # night of the 14th
        make_sleep(at(14, 19, 30), at(14, 23, 0)),
        make_sleep(at(14, 23, 30), at(15, 2, 0)),
        make_sleep(at(15, 3, 0), at(15, 6, 30)),
        # naps on the 15th
        make_sleep(at(15, 9, 0), at(15, 10, 30)),
        make_sleep(at(15, 13, 0), at(15, 14, 0)),
        # feeds
        make_feed(at(14, 8), FeedKind.BOTTLE, 4.0, VolumeUnit.OZ),
        make_feed(at(14, 12), FeedKind.BOTTLE, 120.0, VolumeUnit.ML),
        make_feed(at(15, 8), FeedKind.BREAST),
        make_feed(at(15, 12), FeedKind.SOLIDS, 2.0, VolumeUnit.TBSP),
        # diapers
        make_diaper(at(14, 9), DiaperKind.WET),
        make_diaper(at(14, 15), DiaperKind.DIRTY),
        make_diaper(at(15, 7), DiaperKind.BOTH),
        make_diaper(at(15, 11), DiaperKind.WET),
        make_diaper(at(15, 16), DiaperKind.WET),
        # someone else's baby
        make_feed(at(15, 9), FeedKind.BOTTLE, 8.0, VolumeUnit.OZ, subject_id=OTHER_BABY),
        make_sleep(at(15, 1), at(15, 5), subject_id=OTHER_BABY),
    ]


@pytest.fixture
def two_day_log() -> list:
    return make_two_day_log()


# ---------------------------------------------------------------------------
# Timeline export helpers
# ---------------------------------------------------------------------------


def make_timeline_items() -> list[dict]:
    """The same two-day log as the timeline API serializes it (UTC ISO strings)."""
    return [
        {"id": "s1", "babyId": BABY, "startTime": "2024-05-14T19:30:00.000Z",
         "endTime": "2024-05-14T23:00:00.000Z", "duration": 210, "type": "NIGHT"},
        {"id": "s2", "babyId": BABY, "startTime": "2024-05-14T23:30:00.000Z",
         "endTime": "2024-05-15T02:00:00.000Z", "duration": 150, "type": "NIGHT"},
        {"id": "s3", "babyId": BABY, "startTime": "2024-05-15T03:00:00.000Z",
         "endTime": "2024-05-15T06:30:00.000Z", "duration": 210, "type": "NIGHT"},
        {"id": "s4", "babyId": BABY, "startTime": "2024-05-15T09:00:00.000Z",
         "endTime": "2024-05-15T10:30:00.000Z", "duration": 90, "type": "NAP"},
        {"id": "s5", "babyId": BABY, "startTime": "2024-05-15T13:00:00.000Z",
         "endTime": "2024-05-15T14:00:00.000Z", "duration": 60, "type": "NAP"},
        {"id": "f1", "babyId": BABY, "time": "2024-05-14T08:00:00.000Z",
         "type": "BOTTLE", "amount": 4, "unitAbbr": "OZ"},
        {"id": "f2", "babyId": BABY, "time": "2024-05-14T12:00:00.000Z",
         "type": "BOTTLE", "amount": 120, "unitAbbr": "ML"},
        {"id": "f3", "babyId": BABY, "time": "2024-05-15T08:00:00.000Z",
         "type": "BREAST", "amount": None, "unitAbbr": None, "side": "LEFT"},
        {"id": "f4", "babyId": BABY, "time": "2024-05-15T12:00:00.000Z",
         "type": "SOLIDS", "amount": 2, "unitAbbr": "TBSP", "food": "oatmeal"},
        {"id": "d1", "babyId": BABY, "time": "2024-05-14T09:00:00.000Z",
         "type": "WET", "condition": "NORMAL"},
        {"id": "d2", "babyId": BABY, "time": "2024-05-14T15:00:00.000Z",
         "type": "DIRTY", "condition": "NORMAL", "color": "YELLOW"},
        {"id": "d3", "babyId": BABY, "time": "2024-05-15T07:00:00.000Z",
         "type": "BOTH", "condition": "NORMAL"},
        {"id": "d4", "babyId": BABY, "time": "2024-05-15T11:00:00.000Z",
         "type": "WET", "condition": "NORMAL"},
        {"id": "d5", "babyId": BABY, "time": "2024-05-15T16:00:00.000Z",
         "type": "WET", "condition": "NORMAL"},
        {"id": "n1", "babyId": BABY, "time": "2024-05-15T17:00:00.000Z",
         "content": "Rolled over!", "category": "Milestone"},
        {"id": "b1", "babyId": BABY, "time": "2024-05-15T18:00:00.000Z",
         "soapUsed": True, "shampooUsed": False},
    ]


def write_timeline(path: Path, items: list[dict], success: bool = True) -> Path:
    """Write items wrapped in the timeline API envelope."""
    path.write_text(json.dumps({"success": success, "data": items}))
    return path
