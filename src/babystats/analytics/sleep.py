"""Night sleep and nap accounting.

Sleep sessions are examined one calendar day at a time (the day of the
session's start).  A session is a *night-sleep event* when it starts or
ends between 19:00 and 07:00; a session starting between 07:00 and 19:00
is a *nap*.

Night-sleep events are assigned to a single logical night:

- starting at or after 19:00 -> the night keyed by the start date
- starting before 07:00 -> the night keyed by the previous date (the tail
  of last night)
- starting in the day but ending at night -> no night; dropped

Per night we accumulate minutes slept.  Night wakings are attributed the
first time a night is populated, using the number of night-sleep events in
the day bucket being processed (minus one).  A night whose sessions fall
into two day buckets therefore only gets the wakings of whichever bucket
is processed first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Mapping, Sequence

import numpy as np

from babystats.analytics.windows import elapsed_seconds
from babystats.records import ActivityRecord, SleepSession

# ---------------------------------------------------------------------------
# Day/night boundaries and validity limits
# ---------------------------------------------------------------------------

NIGHT_START_HOUR = 19
NIGHT_END_HOUR = 7

MAX_NIGHT_SESSION_MIN = 12 * 60
MAX_NAP_MIN = 6 * 60


def is_night_hour(hour: int) -> bool:
    """True for hours in [19, 24) or [0, 7)."""
    return hour >= NIGHT_START_HOUR or hour < NIGHT_END_HOUR


def is_day_hour(hour: int) -> bool:
    return NIGHT_END_HOUR <= hour < NIGHT_START_HOUR


def session_minutes(start: datetime, end: datetime) -> int:
    """Elapsed minutes between two instants, rounded half-up."""
    return int(math.floor(elapsed_seconds(start, end) / 60.0 + 0.5))


def is_night_sleep_event(session: SleepSession) -> bool:
    if is_night_hour(session.start_time.hour):
        return True
    return session.end_time is not None and is_night_hour(session.end_time.hour)


def night_key(session: SleepSession) -> date | None:
    """The night a session belongs to, or None for day-start sessions."""
    start = session.start_time
    if start.hour >= NIGHT_START_HOUR:
        return start.date()
    if start.hour < NIGHT_END_HOUR:
        return start.date() - timedelta(days=1)
    return None


# ---------------------------------------------------------------------------
# Night sleep
# ---------------------------------------------------------------------------


@dataclass
class NightAccumulator:
    """Minutes slept during one logical night."""

    minutes: int = 0
    sessions: int = 0


@dataclass
class NightSleepResult:
    """Night sleep accumulation over a period."""

    nights: dict[date, NightAccumulator] = field(default_factory=dict)
    total_wakings: int = 0

    @property
    def night_count(self) -> int:
        return len(self.nights)

    @property
    def total_minutes(self) -> int:
        return sum(n.minutes for n in self.nights.values())

    @property
    def total_sessions(self) -> int:
        return sum(n.sessions for n in self.nights.values())

    @property
    def average_minutes(self) -> float:
        if not self.nights:
            return 0.0
        return self.total_minutes / self.night_count

    @property
    def average_wakings(self) -> float:
        if not self.nights:
            return 0.0
        return self.total_wakings / self.night_count

    def __repr__(self) -> str:
        return (
            f"NightSleepResult(nights={self.night_count}, "
            f"sessions={self.total_sessions}, "
            f"avg={self.average_minutes:.0f}min, "
            f"wakings={self.total_wakings})"
        )


def _day_sleeps(day_activities: Sequence[ActivityRecord]) -> list[SleepSession]:
    return [a for a in day_activities if isinstance(a, SleepSession)]


def aggregate_night_sleep(
    days: Mapping[date, Sequence[ActivityRecord]],
) -> NightSleepResult:
    """Assign night-sleep events to nights and accumulate minutes and wakings.

    Args:
        days: Activities bucketed by calendar day, in processing order.

    Returns:
        NightSleepResult keyed by night date.
    """
    result = NightSleepResult()

    for day_activities in days.values():
        night_events = [s for s in _day_sleeps(day_activities) if is_night_sleep_event(s)]
        wakings_for_day = max(0, len(night_events) - 1)

        for session in night_events:
            if session.end_time is None:
                continue
            key = night_key(session)
            if key is None:
                continue

            minutes = session_minutes(session.start_time, session.end_time)
            if minutes <= 0 or minutes >= MAX_NIGHT_SESSION_MIN:
                continue

            night = result.nights.get(key)
            if night is None:
                night = result.nights[key] = NightAccumulator()
                result.total_wakings += wakings_for_day
            night.minutes += minutes
            night.sessions += 1

    return result


# ---------------------------------------------------------------------------
# Naps
# ---------------------------------------------------------------------------


@dataclass
class NapResult:
    """Daytime sleep accumulation over a period."""

    total_minutes: float = 0.0
    count: int = 0

    @property
    def average_minutes(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_minutes / self.count

    def __repr__(self) -> str:
        return f"NapResult(avg={self.average_minutes:.0f}min, n={self.count})"


def aggregate_naps(days: Mapping[date, Sequence[ActivityRecord]]) -> NapResult:
    """Accumulate completed naps (start between 07:00 and 19:00).

    Naps of zero or negative length, and naps of six hours or more, are
    treated as logging errors and skipped.
    """
    durations = [
        session_minutes(s.start_time, s.end_time)
        for day_activities in days.values()
        for s in _day_sleeps(day_activities)
        if is_day_hour(s.start_time.hour) and s.end_time is not None
    ]
    if not durations:
        return NapResult()

    arr = np.asarray(durations, dtype=np.float64)
    valid = arr[(arr > 0) & (arr < MAX_NAP_MIN)]
    return NapResult(total_minutes=float(np.sum(valid)), count=int(len(valid)))
