"""Wake windows: awake time between consecutive sleeps.

Completed sleep sessions are ordered by start time across the whole
period (day boundaries are ignored).  The gap between one session's end
and the next session's start is a wake window.  Gaps are floored to whole
minutes; non-positive gaps (overlapping logs) and gaps of a day or more
(missing logs) are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from babystats.analytics.windows import as_instant, elapsed_seconds
from babystats.records import ActivityRecord, SleepSession

MAX_WAKE_WINDOW_MIN = 24 * 60


@dataclass
class WakeWindowResult:
    """Wake-window accumulation over a period."""

    total_minutes: float = 0.0
    count: int = 0

    @property
    def average_minutes(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_minutes / self.count

    def __repr__(self) -> str:
        return f"WakeWindowResult(avg={self.average_minutes:.0f}min, n={self.count})"


def completed_sleeps(activities: Sequence[ActivityRecord]) -> list[SleepSession]:
    """Sleep sessions with an end time, sorted by start."""
    sleeps = [
        a for a in activities
        if isinstance(a, SleepSession) and a.end_time is not None
    ]
    sleeps.sort(key=lambda s: as_instant(s.start_time))
    return sleeps


def compute_wake_windows(activities: Sequence[ActivityRecord]) -> WakeWindowResult:
    """Accumulate qualifying wake windows from all completed sleeps.

    Args:
        activities: Filtered activities for one baby and one period.  Non-sleep
            records and in-progress sleeps are ignored.

    Returns:
        WakeWindowResult with the total gap minutes and the gap count.
    """
    sleeps = completed_sleeps(activities)
    if len(sleeps) < 2:
        return WakeWindowResult()

    gap_sec = np.array(
        [elapsed_seconds(cur.end_time, nxt.start_time) for cur, nxt in zip(sleeps, sleeps[1:])],
        dtype=np.float64,
    )
    gaps = np.floor(gap_sec / 60.0)
    valid = gaps[(gaps > 0) & (gaps < MAX_WAKE_WINDOW_MIN)]

    return WakeWindowResult(total_minutes=float(np.sum(valid)), count=int(len(valid)))
