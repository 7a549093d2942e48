"""Analytics pipeline: turn a cached activity collection into period stats.

This module consumes the list of activity records produced by
:func:`babystats.timeline.load_timeline` (or any other fetch layer) and runs
the full analytics pipeline for one baby and one period, producing a
:class:`StatsSummary`.  Every call recomputes from scratch; nothing is
cached between periods or metrics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from babystats.analytics.diaper import aggregate_diapers
from babystats.analytics.feeding import DEFAULT_DISPLAY_UNIT, aggregate_feedings
from babystats.analytics.sleep import aggregate_naps, aggregate_night_sleep
from babystats.analytics.summary import StatsSummary, build_stats_summary
from babystats.analytics.trends import Metric, Trend, compare_stats
from babystats.analytics.wake import compute_wake_windows
from babystats.analytics.windows import (
    Period,
    bucket_by_day,
    filter_activities,
    resolve_date_range,
)
from babystats.records import ActivityRecord, VolumeUnit


def compute_stats(
    activities: Sequence[ActivityRecord],
    subject_id: str,
    period: Period | int | str,
    now: datetime,
    display_unit: VolumeUnit | str = DEFAULT_DISPLAY_UNIT,
) -> StatsSummary:
    """Run the full analytics pipeline for one baby over one period.

    Args:
        activities: Cached records covering at least the last 30 days,
            already localized to the baby's calendar.
        subject_id: The baby whose activities are summarized.
        period: Lookback period (2, 7, 14 or 30 days).
        now: Reference instant; the period ends at the close of its day.
        display_unit: OZ or ML, the unit feed amounts are averaged in.

    Returns:
        A fresh StatsSummary.  All zeros when nothing qualifies.
    """
    p = Period.parse(period)
    display_unit = VolumeUnit(display_unit)
    date_range = resolve_date_range(p, now)

    filtered = filter_activities(activities, subject_id, date_range)
    if not filtered:
        return StatsSummary(period_days=p.days, display_unit=display_unit)

    days = bucket_by_day(filtered)

    return build_stats_summary(
        period=p,
        wake=compute_wake_windows(filtered),
        nights=aggregate_night_sleep(days),
        naps=aggregate_naps(days),
        feeding=aggregate_feedings(days, display_unit),
        diapers=aggregate_diapers(days),
    )


def compare_periods(
    activities: Sequence[ActivityRecord],
    subject_id: str,
    main_period: Period | int | str,
    compare_period: Period | int | str,
    now: datetime,
    display_unit: VolumeUnit | str = DEFAULT_DISPLAY_UNIT,
) -> tuple[StatsSummary, StatsSummary, dict[Metric, Trend]]:
    """Compute the main and compare summaries and the trend per metric."""
    main = compute_stats(activities, subject_id, main_period, now, display_unit)
    compare = compute_stats(activities, subject_id, compare_period, now, display_unit)
    return main, compare, compare_stats(main, compare)
