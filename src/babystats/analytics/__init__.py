"""Analytics engine for summarizing a baby's logged activities.

Modules:
    windows  -- Lookback periods, date-range filtering, day bucketing
    wake     -- Wake windows between consecutive sleeps
    sleep    -- Night sleep (per-night accounting, wakings) and naps
    feeding  -- Feeding frequency and unit-normalized volume
    diaper   -- Diaper change frequency and composition
    summary  -- Period summary aggregation
    trends   -- Main vs compare period trend classification
    pipeline -- End-to-end computation for one baby and one period
"""

from babystats.analytics.windows import (
    Period,
    DateRange,
    resolve_date_range,
    filter_activities,
    bucket_by_day,
)
from babystats.analytics.wake import compute_wake_windows, WakeWindowResult
from babystats.analytics.sleep import (
    aggregate_night_sleep,
    aggregate_naps,
    NightSleepResult,
    NapResult,
)
from babystats.analytics.feeding import aggregate_feedings, convert_volume, FeedingResult
from babystats.analytics.diaper import aggregate_diapers, DiaperResult
from babystats.analytics.summary import build_stats_summary, StatsSummary
from babystats.analytics.trends import compare_stats, trend_for, Metric, Trend
from babystats.analytics.pipeline import compute_stats, compare_periods

__all__ = [
    # windows
    "Period",
    "DateRange",
    "resolve_date_range",
    "filter_activities",
    "bucket_by_day",
    # wake
    "compute_wake_windows",
    "WakeWindowResult",
    # sleep
    "aggregate_night_sleep",
    "aggregate_naps",
    "NightSleepResult",
    "NapResult",
    # feeding
    "aggregate_feedings",
    "convert_volume",
    "FeedingResult",
    # diaper
    "aggregate_diapers",
    "DiaperResult",
    # summary
    "build_stats_summary",
    "StatsSummary",
    # trends
    "compare_stats",
    "trend_for",
    "Metric",
    "Trend",
    # pipeline
    "compute_stats",
    "compare_periods",
]
