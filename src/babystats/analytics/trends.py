"""Directional trend between a main and a compare period."""

from __future__ import annotations

from enum import Enum

from babystats.analytics.summary import StatsSummary


class Trend(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Metric(str, Enum):
    """Comparable metrics, in display order."""

    WAKE_WINDOW = "wake_window"
    NAP = "nap"
    NIGHT_SLEEP = "night_sleep"
    NIGHT_WAKINGS = "night_wakings"
    FEEDINGS_PER_DAY = "feedings_per_day"
    FEED_AMOUNT = "feed_amount"
    DIAPER_CHANGES_PER_DAY = "diaper_changes_per_day"
    POOPS_PER_DAY = "poops_per_day"


# Metric -> StatsSummary attribute
METRIC_FIELDS = {
    Metric.WAKE_WINDOW: "avg_wake_window_minutes",
    Metric.NAP: "avg_nap_minutes",
    Metric.NIGHT_SLEEP: "avg_night_sleep_minutes",
    Metric.NIGHT_WAKINGS: "avg_night_wakings",
    Metric.FEEDINGS_PER_DAY: "avg_feedings_per_day",
    Metric.FEED_AMOUNT: "avg_feed_amount",
    Metric.DIAPER_CHANGES_PER_DAY: "avg_diaper_changes_per_day",
    Metric.POOPS_PER_DAY: "avg_poops_per_day",
}

# More is better
HIGHER_IS_BETTER = frozenset({
    Metric.WAKE_WINDOW,
    Metric.NAP,
    Metric.NIGHT_SLEEP,
    Metric.FEED_AMOUNT,
})

# Fewer is better
LOWER_IS_BETTER = frozenset({Metric.NIGHT_WAKINGS})


def metric_value(summary: StatsSummary, metric: Metric | str) -> float:
    return getattr(summary, METRIC_FIELDS[Metric(metric)])


def trend_for(main: StatsSummary, compare: StatsSummary, metric: Metric | str) -> Trend:
    """Classify one metric.  Ties are positive; count metrics are neutral."""
    m = Metric(metric)
    a = metric_value(main, m)
    b = metric_value(compare, m)
    if m in HIGHER_IS_BETTER:
        return Trend.POSITIVE if a >= b else Trend.NEGATIVE
    if m in LOWER_IS_BETTER:
        return Trend.POSITIVE if a <= b else Trend.NEGATIVE
    return Trend.NEUTRAL


def compare_stats(main: StatsSummary, compare: StatsSummary) -> dict[Metric, Trend]:
    """Trend for every metric, in display order."""
    return {m: trend_for(main, compare, m) for m in Metric}
