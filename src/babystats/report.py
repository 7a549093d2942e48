"""Format period summaries as side-by-side stat cards."""

from __future__ import annotations

from dataclasses import dataclass

from babystats.analytics.summary import StatsSummary
from babystats.analytics.trends import Metric, Trend, compare_stats, metric_value
from babystats.analytics.windows import Period

CARD_TITLES = {
    Metric.WAKE_WINDOW: "Avg Wake Window",
    Metric.NAP: "Avg Nap Time",
    Metric.NIGHT_SLEEP: "Avg Night Sleep",
    Metric.NIGHT_WAKINGS: "Avg Night Wakings",
    Metric.FEEDINGS_PER_DAY: "Avg Feedings",
    Metric.FEED_AMOUNT: "Avg Feed Amount",
    Metric.DIAPER_CHANGES_PER_DAY: "Avg Diaper Changes",
    Metric.POOPS_PER_DAY: "Avg Poops",
}

MINUTE_METRICS = frozenset({Metric.WAKE_WINDOW, Metric.NAP, Metric.NIGHT_SLEEP})

TREND_MARKS = {Trend.POSITIVE: "+", Trend.NEGATIVE: "-", Trend.NEUTRAL: " "}


@dataclass(frozen=True)
class StatCard:
    title: str
    main_value: str
    compare_value: str
    trend: Trend


def format_minutes(minutes: float) -> str:
    """``135`` -> ``"2h 15m"``."""
    total = int(minutes)
    return f"{total // 60}h {total % 60}m"


def format_period_label(period: Period | int | str) -> str:
    return f"{Period.parse(period).days} Days"


def _format_value(summary: StatsSummary, metric: Metric) -> str:
    value = metric_value(summary, metric)
    if metric in MINUTE_METRICS:
        return format_minutes(value)
    if metric == Metric.FEED_AMOUNT:
        return f"{value:.1f} {summary.display_unit.value.lower()}"
    return f"{value:.1f}"


def build_cards(main: StatsSummary, compare: StatsSummary) -> list[StatCard]:
    """One card per metric, in display order."""
    trends = compare_stats(main, compare)
    return [
        StatCard(
            title=CARD_TITLES[metric],
            main_value=_format_value(main, metric),
            compare_value=_format_value(compare, metric),
            trend=trend,
        )
        for metric, trend in trends.items()
    ]


def render_cards(cards: list[StatCard], main_label: str, compare_label: str) -> str:
    """Plain-text table of cards for terminal output."""
    width = max(len(c.title) for c in cards)
    header = f"  {'':<{width}}  {main_label:>12}  {compare_label:>12}"
    lines = [header, f"  {'-' * (len(header) - 2)}"]
    for c in cards:
        lines.append(
            f"{TREND_MARKS[c.trend]} {c.title:<{width}}  "
            f"{c.main_value:>12}  {c.compare_value:>12}"
        )
    return "\n".join(lines)
