"""Period summary aggregator.

Pulls the results of every aggregator into a single StatsSummary that is
JSON-serializable.  Each average has its own denominator:

- wake window: number of qualifying wake windows
- nap: number of qualifying naps
- night sleep and night wakings: number of distinct nights observed
- feedings, diaper changes, poops: the nominal days in the period

Minute values are rounded to whole minutes and everything else to one
decimal place, both half-up.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass
from typing import Any

from babystats.analytics.diaper import DiaperResult
from babystats.analytics.feeding import DEFAULT_DISPLAY_UNIT, FeedingResult
from babystats.analytics.sleep import NapResult, NightSleepResult
from babystats.analytics.wake import WakeWindowResult
from babystats.analytics.windows import Period
from babystats.records import VolumeUnit


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a calculator (0.5 goes up), not like banker's rounding."""
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True)
class StatsSummary:
    """Comparable averages for one baby over one period."""

    avg_wake_window_minutes: float = 0.0
    avg_nap_minutes: float = 0.0
    avg_night_sleep_minutes: float = 0.0
    avg_night_wakings: float = 0.0
    avg_feedings_per_day: float = 0.0
    avg_feed_amount: float = 0.0
    avg_diaper_changes_per_day: float = 0.0
    avg_poops_per_day: float = 0.0

    period_days: int = Period.SEVEN_DAYS.days
    display_unit: VolumeUnit = DEFAULT_DISPLAY_UNIT

    @property
    def is_empty(self) -> bool:
        """True when no metric had qualifying data ("no data", not a failure)."""
        return not any((
            self.avg_wake_window_minutes,
            self.avg_nap_minutes,
            self.avg_night_sleep_minutes,
            self.avg_night_wakings,
            self.avg_feedings_per_day,
            self.avg_feed_amount,
            self.avg_diaper_changes_per_day,
            self.avg_poops_per_day,
        ))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        d = asdict(self)
        d["display_unit"] = self.display_unit.value
        return d

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"StatsSummary({self.period_days}d: "
            f"wake={self.avg_wake_window_minutes:.0f}min, "
            f"nap={self.avg_nap_minutes:.0f}min, "
            f"night={self.avg_night_sleep_minutes:.0f}min, "
            f"feeds={self.avg_feedings_per_day:.1f}/day)"
        )


def build_stats_summary(
    period: Period | int | str,
    wake: WakeWindowResult | None = None,
    nights: NightSleepResult | None = None,
    naps: NapResult | None = None,
    feeding: FeedingResult | None = None,
    diapers: DiaperResult | None = None,
) -> StatsSummary:
    """Build a period summary from individual aggregator results.

    Args:
        period: The lookback period; its nominal length is the per-day denominator.
        wake: Wake window result.
        nights: Night sleep result.
        naps: Nap result.
        feeding: Feeding result (also decides the summary's display unit).
        diapers: Diaper result.

    Returns:
        A populated StatsSummary.  Missing results leave their metrics at 0.
    """
    days = Period.parse(period).days
    values: dict[str, Any] = {"period_days": days}

    if wake is not None:
        values["avg_wake_window_minutes"] = round_half_up(wake.average_minutes)

    if naps is not None:
        values["avg_nap_minutes"] = round_half_up(naps.average_minutes)

    if nights is not None:
        values["avg_night_sleep_minutes"] = round_half_up(nights.average_minutes)
        values["avg_night_wakings"] = round_half_up(nights.average_wakings, 1)

    if feeding is not None:
        values["avg_feedings_per_day"] = round_half_up(feeding.per_day(days), 1)
        values["avg_feed_amount"] = round_half_up(feeding.average_amount, 1)
        values["display_unit"] = feeding.display_unit

    if diapers is not None:
        values["avg_diaper_changes_per_day"] = round_half_up(diapers.changes_per_day(days), 1)
        values["avg_poops_per_day"] = round_half_up(diapers.poops_per_day(days), 1)

    return StatsSummary(**values)
