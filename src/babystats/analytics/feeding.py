"""Feeding frequency and volume.

Every feed counts toward the per-day frequency regardless of kind.  Only
amounts logged in a liquid unit (oz or ml) feed the volume average; they are
first normalized into the caller's display unit.  Solids logged in tbsp or g
count as a feeding but never as volume.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Sequence

from babystats.records import LIQUID_UNITS, ActivityRecord, FeedEvent, VolumeUnit

ML_PER_OZ = 29.5735

DEFAULT_DISPLAY_UNIT = VolumeUnit.OZ


def convert_volume(amount: float, from_unit: VolumeUnit, to_unit: VolumeUnit) -> float:
    """Convert a liquid amount between oz and ml.

    Raises:
        ValueError: If either unit is not a liquid unit.
    """
    if from_unit not in LIQUID_UNITS or to_unit not in LIQUID_UNITS:
        raise ValueError(f"Cannot convert {from_unit.value} to {to_unit.value}")
    if from_unit == to_unit:
        return amount
    if from_unit == VolumeUnit.ML:
        return amount / ML_PER_OZ
    return amount * ML_PER_OZ


@dataclass
class FeedingResult:
    """Feeding counts and normalized volume over a period."""

    feeding_count: int = 0
    total_amount: float = 0.0
    amount_count: int = 0
    display_unit: VolumeUnit = DEFAULT_DISPLAY_UNIT

    @property
    def average_amount(self) -> float:
        if self.amount_count == 0:
            return 0.0
        return self.total_amount / self.amount_count

    def per_day(self, days_in_period: int) -> float:
        if days_in_period <= 0:
            return 0.0
        return self.feeding_count / days_in_period

    def __repr__(self) -> str:
        return (
            f"FeedingResult(feeds={self.feeding_count}, "
            f"avg_amount={self.average_amount:.1f}{self.display_unit.value.lower()})"
        )


def aggregate_feedings(
    days: Mapping[date, Sequence[ActivityRecord]],
    display_unit: VolumeUnit | str = DEFAULT_DISPLAY_UNIT,
) -> FeedingResult:
    """Count feeds and accumulate liquid volume in *display_unit*.

    Args:
        days: Activities bucketed by calendar day.
        display_unit: OZ or ML; every liquid amount is normalized into it.
    """
    display_unit = VolumeUnit(display_unit)
    if display_unit not in LIQUID_UNITS:
        raise ValueError(f"Display unit must be OZ or ML, got {display_unit.value}")

    result = FeedingResult(display_unit=display_unit)

    for day_activities in days.values():
        feeds = [a for a in day_activities if isinstance(a, FeedEvent)]
        result.feeding_count += len(feeds)

        for feed in feeds:
            # A zero amount means "not recorded"
            if not feed.amount or feed.amount_unit not in LIQUID_UNITS:
                continue
            result.total_amount += convert_volume(feed.amount, feed.amount_unit, display_unit)
            result.amount_count += 1

    return result
