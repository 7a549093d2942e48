"""Diaper change frequency and composition."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Sequence

from babystats.records import ActivityRecord, DiaperEvent


@dataclass
class DiaperResult:
    """Diaper counts over a period."""

    change_count: int = 0
    poop_count: int = 0  # dirty or both

    def changes_per_day(self, days_in_period: int) -> float:
        if days_in_period <= 0:
            return 0.0
        return self.change_count / days_in_period

    def poops_per_day(self, days_in_period: int) -> float:
        if days_in_period <= 0:
            return 0.0
        return self.poop_count / days_in_period

    def __repr__(self) -> str:
        return f"DiaperResult(changes={self.change_count}, poops={self.poop_count})"


def aggregate_diapers(days: Mapping[date, Sequence[ActivityRecord]]) -> DiaperResult:
    """Count diaper changes and the subset containing solid waste."""
    result = DiaperResult()
    for day_activities in days.values():
        for a in day_activities:
            if isinstance(a, DiaperEvent):
                result.change_count += 1
                if a.is_poop:
                    result.poop_count += 1
    return result
