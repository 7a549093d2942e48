"""Activity record types consumed by the analytics engine.

Three record kinds are tracked for a baby:

- sleep sessions (start/end, end is None while the baby is still asleep)
- feedings (bottle, breast, solids; optional amount + unit)
- diaper changes (wet, dirty, both)

Every record carries an explicit :class:`ActivityKind` tag and exposes a
``time`` property holding its defining timestamp: the start for sleep,
the event time for everything else.  Timestamps are expected to already be
in the baby's local calendar.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Union


class ActivityKind(str, Enum):
    """Discriminant for the record union."""

    SLEEP = "sleep"
    FEED = "feed"
    DIAPER = "diaper"


class SleepType(str, Enum):
    NAP = "NAP"
    NIGHT = "NIGHT"


class FeedKind(str, Enum):
    BOTTLE = "BOTTLE"
    BREAST = "BREAST"
    SOLIDS = "SOLIDS"


class VolumeUnit(str, Enum):
    """Measurement units a feed amount can be logged in."""

    OZ = "OZ"
    ML = "ML"
    TBSP = "TBSP"
    G = "G"


class DiaperKind(str, Enum):
    WET = "WET"
    DIRTY = "DIRTY"
    BOTH = "BOTH"


# Units that can be normalized into a bottle volume
LIQUID_UNITS = (VolumeUnit.OZ, VolumeUnit.ML)


@dataclass(frozen=True)
class SleepSession:
    """A single sleep, possibly still in progress."""

    subject_id: str
    start_time: datetime
    end_time: datetime | None = None
    duration_minutes: float | None = None  # as reported upstream, never trusted
    sleep_type: SleepType | None = None

    kind = ActivityKind.SLEEP

    @property
    def time(self) -> datetime:
        return self.start_time

    @property
    def is_complete(self) -> bool:
        return self.end_time is not None


@dataclass(frozen=True)
class FeedEvent:
    """A feeding.  Amount/unit only carry meaning for bottle and solids."""

    subject_id: str
    time: datetime
    feed_kind: FeedKind
    amount: float | None = None
    amount_unit: VolumeUnit | None = None

    kind = ActivityKind.FEED


@dataclass(frozen=True)
class DiaperEvent:
    subject_id: str
    time: datetime
    diaper_kind: DiaperKind

    kind = ActivityKind.DIAPER

    @property
    def is_poop(self) -> bool:
        return self.diaper_kind in (DiaperKind.DIRTY, DiaperKind.BOTH)


ActivityRecord = Union[SleepSession, FeedEvent, DiaperEvent]
