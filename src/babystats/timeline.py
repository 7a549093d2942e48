"""Read timeline exports into tagged activity records.

The tracker's timeline endpoint returns ``{"success": true, "data": [...]}``
where each item is a plain JSON object and the activity kind is implied by
which fields are present:

    sleep   -- startTime + type NAP/NIGHT
    feed    -- time + type BOTTLE/BREAST/SOLIDS
    diaper  -- time + type WET/DIRTY/BOTH

Other kinds on the timeline (notes, baths, pumps, milestones, measurements,
medicine) are not used by the analytics engine and are skipped.
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import Any, Iterable

from dateutil import parser as date_parser
from dateutil import tz

from babystats.analytics.windows import MAX_PERIOD
from babystats.records import (
    ActivityRecord,
    DiaperEvent,
    DiaperKind,
    FeedEvent,
    FeedKind,
    SleepSession,
    SleepType,
    VolumeUnit,
)

_SLEEP_TYPES = {t.value for t in SleepType}
_FEED_TYPES = {t.value for t in FeedKind}
_DIAPER_TYPES = {t.value for t in DiaperKind}


class TimelineError(ValueError):
    """A timeline export or one of its items could not be interpreted."""


def _parse_time(value: Any, field: str, tzinfo_: tzinfo | None) -> datetime:
    if not isinstance(value, str) or not value:
        raise TimelineError(f"Missing or invalid {field!r}: {value!r}")
    try:
        dt = date_parser.isoparse(value)
    except ValueError as e:
        raise TimelineError(f"Unparseable {field!r}: {value!r}") from e

    if tzinfo_ is not None:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=tz.UTC)
        dt = dt.astimezone(tzinfo_)
    return dt


def _parse_amount(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TimelineError(f"Invalid feed amount: {value!r}")
    return float(value)


def parse_activity(item: dict[str, Any], tzinfo_: tzinfo | None = None) -> ActivityRecord | None:
    """Convert one timeline item into an explicitly tagged record.

    Args:
        item: A single object from the timeline ``data`` list.
        tzinfo_: Zone to localize timestamps into.  Naive timestamps are taken
            as UTC first.  None leaves timestamps as parsed.

    Returns:
        The record, or None for activity kinds the engine does not use.

    Raises:
        TimelineError: If a sleep/feed/diaper item is malformed.
    """
    if not isinstance(item, dict):
        raise TimelineError(f"Timeline item is not an object: {item!r}")

    kind = item.get("type")
    baby_id = item.get("babyId")

    if "startTime" in item and kind in _SLEEP_TYPES:
        if not baby_id:
            raise TimelineError("Sleep entry without babyId")
        end = item.get("endTime")
        duration = item.get("duration")
        return SleepSession(
            subject_id=str(baby_id),
            start_time=_parse_time(item["startTime"], "startTime", tzinfo_),
            end_time=_parse_time(end, "endTime", tzinfo_) if end else None,
            duration_minutes=float(duration) if isinstance(duration, (int, float)) else None,
            sleep_type=SleepType(kind),
        )

    if "time" not in item:
        return None

    if kind in _FEED_TYPES:
        if not baby_id:
            raise TimelineError("Feed entry without babyId")
        unit = item.get("unitAbbr")
        try:
            amount_unit = VolumeUnit(unit.upper()) if unit else None
        except (AttributeError, ValueError) as e:
            raise TimelineError(f"Unknown unit {unit!r}") from e
        return FeedEvent(
            subject_id=str(baby_id),
            time=_parse_time(item["time"], "time", tzinfo_),
            feed_kind=FeedKind(kind),
            amount=_parse_amount(item.get("amount")),
            amount_unit=amount_unit,
        )

    if kind in _DIAPER_TYPES:
        if not baby_id:
            raise TimelineError("Diaper entry without babyId")
        return DiaperEvent(
            subject_id=str(baby_id),
            time=_parse_time(item["time"], "time", tzinfo_),
            diaper_kind=DiaperKind(kind),
        )

    return None


def parse_timeline(
    items: Iterable[Any],
    tzinfo_: tzinfo | None = None,
    verbose: bool = False,
) -> list[ActivityRecord]:
    """Parse many timeline items, skipping (and optionally reporting) bad ones."""
    records: list[ActivityRecord] = []
    for idx, item in enumerate(items):
        try:
            rec = parse_activity(item, tzinfo_)
        except TimelineError as e:
            if verbose:
                print(f"  [item {idx}] {e}, skipping")
            continue
        if rec is not None:
            records.append(rec)
    return records


def load_timeline(
    path: str | Path,
    zone: str | tzinfo | None = None,
    verbose: bool = False,
) -> list[ActivityRecord]:
    """Load a timeline export from disk.

    Accepts either the API envelope or a bare JSON list of items.

    Args:
        path: Path to the JSON export.
        zone: Zone (or IANA name, e.g. "America/Chicago") to localize
            timestamps into.
        verbose: If True, print a line for every skipped malformed item.

    Raises:
        TimelineError: If the file is not JSON, the envelope reports failure,
            or *zone* is an unknown name.
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise TimelineError(f"{path.name} is not valid JSON: {e}") from e

    if isinstance(payload, dict):
        if not payload.get("success", False):
            msg = payload.get("error") or payload.get("message") or "unknown error"
            raise TimelineError(f"Timeline export reports failure: {msg}")
        items = payload.get("data") or []
    elif isinstance(payload, list):
        items = payload
    else:
        raise TimelineError(f"Unexpected timeline payload in {path.name}")

    tzinfo_ = zone
    if isinstance(zone, str):
        tzinfo_ = tz.gettz(zone)
        if tzinfo_ is None:
            raise TimelineError(f"Unknown timezone {zone!r}")

    records = parse_timeline(items, tzinfo_, verbose)
    if verbose:
        print(f"Loaded {len(records)} activities from {path.name} ({len(items)} items)")
    return records


def select_recent(
    records: Iterable[ActivityRecord],
    now: datetime,
    days: int = MAX_PERIOD.days,
) -> list[ActivityRecord]:
    """Records whose defining timestamp falls within the last *days* of *now*."""
    cutoff = now - timedelta(days=days)
    return [r for r in records if cutoff <= r.time <= now]
