"""User settings relevant to the stats view.

Settings are read from the tracker's settings JSON, using its key names:

    {"defaultBottleUnit": "ML", "timezone": "America/Chicago",
     "mainPeriod": "7day", "comparePeriod": "14day"}

Only ``ML`` selects milliliters; any other bottle unit falls back to ounces.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from babystats.analytics.feeding import DEFAULT_DISPLAY_UNIT
from babystats.analytics.windows import Period
from babystats.records import VolumeUnit

DEFAULT_MAIN_PERIOD = Period.SEVEN_DAYS
DEFAULT_COMPARE_PERIOD = Period.FOURTEEN_DAYS


@dataclass(frozen=True)
class Settings:
    display_unit: VolumeUnit = DEFAULT_DISPLAY_UNIT
    timezone: str | None = None
    main_period: Period = DEFAULT_MAIN_PERIOD
    compare_period: Period = DEFAULT_COMPARE_PERIOD


def display_unit_from(value: object) -> VolumeUnit:
    """Resolve a bottle unit setting to OZ or ML."""
    if isinstance(value, str) and value.strip().upper() == VolumeUnit.ML.value:
        return VolumeUnit.ML
    return VolumeUnit.OZ


def load_settings(path: str | Path | None) -> Settings:
    """Load settings from *path*; a missing path or file yields defaults.

    The settings endpoint's envelope (``{"success": ..., "data": {...}}``) is
    unwrapped when present.

    Raises:
        ValueError: If the file is not valid JSON or a period is unknown.
    """
    if path is None:
        return Settings()
    path = Path(path)
    if not path.exists():
        return Settings()

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid settings file {path.name}: {e}") from e
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        data = data["data"]
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings file {path.name}: expected an object")

    return Settings(
        display_unit=display_unit_from(data.get("defaultBottleUnit")),
        timezone=data.get("timezone") or None,
        main_period=Period.parse(data.get("mainPeriod", DEFAULT_MAIN_PERIOD)),
        compare_period=Period.parse(data.get("comparePeriod", DEFAULT_COMPARE_PERIOD)),
    )
