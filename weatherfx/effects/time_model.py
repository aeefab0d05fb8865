from __future__ import annotations

"""
Day-cycle helpers driven by a UTC instant or a raw time-of-day fraction.

The timestamp variants reduce to the fraction variants so both paths agree
exactly for the same instant.
"""

from datetime import datetime, timezone
from typing import Optional, Union

Timestamp = Union[str, datetime, None]

DEFAULT_TIME_OF_DAY = 0.5
DEFAULT_MOON_PHASE = 0.5
DEFAULT_SUN_ALTITUDE = 0.5

SYNODIC_MONTH_DAYS = 29.530588853
REFERENCE_NEW_MOON = datetime(2000, 1, 6, tzinfo=timezone.utc)


def parse_timestamp(value: Timestamp) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime, or None when absent."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        text = str(value).strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def time_of_day(timestamp: Timestamp = None) -> float:
    """0 = midnight, 0.25 = 06:00, 0.5 = noon, 0.75 = 18:00 (UTC)."""
    moment = parse_timestamp(timestamp)
    if moment is None:
        return DEFAULT_TIME_OF_DAY
    return (moment.hour + moment.minute / 60) / 24


def moon_phase(timestamp: Timestamp = None) -> float:
    """0 = new moon, 0.5 = full moon.  Stable for the whole UTC day."""
    moment = parse_timestamp(timestamp)
    if moment is None:
        return DEFAULT_MOON_PHASE
    midnight = moment.replace(hour=0, minute=0, second=0, microsecond=0)
    days = (midnight - REFERENCE_NEW_MOON).total_seconds() / 86400
    return (days % SYNODIC_MONTH_DAYS) / SYNODIC_MONTH_DAYS


def sun_altitude_from_fraction(fraction: float) -> float:
    # Generic cycle: rises 06:00, peaks 12:00, sets 18:00.
    hours = (fraction % 1.0) * 24
    if hours < 6:
        return -1 + hours / 6
    if hours < 12:
        return (hours - 6) / 6
    if hours < 18:
        return 1 - (hours - 12) / 6
    return -(hours - 18) / 6


def sun_altitude(timestamp: Timestamp = None) -> float:
    if parse_timestamp(timestamp) is None:
        return DEFAULT_SUN_ALTITUDE
    return sun_altitude_from_fraction(time_of_day(timestamp))


def is_night(altitude: float) -> bool:
    return altitude < 0


__all__ = [
    "DEFAULT_MOON_PHASE",
    "DEFAULT_SUN_ALTITUDE",
    "DEFAULT_TIME_OF_DAY",
    "REFERENCE_NEW_MOON",
    "SYNODIC_MONTH_DAYS",
    "Timestamp",
    "is_night",
    "moon_phase",
    "parse_timestamp",
    "sun_altitude",
    "sun_altitude_from_fraction",
    "time_of_day",
]
