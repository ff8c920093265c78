"""Date and timezone helpers.

Timezone names are validated against the Olson database bundled with
:mod:`pytz`; calendar differences are computed with
:class:`dateutil.relativedelta.relativedelta` so months and years follow the
calendar rather than a fixed number of seconds.
"""

from __future__ import annotations

import functools
import logging
import math
import re
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytz
from dateutil.relativedelta import relativedelta

from esi_utility.errors import InvalidArgumentError, InvalidTimezoneError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

# Unix timestamps between 8 and 13 digits (seconds through milliseconds).
VALIDATE_TIMESTAMP_REGEX = re.compile(r"^\d{8,13}$")

NOT_AVAILABLE = "N/A"

# ISO 6709 coordinates as written in zone.tab: +DDMM+DDDMM or +DDMMSS+DDDMMSS
_COORDINATES_REGEX = re.compile(
    r"^(?P<lat_sign>[+-])(?P<lat_deg>\d{2})(?P<lat_min>\d{2})(?P<lat_sec>\d{2})?"
    r"(?P<lon_sign>[+-])(?P<lon_deg>\d{3})(?P<lon_min>\d{2})(?P<lon_sec>\d{2})?$"
)

_UNITS = ("year", "month", "week", "day", "hour", "minute", "second")


# ============================================================================
#                               Validation
# ============================================================================


def validate_timestamp(timestamp: Any) -> bool:
    """Return True for a positive integer timestamp of 8 to 13 digits."""
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        return False
    if timestamp <= 0:
        return False
    return VALIDATE_TIMESTAMP_REGEX.match(str(timestamp)) is not None


def valid_timezone(timezone: str) -> bool:
    """Return True if ``timezone`` is a known timezone name."""
    return timezone in pytz.all_timezones_set


def _resolve_timezone(timezone: str) -> pytz.BaseTzInfo:
    name = timezone or DEFAULT_TIMEZONE
    if not valid_timezone(name):
        raise InvalidTimezoneError(name)
    return pytz.timezone(name)


# ============================================================================
#                               Time difference
# ============================================================================


def _pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _breakdown(delta: relativedelta) -> list[tuple[str, int]]:
    """Split a relativedelta into (unit, count) pairs, weeks replacing days >= 7."""
    weeks = math.ceil(delta.days / 7) if delta.days >= 7 else 0
    days = 0 if weeks else delta.days
    counts = (delta.years, delta.months, weeks, days, delta.hours, delta.minutes, delta.seconds)
    return list(zip(_UNITS, counts))


def time_difference(
    timestamp_from: int,
    timestamp_to: int = 0,
    timezone: str = DEFAULT_TIMEZONE,
    append: str = " old",
    extended_output: bool = False,
    clock: Callable[[], float] = time.time,
) -> str:
    """Format the difference between two timestamps for humans.

    Example:
        >>> time_difference(1_699_999_880, 1_700_000_000)
        '2 minutes old'

    Args:
        timestamp_from: Start of the interval (Unix seconds).
        timestamp_to: End of the interval. ``0`` (or any invalid timestamp)
            means "now" as reported by ``clock``.
        timezone: Zone used for calendar arithmetic. Empty means ``UTC``.
        append: Suffix added to the formatted string.
        extended_output: If True, every non-zero unit is listed
            (``"1 year 2 months 4 weeks"``); otherwise only the largest.
        clock: Source of the current time.

    Returns:
        str: The formatted difference followed by ``append``.

    Raises:
        InvalidTimezoneError: If ``timezone`` is unknown.
        InvalidArgumentError: If ``timestamp_from`` is not before ``timestamp_to``.
    """
    tz = _resolve_timezone(timezone)

    if not validate_timestamp(timestamp_to):
        logger.debug("Invalid timestamp_to %r; using current time", timestamp_to)
        timestamp_to = int(clock())
    if not validate_timestamp(timestamp_from):
        logger.debug("Invalid timestamp_from %r; using current time", timestamp_from)
        timestamp_from = int(clock())

    if timestamp_from >= timestamp_to:
        raise InvalidArgumentError("timestamp_from needs to be less than timestamp_to.")

    start = datetime.fromtimestamp(timestamp_from, tz=tz)
    end = datetime.fromtimestamp(timestamp_to, tz=tz)
    parts = [(unit, count) for unit, count in _breakdown(relativedelta(end, start)) if count]

    if not extended_output:
        parts = parts[:1]

    return " ".join(_pluralize(count, unit) for unit, count in parts) + append


# ============================================================================
#                               Timezone info
# ============================================================================


def _parse_coordinate(sign: str, degrees: str, minutes: str, seconds: str | None) -> float:
    value = int(degrees) + int(minutes) / 60 + int(seconds or 0) / 3600
    return round(-value if sign == "-" else value, 5)


@functools.lru_cache(maxsize=1)
def _zone_locations() -> dict[str, tuple[str, float, float]]:
    """Read country code and coordinates for each zone from pytz's zone.tab."""
    locations: dict[str, tuple[str, float, float]] = {}

    with pytz.open_resource("zone.tab") as fh:
        for raw in fh:
            line = raw.decode("utf-8").strip()
            if not line or line.startswith("#"):
                continue

            country, coordinates, zone = line.split("\t")[:3]
            match = _COORDINATES_REGEX.match(coordinates)
            if match is None:
                continue

            locations[zone] = (
                country,
                _parse_coordinate(*match.group("lat_sign", "lat_deg", "lat_min", "lat_sec")),
                _parse_coordinate(*match.group("lon_sign", "lon_deg", "lon_min", "lon_sec")),
            )

    logger.debug("Loaded %d zone locations from zone.tab", len(locations))
    return locations


def timezone_info(timezone: str = DEFAULT_TIMEZONE, now: datetime | None = None) -> dict[str, Any]:
    """Describe a timezone at a given instant.

    Args:
        timezone: Zone name. Empty means ``UTC``.
        now: Aware datetime to evaluate the zone at. Defaults to the current time.

    Returns:
        dict: ``offset`` (hours from UTC; an int when whole), ``country``,
        ``latitude``, ``longitude`` (``"N/A"`` when the zone has no location,
        e.g. ``UTC`` or ``EST``) and ``dst`` (bool).

    Raises:
        InvalidTimezoneError: If ``timezone`` is unknown.
    """
    tz = _resolve_timezone(timezone)
    local = (now or datetime.now(pytz.utc)).astimezone(tz)

    offset_hours = local.utcoffset().total_seconds() / 3600
    offset: int | float = int(offset_hours) if offset_hours.is_integer() else offset_hours

    country, latitude, longitude = _zone_locations().get(
        tz.zone, (NOT_AVAILABLE, NOT_AVAILABLE, NOT_AVAILABLE)
    )

    return {
        "offset": offset,
        "country": country,
        "latitude": latitude,
        "longitude": longitude,
        "dst": bool(local.dst()),
    }
