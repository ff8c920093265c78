"""Unit conversion: temperatures and great-circle distance.

Every temperature conversion takes ``rounded`` and ``precision`` and rounds
half away from zero, so ``73.985`` shown to two places is ``73.99``.
"""

from __future__ import annotations

import math

from esi_utility.numbers import round_half_up

EARTH_RADIUS = 6_370_986  # meters
METERS_TO_KILOMETERS = 1_000
METERS_TO_MILES = 1_609.344


def _finish(result: float, rounded: bool, precision: int) -> float:
    return float(round_half_up(result, precision)) if rounded else result


# ============================================================================
#                               Celsius / Fahrenheit
# ============================================================================


def fahrenheit_to_celsius(fahrenheit: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((fahrenheit - 32) / 1.8, rounded, precision)


def celsius_to_fahrenheit(celsius: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(celsius * 1.8 + 32, rounded, precision)


# ============================================================================
#                               Kelvin
# ============================================================================


def celsius_to_kelvin(celsius: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(celsius + 273.15, rounded, precision)


def kelvin_to_celsius(kelvin: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(kelvin - 273.15, rounded, precision)


def fahrenheit_to_kelvin(fahrenheit: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((fahrenheit - 32) / 1.8 + 273.15, rounded, precision)


def kelvin_to_fahrenheit(kelvin: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((kelvin - 273.15) * 1.8 + 32, rounded, precision)


# ============================================================================
#                               Rankine
# ============================================================================


def fahrenheit_to_rankine(fahrenheit: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(fahrenheit + 459.67, rounded, precision)


def rankine_to_fahrenheit(rankine: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(rankine - 459.67, rounded, precision)


def celsius_to_rankine(celsius: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish(celsius * 1.8 + 491.67, rounded, precision)


def rankine_to_celsius(rankine: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((rankine - 491.67) / 1.8, rounded, precision)


def kelvin_to_rankine(kelvin: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((kelvin - 273.15) * 1.8 + 491.67, rounded, precision)


def rankine_to_kelvin(rankine: float, rounded: bool = True, precision: int = 2) -> float:
    return _finish((rankine - 491.67) / 1.8 + 273.15, rounded, precision)


# Lookup used by the CLI ``convert`` command: (from, to) -> function.
TEMPERATURE_CONVERSIONS = {
    ("celsius", "fahrenheit"): celsius_to_fahrenheit,
    ("celsius", "kelvin"): celsius_to_kelvin,
    ("celsius", "rankine"): celsius_to_rankine,
    ("fahrenheit", "celsius"): fahrenheit_to_celsius,
    ("fahrenheit", "kelvin"): fahrenheit_to_kelvin,
    ("fahrenheit", "rankine"): fahrenheit_to_rankine,
    ("kelvin", "celsius"): kelvin_to_celsius,
    ("kelvin", "fahrenheit"): kelvin_to_fahrenheit,
    ("kelvin", "rankine"): kelvin_to_rankine,
    ("rankine", "celsius"): rankine_to_celsius,
    ("rankine", "fahrenheit"): rankine_to_fahrenheit,
    ("rankine", "kelvin"): rankine_to_kelvin,
}


# ============================================================================
#                               Distance
# ============================================================================


def _number_format(value: float, precision: int) -> str:
    return f"{round_half_up(value, precision):,f}"


def haversine_distance(
    start_latitude: float,
    start_longitude: float,
    end_latitude: float,
    end_longitude: float,
    precision: int = 0,
) -> dict[str, str]:
    """Great-circle distance between two points.

    Example:
        >>> haversine_distance(37.7749, -122.4194, 34.0522, -118.2437)
        {'meters': '559,119', 'kilometers': '559', 'miles': '347'}

    Args:
        start_latitude: Latitude of the first point, in degrees.
        start_longitude: Longitude of the first point, in degrees.
        end_latitude: Latitude of the second point, in degrees.
        end_longitude: Longitude of the second point, in degrees.
        precision: Digits after the decimal point.

    Returns:
        dict[str, str]: ``meters``, ``kilometers`` and ``miles``, each
        formatted with comma thousands separators.
    """
    lat1 = math.radians(start_latitude)
    lon1 = math.radians(start_longitude)
    lat2 = math.radians(end_latitude)
    lon2 = math.radians(end_longitude)

    # Square of half the chord length between the points.
    square = (
        math.sin((lat2 - lat1) / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2) ** 2
    )
    central_angle = 2 * math.atan2(math.sqrt(square), math.sqrt(1 - square))
    distance = EARTH_RADIUS * central_angle

    return {
        "meters": _number_format(distance, precision),
        "kilometers": _number_format(distance / METERS_TO_KILOMETERS, precision),
        "miles": _number_format(distance / METERS_TO_MILES, precision),
    }
