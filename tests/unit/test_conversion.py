"""Unit tests for :mod:`esi_utility.conversion`."""

import pytest

from esi_utility import conversion

# pylint: disable=magic-value-comparison


@pytest.mark.parametrize(
    ("func", "value", "expected"),
    [
        (conversion.celsius_to_fahrenheit, 23.33, 73.99),
        (conversion.celsius_to_kelvin, 23.33, 296.48),
        (conversion.celsius_to_rankine, 23.33, 533.66),
        (conversion.fahrenheit_to_celsius, 74, 23.33),
        (conversion.fahrenheit_to_kelvin, 73.99, 296.48),
        (conversion.fahrenheit_to_rankine, 73.99, 533.66),
        (conversion.kelvin_to_celsius, 296.48, 23.33),
        (conversion.kelvin_to_fahrenheit, 296.48, 73.99),
        (conversion.kelvin_to_rankine, 296.48, 533.66),
        (conversion.rankine_to_celsius, 533.66, 23.33),
        (conversion.rankine_to_fahrenheit, 533.66, 73.99),
        (conversion.rankine_to_kelvin, 533.66, 296.48),
    ],
)
def test_temperature_conversions(func, value, expected):
    """Every pair of scales converts to two decimal places by default."""
    assert func(value) == expected


def test_unrounded_conversion_keeps_full_precision():
    """rounded=False returns the raw result."""
    assert conversion.fahrenheit_to_celsius(74, rounded=False) == pytest.approx(23.3333333)


def test_precision_controls_decimal_places():
    """Rounding is half away from zero at the requested precision."""
    assert conversion.celsius_to_fahrenheit(23.33, precision=3) == 73.994
    assert conversion.celsius_to_fahrenheit(23.33, precision=0) == 74.0


def test_temperature_lookup_covers_every_pair():
    """Each ordered pair of distinct scales has a converter."""
    scales = ("celsius", "fahrenheit", "kelvin", "rankine")
    expected = {(a, b) for a in scales for b in scales if a != b}
    assert set(conversion.TEMPERATURE_CONVERSIONS) == expected


def test_haversine_distance_defaults_to_whole_units():
    """San Francisco to Los Angeles with comma thousands separators."""
    assert conversion.haversine_distance(37.7749, -122.4194, 34.0522, -118.2437) == {
        "meters": "559,119",
        "kilometers": "559",
        "miles": "347",
    }


def test_haversine_distance_with_precision():
    """Precision adds decimal places to every unit."""
    assert conversion.haversine_distance(37.7749, -122.4194, 34.0522, -118.2437, 2) == {
        "meters": "559,119.35",
        "kilometers": "559.12",
        "miles": "347.42",
    }


def test_haversine_distance_same_point_is_zero():
    """A point is zero metres from itself."""
    assert conversion.haversine_distance(10, 20, 10, 20)["meters"] == "0"
