"""Unit commands: ``size``, ``convert`` and ``distance``."""

from __future__ import annotations

import logging

import click

from esi_utility import conversion, numbers

from .helpers import reporting_errors

logger = logging.getLogger(__name__)

TEMPERATURE_UNITS = ("celsius", "fahrenheit", "kelvin", "rankine")


@click.command()
@click.argument("num_bytes", metavar="BYTES", type=click.IntRange(min=0))
@click.option(
    "--precision",
    "-p",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Digits after the decimal point.",
)
@click.option(
    "--standard",
    type=click.Choice(["binary", "metric"], case_sensitive=False),
    default="binary",
    show_default=True,
    help="binary: powers of 1024 (KiB, MiB); metric: powers of 1000 (kB, MB).",
)
def size(num_bytes: int, precision: int, standard: str) -> None:
    """Format BYTES as a human-readable size.

    \b
    Example:
        $ esi-utility size 25151251 -p 2
        23.99 MiB
    """
    with reporting_errors():
        click.echo(numbers.size_format(num_bytes, precision, standard.lower()))


@click.command()
@click.argument("value", type=float)
@click.argument("from_unit", metavar="FROM", type=click.Choice(TEMPERATURE_UNITS, case_sensitive=False))
@click.argument("to_unit", metavar="TO", type=click.Choice(TEMPERATURE_UNITS, case_sensitive=False))
@click.option(
    "--precision",
    "-p",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="Digits after the decimal point.",
)
def convert(value: float, from_unit: str, to_unit: str, precision: int) -> None:
    """Convert a temperature VALUE from one scale to another.

    \b
    Example:
        $ esi-utility convert 23.33 celsius fahrenheit
        73.99
    """
    from_unit, to_unit = from_unit.lower(), to_unit.lower()
    if from_unit == to_unit:
        raise click.UsageError("FROM and TO must be different units.")

    func = conversion.TEMPERATURE_CONVERSIONS[(from_unit, to_unit)]
    logger.debug("Converting %s from %s to %s with %s", value, from_unit, to_unit, func.__name__)

    click.echo(f"{func(value, precision=precision):.{precision}f}")


@click.command()
@click.argument("start_latitude", metavar="LAT1", type=click.FloatRange(-90, 90))
@click.argument("start_longitude", metavar="LON1", type=click.FloatRange(-180, 180))
@click.argument("end_latitude", metavar="LAT2", type=click.FloatRange(-90, 90))
@click.argument("end_longitude", metavar="LON2", type=click.FloatRange(-180, 180))
@click.option(
    "--precision",
    "-p",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Digits after the decimal point.",
)
def distance(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    start_latitude: float,
    start_longitude: float,
    end_latitude: float,
    end_longitude: float,
    precision: int,
) -> None:
    """Great-circle distance between (LAT1, LON1) and (LAT2, LON2).

    Negative coordinates must follow ``--`` so they are not read as options.

    \b
    Example:
        $ esi-utility distance -- 37.7749 -122.4194 34.0522 -118.2437
        meters: 559,119
        kilometers: 559
        miles: 347
    """
    result = conversion.haversine_distance(
        start_latitude, start_longitude, end_latitude, end_longitude, precision
    )
    for unit, amount in result.items():
        click.echo(f"{unit}: {amount}")
