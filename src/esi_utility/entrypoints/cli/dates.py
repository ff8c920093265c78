"""Date commands: ``time-diff`` and ``timezone``."""

from __future__ import annotations

import click

from esi_utility import dates
from esi_utility.config import Settings

from .helpers import reporting_errors, warn


@click.command("time-diff")
@click.argument("timestamp_from", metavar="FROM", type=int)
@click.argument("timestamp_to", metavar="[TO]", type=int, required=False, default=0)
@click.option(
    "--timezone",
    "-z",
    default=None,
    help="Zone used for calendar arithmetic. Defaults to ESI_UTILITY_TIMEZONE, then UTC.",
)
@click.option(
    "--extended/--short",
    default=False,
    help="List every non-zero unit instead of only the largest one.",
)
@click.pass_obj
def time_diff(
    settings: Settings,
    timestamp_from: int,
    timestamp_to: int,
    timezone: str | None,
    extended: bool,
) -> None:
    """Human-readable difference between two Unix timestamps.

    TO defaults to the current time.

    \b
    Example:
        $ esi-utility time-diff 1699913600 1700000000
        1 day old
    """
    with reporting_errors():
        click.echo(
            dates.time_difference(
                timestamp_from,
                timestamp_to,
                timezone=timezone or settings.timezone,
                extended_output=extended,
            )
        )


@click.command()
@click.argument("name", required=False, default=None)
@click.pass_obj
def timezone(settings: Settings, name: str | None) -> None:
    """Offset, country, coordinates and DST state of timezone NAME.

    NAME defaults to ESI_UTILITY_TIMEZONE, then UTC.
    """
    name = name or settings.timezone
    with reporting_errors():
        info = dates.timezone_info(name)

    click.echo(f"timezone: {name}")
    for key, value in info.items():
        click.echo(f"{key}: {value}")

    if info["country"] == dates.NOT_AVAILABLE:
        warn(f"No location data for {name}.")
