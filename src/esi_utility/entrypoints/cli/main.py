"""ESI Utility CLI entry point.

Defines the top-level ``esi-utility`` command (via Click-Extra), wires up
logging and settings, and registers the subcommands.

Available commands
- text: ``slugify``, ``camel-case``, ``length``
- units: ``size``, ``convert``, ``distance``
- dates: ``time-diff``, ``timezone``
- files: ``lines``, ``dir-size``, ``image-type``

Notes
- Results are printed to stdout; log output and status lines go to stderr.
- Settings (``ESI_UTILITY_ENCODING``, ``ESI_UTILITY_TIMEZONE``) are loaded
  once here and handed to subcommands through the Click context object.

Examples
    $ esi-utility --version
    $ esi-utility slugify "A simple title"
    $ esi-utility -vv time-diff 1700000000
"""

import logging
from pathlib import Path

import click
import click_extra as clickx
from platformdirs import user_log_dir

from esi_utility import __version__
from esi_utility.config import Settings, load_settings
from esi_utility.errors import InvalidSettingError
from esi_utility.logging import configure_logging, log_startup, verbosity_to_level

from .dates import time_diff, timezone
from .files import dir_size, image_type, lines
from .helpers import CommandError, hyperlink, parse_log_level
from .text import camel_case, length, slugify
from .units import convert, distance, size

logger = logging.getLogger(__name__)


HELP = """ESI Utility command-line interface.

    Everyday scripting helpers from the shell: slugs and camelCase, byte
    sizes and unit conversion, human-readable time differences and timezone
    details, line counts and directory sizes, and image type detection.
    """


EPILOG = "\b\n" + "\n".join(
    [
        f"{click.style('See Also:', fg='blue', bold=True, underline=True)}",
        "  Docs  : " + hyperlink("https://github.com/ericsizemore/utility#readme"),
        "  Issues: " + hyperlink("https://github.com/ericsizemore/utility/issues"),
    ]
)


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
    epilog=EPILOG,
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source locations on the console).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="File the flight recorder writes to.",
    default=Path(user_log_dir("esi-utility", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="ESI_UTILITY_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="ESI_UTILITY_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity (unaffected by -v/-q) "
        "and write them to --log-path when a WARNING/ERROR occurs, or on exit "
        "with --force-flush. Console verbosity is unchanged."
    ),
    default=True,
    envvar="ESI_UTILITY_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Always write the flight recorder buffer to --log-path on exit.",
    default=False,
    envvar="ESI_UTILITY_FORCE_FLUSH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set the minimum LEVEL for a specific logger (NAME=LEVEL). Applies to "
        "both console and flight recorder. Repeatable (e.g. -L PIL=INFO "
        "-L esi_utility.filesystem=DEBUG) or via ESI_UTILITY_LOGGER_LEVELS."
    ),
    default=("PIL=WARNING", "pytz=WARNING"),
    envvar="ESI_UTILITY_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def esi_utility(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """ESI Utility command-line interface."""

    level = verbosity_to_level(verbose_count, quiet_count)

    handlers = configure_logging(
        level=level,
        debug_mode=debug,
        color=ctx.color is not False,  # None or True => allow color
        log_path=log_path if flight_recorder else None,
        flight_capacity=flight_recorder_capacity,
        force_flush=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)

    if not isinstance(ctx.obj, Settings):
        try:
            ctx.obj = load_settings()
        except InvalidSettingError as e:
            raise CommandError(str(e)) from e

    logger.debug("Settings: %s", ctx.obj)


for command in (
    slugify,
    camel_case,
    length,
    size,
    convert,
    distance,
    time_diff,
    timezone,
    lines,
    dir_size,
    image_type,
):
    esi_utility.add_command(command)
