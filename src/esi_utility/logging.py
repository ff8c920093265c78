"""Logging setup for the ESI Utility command line.

Library modules only ever call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, and nowhere else.

Two handlers are provided:

- a Rich console handler on stderr whose level follows ``-v``/``-q``, and
- a "flight recorder": an in-memory buffer of DEBUG records that is dumped
  to a file when something at WARNING or above happens (or on exit, if
  forced), so a failing run leaves a full trace behind without making the
  console noisy.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import dateutil
import PIL
import pytz
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "esi_utility"

BASE_LEVEL = logging.WARNING

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]


class ThirdPartyPrefixFilter(logging.Filter):
    """Tag records from other packages with ``[package]``.

    Sets ``record.prefix`` to e.g. ``"[PIL]"`` for ``PIL.PngImagePlugin``
    and to ``""`` for our own loggers. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def verbosity_to_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """Map ``-v``/``-q`` repetitions onto a logging level.

    Each ``-v`` moves one step down from WARNING, each ``-q`` one step up.
    The result is clamped to ``DEBUG..CRITICAL``.
    """
    level = BASE_LEVEL - (10 * verbose_count) + (10 * quiet_count)
    return max(logging.DEBUG, min(logging.CRITICAL, level))


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level shown (forced to DEBUG in ``debug_mode``).
        debug_mode: Show timestamps, logger names and source locations.
        color: Allow colour; mirrors click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: Ready to attach to the root logger.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    handler = RichHandler(
        level=logging.DEBUG if debug_mode else level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter(fmt="%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())

    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder.

    Up to ``capacity`` records are kept in memory and written to ``path``
    (overwriting it) as soon as a record at ``flush_level`` or above arrives,
    or when the handler closes if ``flush_on_close`` is set.

    Args:
        path: File the buffer is dumped to.
        capacity: Number of records to keep.
        flush_level: Level that triggers a dump.
        flush_on_close: Dump on close even if nothing went wrong.

    Returns:
        MemoryHandler: Buffering handler with a FileHandler target.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8", delay=True)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(process)d:%(threadName)s] "
            "%(levelname)s %(name)s:%(lineno)d: %(message)s"
        )
    )

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def configure_logging(  # pylint: disable=too-many-arguments
    *,
    level: int,
    debug_mode: bool = False,
    color: bool = True,
    log_path: Path | None = None,
    flight_capacity: int = 2000,
    force_flush: bool = False,
    logger_levels: dict[str, int] | None = None,
) -> list[logging.Handler]:
    """Install the console handler (and optionally the flight recorder) on the root logger.

    The root logger itself is set to DEBUG; each handler filters on its own
    level. Entries in ``logger_levels`` set the level of individual loggers,
    which affects both handlers.

    Args:
        level: Console level.
        debug_mode: See :func:`config_console_handler`.
        color: See :func:`config_console_handler`.
        log_path: Flight-recorder file; ``None`` disables the recorder.
        flight_capacity: Flight-recorder buffer size.
        force_flush: Dump the flight recorder on exit regardless of level.
        logger_levels: ``{logger_name: level}`` overrides.

    Returns:
        list[logging.Handler]: The installed handlers.
    """
    handlers: list[logging.Handler] = [
        config_console_handler(level=level, debug_mode=debug_mode, color=color)
    ]

    if log_path is not None:
        handlers.append(
            config_flight_recorder(
                path=log_path, capacity=flight_capacity, flush_on_close=force_flush
            )
        )

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(lvl)

    return handlers


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line INFO summary followed by DEBUG diagnostics.

    The diagnostics cover the interpreter, platform, process, working
    directory, versions of the imaging and timezone libraries, installed
    handlers, flight-recorder settings and per-logger overrides.
    """
    logger.info(
        "ESI Utility %s: console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Pillow: %s", PIL.__version__)
    logger.debug("pytz: %s (tzdata %s)", pytz.__version__, pytz.OLSON_VERSION)
    logger.debug("python-dateutil: %s", dateutil.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])

    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            str(log_path) if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )

    if logger_levels:
        logger.debug(
            "Per-logger overrides: %s",
            {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()},
        )
    else:
        logger.debug("Per-logger overrides: <none>")
