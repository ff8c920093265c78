"""Parsing for the repeatable ``-L NAME=LEVEL`` option.

Values may arrive as repeated flags (a tuple) or as a single comma/space
separated string from ``ESI_UTILITY_LOGGER_LEVELS``; both normalise to the
same ``{logger_name: numeric_level}`` mapping, layered over the defaults.
"""

from __future__ import annotations

import logging
import re

import click

# Libraries that are chatty at DEBUG: Pillow's plugin loader and pytz.
DEFAULT_LIB_LEVELS = {"PIL": logging.WARNING, "pytz": logging.WARNING}

_ITEM_SPLIT_REGEX = re.compile(r"[,\s]+")


def _normalize_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten the raw option value into individual ``NAME=LEVEL`` strings."""
    if not value:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _ITEM_SPLIT_REGEX.split(chunk) if item]


def _to_level(text: str) -> int:
    level = logging.getLevelName(text.strip().upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {text}")
    return level


def parse_log_level(
    ctx: click.Context | None,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback: ``("PIL=INFO", "esi_utility.dates=DEBUG")`` -> ``{name: level}``.

    Later entries override earlier ones and both override
    :data:`DEFAULT_LIB_LEVELS`. Level names are case-insensitive.

    Raises:
        click.BadParameter: If an item is not ``NAME=LEVEL`` or names an
            unknown level.
    """
    levels = dict(DEFAULT_LIB_LEVELS)

    for item in _normalize_items(value):
        name, sep, level_text = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = _to_level(level_text)

    return levels
