"""User-facing status lines for the ESI Utility CLI.

Results go to stdout; everything written here goes to **stderr** so piping
``esi-utility slugify ... | xargs`` stays clean. Glyphs fall back to ASCII
when stderr cannot encode them.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any

import click

from esi_utility.errors import UtilityError

from .terminal import supports_character

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
FAILURE = ("❌", "[X]")  # pragma: no mutate


def _glyph(pair: tuple[str, str]) -> str:
    emoji, fallback = pair
    return emoji if supports_character(emoji) else fallback


def caution_glyph() -> str:
    """``⚠️``, or ``[!]`` on terminals that cannot encode it."""
    return _glyph(CAUTION)


def error_glyph() -> str:
    """``❌``, or ``[X]``."""
    return _glyph(FAILURE)


def warn(msg: str) -> None:
    """Bold yellow warning on stderr, e.g. ``⚠️  Timezone has no location data.``"""
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def error(msg: str) -> None:
    """Bold red error on stderr, e.g. ``❌  Directory 'x' does not exist or is not readable.``"""
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)


class CommandError(click.ClickException):
    """ClickException rendered through :func:`error` instead of Click's plain ``Error:``."""

    def show(self, file: IO[Any] | None = None) -> None:  # pylint: disable=unused-argument
        error(self.format_message())


@contextmanager
def reporting_errors() -> Iterator[None]:
    """Turn library errors raised inside the block into :class:`CommandError`.

    The command then exits with status 1 and the message is shown as a red
    error line on stderr.
    """
    try:
        yield
    except UtilityError as e:
        raise CommandError(str(e)) from e
