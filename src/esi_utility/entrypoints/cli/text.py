"""Text commands: ``slugify``, ``camel-case`` and ``length``."""

from __future__ import annotations

import click

from esi_utility import strings
from esi_utility.config import Settings


@click.command()
@click.argument("text")
@click.option(
    "--separator",
    "-s",
    default="-",
    show_default=True,
    help="Character placed between words.",
)
def slugify(text: str, separator: str) -> None:
    """Turn TEXT into a URL slug.

    \b
    Example:
        $ esi-utility slugify "Țhîș îș ă șîmple țîțle"
        this-is-a-simple-title
    """
    click.echo(strings.slugify(text, separator))


@click.command("camel-case")
@click.argument("text")
def camel_case(text: str) -> None:
    """Convert TEXT to camelCase."""
    click.echo(strings.camel_case(text))


@click.command()
@click.argument("text")
@click.option(
    "--bytes",
    "binary_safe",
    is_flag=True,
    default=False,
    help="Count encoded bytes (ESI_UTILITY_ENCODING) instead of characters.",
)
@click.pass_obj
def length(settings: Settings, text: str, binary_safe: bool) -> None:
    """Print the length of TEXT."""
    click.echo(strings.length(text, binary_safe=binary_safe, encoding=settings.encoding))
