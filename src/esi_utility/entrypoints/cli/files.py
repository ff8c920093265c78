"""File commands: ``lines``, ``dir-size`` and ``image-type``."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from esi_utility import filesystem, image, numbers
from esi_utility.errors import ImageTypeError

from .helpers import reporting_errors

logger = logging.getLogger(__name__)

# Existence is checked by the library so its error message is the one shown.
_PATH = click.Path(path_type=Path)

_IGNORE_OPTION = click.option(
    "--ignore",
    "-i",
    multiple=True,
    help="Directory name to skip (case-insensitive). Repeatable.",
)


@click.command()
@click.argument("directory", type=_PATH)
@_IGNORE_OPTION
@click.option(
    "--ext",
    "-e",
    "extensions",
    multiple=True,
    help="Only count files with this extension (e.g. py or .py). Repeatable.",
)
@click.option(
    "--total",
    is_flag=True,
    default=False,
    help="Print only the sum of all counts.",
)
def lines(directory: Path, ignore: tuple[str, ...], extensions: tuple[str, ...], total: bool) -> None:
    """Count non-empty lines in every file below DIRECTORY.

    One ``path<TAB>count`` line is printed per file, or a single number with
    --total.
    """
    with reporting_errors():
        if total:
            counts = filesystem.line_counter(directory, ignore, extensions, only_line_count=True)
            click.echo(sum(counts))
            return

        per_directory = filesystem.line_counter(directory, ignore, extensions)

    for dirpath, files in per_directory.items():
        for filename, count in files.items():
            click.echo(f"{Path(dirpath, filename)}\t{count}")


@click.command("dir-size")
@click.argument("directory", type=_PATH)
@_IGNORE_OPTION
@click.option(
    "--human",
    "-H",
    is_flag=True,
    default=False,
    help="Print a binary size (e.g. 2.0 KiB) instead of a byte count.",
)
def dir_size(directory: Path, ignore: tuple[str, ...], human: bool) -> None:
    """Total size of the files below DIRECTORY."""
    with reporting_errors():
        total = filesystem.directory_size(directory, ignore)

    click.echo(numbers.size_format(total, 1) if human else total)


@click.command("image-type")
@click.argument("path", type=_PATH)
@click.option(
    "--capabilities",
    is_flag=True,
    default=False,
    help="Also print what the installed Pillow build can read.",
)
def image_type(path: Path, capabilities: bool) -> None:
    """Print the MIME type of the image at PATH, judged by its content."""
    with reporting_errors():
        mime = image.guess_image_type(path)
        if mime is None:
            raise ImageTypeError(str(path))

    click.echo(mime)

    if capabilities:
        probed = image.ImageCapabilities.probe()
        click.echo(f"pillow: {probed.pillow_version}")
        click.echo(f"webp: {probed.webp}")
        click.echo(f"formats: {', '.join(sorted(probed.readable_formats))}")
