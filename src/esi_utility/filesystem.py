"""Filesystem helpers.

Recursive line counting, directory size and listing, lexical path
normalization and guarded whole-file reads and writes.

Ignore lists are matched case-insensitively against each file's parent
directory, relative to the directory being walked.
"""

from __future__ import annotations

import logging
import os
import re
import tempfile
from collections.abc import Iterable, Iterator
from pathlib import Path

from esi_utility.errors import NotWritableError, PathNotFoundError

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]

DEFAULT_ENCODING = "utf-8"

_NATURAL_SPLIT_REGEX = re.compile(r"(\d+)")


# ============================================================================
#                               Checks
# ============================================================================


def is_file(path: PathLike) -> bool:
    """True if ``path`` is an existing, readable regular file."""
    return os.path.isfile(path) and os.access(path, os.R_OK)


def is_directory(path: PathLike) -> bool:
    """True if ``path`` is an existing, readable directory."""
    return os.path.isdir(path) and os.access(path, os.R_OK)


def is_really_writable(path: PathLike) -> bool:
    """Check whether ``path`` can actually be written to.

    On POSIX this is :func:`os.access`. On Windows, where the access bits
    are unreliable, a directory is probed by creating a temporary file in it
    and a file by opening it for appending.

    Raises:
        PathNotFoundError: If ``path`` does not exist.
    """
    if not os.path.exists(path):
        raise PathNotFoundError(os.fspath(path))

    if os.name != "nt":
        return os.access(path, os.W_OK)

    try:
        if os.path.isdir(path):
            with tempfile.TemporaryFile(dir=path):
                pass
        else:
            with open(path, "a", encoding=DEFAULT_ENCODING):
                pass
    except OSError as e:
        logger.debug("Write probe on %s failed: %s", path, e)
        return False
    return True


# ============================================================================
#                               Tree walking
# ============================================================================


def _build_ignore(ignore: Iterable[str]) -> re.Pattern[str] | None:
    names = [name for name in ignore if name]
    if not names:
        return None
    return re.compile("|".join(re.escape(name) for name in names), re.IGNORECASE)


def _walk_files(directory: PathLike, ignore: Iterable[str]) -> Iterator[tuple[str, str]]:
    """Yield ``(dirpath, filename)`` for every file not under an ignored directory."""
    if not is_directory(directory):
        raise PathNotFoundError(os.fspath(directory), kind="directory")

    root = os.fspath(directory)
    pattern = _build_ignore(ignore)

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        relative = Path(os.path.relpath(dirpath, root)).as_posix()

        if pattern is not None and relative != "." and pattern.search(relative):
            logger.debug("Skipping ignored directory %s", dirpath)
            dirnames.clear()
            continue

        for filename in sorted(filenames):
            yield dirpath, filename


def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    return {ext.lstrip(".").lower() for ext in extensions if ext.lstrip(".")}


def _count_lines(path: str) -> int:
    """Number of non-empty lines; read as bytes so any file can be counted."""
    with open(path, "rb") as fh:
        return sum(1 for line in fh if line.rstrip(b"\r\n"))


def line_counter(
    directory: PathLike,
    ignore: Iterable[str] = (),
    extensions: Iterable[str] = (),
    only_line_count: bool = False,
) -> dict[str, dict[str, int]] | list[int]:
    """Count non-empty lines in every file below ``directory``.

    Args:
        directory: Root of the tree to walk.
        ignore: Directory names to skip (case-insensitive, matched anywhere
            in the file's relative parent path).
        extensions: If given, only files with one of these extensions are
            counted. The leading dot is optional: ``"py"`` and ``".py"`` match
            the same files.
        only_line_count: Return a flat list of counts instead of a mapping.

    Returns:
        ``{dirpath: {filename: count}}``, or ``[count, ...]`` when
        ``only_line_count`` is set.

    Raises:
        PathNotFoundError: If ``directory`` is not a readable directory.
    """
    wanted = _normalize_extensions(extensions)
    counts: dict[str, dict[str, int]] = {}
    flat: list[int] = []

    for dirpath, filename in _walk_files(directory, ignore):
        if wanted and Path(filename).suffix.lstrip(".").lower() not in wanted:
            continue

        count = _count_lines(os.path.join(dirpath, filename))

        if only_line_count:
            flat.append(count)
        else:
            counts.setdefault(dirpath, {})[filename] = count

    return flat if only_line_count else counts


def directory_size(directory: PathLike, ignore: Iterable[str] = ()) -> int:
    """Total size in bytes of every file below ``directory``.

    Raises:
        PathNotFoundError: If ``directory`` is not a readable directory.
    """
    return sum(
        os.path.getsize(os.path.join(dirpath, filename))
        for dirpath, filename in _walk_files(directory, ignore)
    )


def _natural_key(value: str) -> list[int | str]:
    return [int(part) if part.isdigit() else part for part in _NATURAL_SPLIT_REGEX.split(value)]


def directory_list(directory: PathLike, ignore: Iterable[str] = ()) -> list[str]:
    """Paths of every file below ``directory`` in natural order (``file2`` < ``file10``).

    Raises:
        PathNotFoundError: If ``directory`` is not a readable directory.
    """
    paths = [
        os.path.join(dirpath, filename) for dirpath, filename in _walk_files(directory, ignore)
    ]
    return sorted(paths, key=_natural_key)


# ============================================================================
#                               Paths
# ============================================================================


def normalize_file_path(path: PathLike, separator: str = os.sep) -> str:
    """Lexically normalize a path.

    Both ``/`` and ``\\`` are treated as separators, empty and ``.``
    segments are dropped and ``..`` removes the previous segment. A leading
    separator is preserved; a trailing one is not. The filesystem is never
    consulted.

    Example:
        >>> normalize_file_path("/var/www/../html/./index.php", "/")
        '/var/html/index.php'
    """
    raw = os.fspath(path).replace("\\", "/")
    rooted = raw.startswith("/")

    segments: list[str] = []
    for segment in raw.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)

    normalized = separator.join(segments)
    return f"{separator}{normalized}" if rooted else normalized


# ============================================================================
#                               Read / write
# ============================================================================


def file_read(path: PathLike, encoding: str = DEFAULT_ENCODING) -> str:
    """Return the whole contents of ``path``.

    Raises:
        PathNotFoundError: If ``path`` is not a readable file.
    """
    if not is_file(path):
        raise PathNotFoundError(os.fspath(path), kind="file")
    return Path(path).read_text(encoding=encoding)


def file_write(
    path: PathLike, data: str = "", append: bool = False, encoding: str = DEFAULT_ENCODING
) -> int:
    """Write ``data`` to an existing file.

    Args:
        path: File to write; it must already exist.
        data: Text to write.
        append: Append instead of truncating.
        encoding: Text encoding.

    Returns:
        int: Number of characters written.

    Raises:
        PathNotFoundError: If ``path`` is not a readable file.
        NotWritableError: If ``path`` is not writable.
    """
    if not is_file(path):
        raise PathNotFoundError(os.fspath(path), kind="file")

    if not is_really_writable(path):
        raise NotWritableError(os.fspath(path))

    with open(path, "a" if append else "w", encoding=encoding) as fh:
        return fh.write(data)
