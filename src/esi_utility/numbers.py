"""Number helpers: range checks, ordinals, secure random integers and byte sizes."""

from __future__ import annotations

import logging
import secrets
from decimal import ROUND_HALF_UP, Decimal

from esi_utility.errors import InvalidArgumentError

logger = logging.getLogger(__name__)

BINARY_STANDARD_BASE = 1024
METRIC_STANDARD_BASE = 1000

# Keep scaling up while the next unit would still show at least 0.9.
CONVERSION_MODIFIER = 0.9

SIZE_FORMAT_UNITS = {
    "binary": ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"),
    "metric": ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"),
}

_STANDARD_BASES = {
    "binary": BINARY_STANDARD_BASE,
    "metric": METRIC_STANDARD_BASE,
}

_SUFFIXES = ("th", "st", "nd", "rd", "th", "th", "th", "th", "th", "th")


def round_half_up(value: float, precision: int = 0) -> Decimal:
    """Round ``value`` half away from zero on its shortest decimal representation.

    ``round(2.675, 2)`` gives ``2.67`` because of binary floating point;
    ``round_half_up(2.675, 2)`` gives ``Decimal('2.68')``.
    """
    quantum = Decimal(1).scaleb(-precision)
    return Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)


def inside(number: float, minimum: float, maximum: float) -> bool:
    """True if ``minimum <= number <= maximum``."""
    return minimum <= number <= maximum


def outside(number: float, minimum: float, maximum: float) -> bool:
    """True if ``number`` falls outside the inclusive range."""
    return number < minimum or number > maximum


def ordinal(number: int) -> str:
    """Append the English ordinal suffix: ``1st``, ``12th``, ``143rd``."""
    abs_number = abs(number)

    if 11 <= abs_number % 100 <= 13:
        suffix = "th"
    else:
        suffix = _SUFFIXES[abs_number % 10]

    return f"{number}{suffix}"


def random(minimum: int, maximum: int) -> int:
    """Cryptographically secure integer in ``[minimum, maximum]``.

    Raises:
        InvalidArgumentError: If ``minimum`` is greater than ``maximum``.
    """
    if minimum > maximum:
        raise InvalidArgumentError(
            f"minimum ({minimum}) must not be greater than maximum ({maximum})."
        )
    return minimum + secrets.randbelow(maximum - minimum + 1)


def size_format(num_bytes: int, precision: int = 0, standard: str = "binary") -> str:
    """Format a byte count for humans.

    Example:
        >>> size_format(25151251, 2)
        '23.99 MiB'
        >>> size_format(25151251, 2, "metric")
        '25.15 MB'

    Args:
        num_bytes: Size in bytes.
        precision: Digits after the decimal point (ignored below one unit).
        standard: ``"binary"`` (powers of 1024, IEC units) or ``"metric"``
            (powers of 1000, SI units).

    Returns:
        str: e.g. ``"512 B"``, ``"2 KiB"`` or, with ``precision=1``, ``"2.0 KiB"``.

    Raises:
        InvalidArgumentError: If ``standard`` is neither binary nor metric.
    """
    if standard not in _STANDARD_BASES:
        raise InvalidArgumentError(
            f"Invalid standard {standard!r} specified, must be either metric or binary."
        )

    base = _STANDARD_BASES[standard]
    units = SIZE_FORMAT_UNITS[standard]

    if num_bytes < base:
        return f"{num_bytes} {units[0]}"

    value: float = num_bytes
    index = 0
    while value / base > CONVERSION_MODIFIER and index < len(units) - 1:
        value /= base
        index += 1

    return f"{round_half_up(value, precision)} {units[index]}"
