"""Configuration utilities for ESI Utility.

Settings are read once from the process environment (or any mapping that
looks like it) and handed to callers as an immutable value. Library
functions never consult the environment on their own; they take explicit
parameters whose defaults match :class:`Settings`.
"""

from __future__ import annotations

import codecs
import os
from collections.abc import Mapping
from dataclasses import dataclass

from esi_utility.dates import DEFAULT_TIMEZONE, valid_timezone
from esi_utility.errors import InvalidSettingError

ENCODING_ENV_VAR = "ESI_UTILITY_ENCODING"  # pragma: no mutate
TIMEZONE_ENV_VAR = "ESI_UTILITY_TIMEZONE"  # pragma: no mutate

DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide defaults, resolved once at startup."""

    encoding: str = DEFAULT_ENCODING
    timezone: str = DEFAULT_TIMEZONE


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from environment variables.

    Recognised variables:
    - ``ESI_UTILITY_ENCODING`` → text encoding for file helpers (default ``utf-8``)
    - ``ESI_UTILITY_TIMEZONE`` → default timezone for date helpers (default ``UTC``)

    Empty values are treated as unset.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``; override in
            tests to avoid touching the real environment.

    Returns:
        The resolved settings.

    Raises:
        InvalidSettingError: If the encoding is unknown to :mod:`codecs` or the
            timezone is not in the timezone database.
    """
    env = os.environ if environ is None else environ

    encoding = (env.get(ENCODING_ENV_VAR) or "").strip() or DEFAULT_ENCODING
    try:
        codecs.lookup(encoding)
    except LookupError as e:
        raise InvalidSettingError(ENCODING_ENV_VAR, encoding, "unknown encoding") from e

    timezone = (env.get(TIMEZONE_ENV_VAR) or "").strip() or DEFAULT_TIMEZONE
    if not valid_timezone(timezone):
        raise InvalidSettingError(TIMEZONE_ENV_VAR, timezone, "unknown timezone")

    return Settings(encoding=encoding, timezone=timezone)
