"""CLI helpers for ESI Utility.

Terminal capability probes and hyperlinks, stderr status lines with
emoji/ASCII fallbacks, the ``-L NAME=LEVEL`` parser and the bridge that
reports library errors as Click errors.
"""

from .log_level_parser import parse_log_level
from .messages import CommandError, error, reporting_errors, warn
from .terminal import hyperlink

__all__ = [
    "CommandError",
    "error",
    "hyperlink",
    "parse_log_level",
    "reporting_errors",
    "warn",
]
