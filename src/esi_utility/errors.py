"""Error definitions for ESI Utility.

Every error derives from :class:`UtilityError` and also from the closest
built-in exception, so callers may catch either the library type or the
standard one (e.g. ``ValueError``).
"""

# ============================================================================
#                               Base error
# ============================================================================


class UtilityError(Exception):
    """Base class for all ESI Utility errors."""


# ============================================================================
#                           Argument / value errors
# ============================================================================


class InvalidArgumentError(UtilityError, ValueError):
    """Raised when a function receives an argument it cannot work with."""


class InvalidTimezoneError(UtilityError, ValueError):
    """Raised when a timezone name is not present in the timezone database."""

    def __init__(self, timezone: str) -> None:
        super().__init__(f"Timezone '{timezone}' appears to be invalid.")
        self.timezone = timezone


class InvalidSettingError(UtilityError, ValueError):
    """Raised when an environment setting holds an unusable value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"Invalid value for {name} ({value!r}): {reason}")
        self.name = name
        self.value = value


# ============================================================================
#                           Filesystem errors
# ============================================================================


class PathNotFoundError(UtilityError, FileNotFoundError):
    """Raised when a file or directory does not exist or is not readable."""

    def __init__(self, path: str, kind: str = "path") -> None:
        super().__init__(f"{kind.capitalize()} '{path}' does not exist or is not readable.")
        self.path = path
        self.kind = kind


class NotWritableError(UtilityError, PermissionError):
    """Raised when a file exists but cannot be written to."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File '{path}' is not writable.")
        self.path = path


# ============================================================================
#                               Image errors
# ============================================================================


class ImageTypeError(UtilityError, RuntimeError):
    """Raised when the type of an image file cannot be determined."""

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Unable to determine the image type of '{path}'. Is it a valid image file?"
        )
        self.path = path
