"""ESI Utility

A collection of small, static helper functions for everyday scripting:
collections (flatten, group-by, cycle-safe deep map), strings (slugify,
camelCase, transliteration), dates and timezones, unit conversion,
request-environment introspection, filesystem traversal and image sniffing.
"""

__all__ = ["__version__"]
__version__ = "2.0.0"
