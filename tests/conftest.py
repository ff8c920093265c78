"""Global pytest fixtures for ESI Utility.

Also marks every collected test after the top-level folder it lives in
(``unit``, ``functional`` or ``e2e``) unless it already carries that mark.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from esi_utility.config import Settings

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
FOLDER_MARKERS = ("unit", "functional", "e2e")

# A fixed instant: 2023-11-14 22:13:20 UTC.
FIXED_TIMESTAMP = 1_700_000_000


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Add the folder mark (`unit`, `functional`, `e2e`) to each item."""
    for item in items:
        try:
            folder = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if folder not in FOLDER_MARKERS:
            continue
        if not any(marker.name == folder for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, folder))


@pytest.fixture
def fixed_clock():
    """Clock callable that always reports :data:`FIXED_TIMESTAMP`."""
    return lambda: FIXED_TIMESTAMP


@pytest.fixture
def default_settings() -> Settings:
    """Default settings, independent of the caller's environment."""
    return Settings()
