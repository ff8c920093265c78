"""Fixtures for end-to-end CLI logging tests.

Provides a test-only ``log-demo`` command that logs on our own namespace, on
an unrelated third-party logger and on Pillow's logger, plus fixtures to
register it on the ``esi-utility`` group and run inside an isolated
filesystem so the flight recorder writes into a throwaway directory.
"""

import logging

import click
import pytest
from click.testing import CliRunner

from esi_utility.entrypoints.cli.main import esi_utility

# pylint: disable=redefined-outer-name

DEMO_COMMAND = "log-demo"


@click.command()
def log_demo():
    """Emit one message per level on 'esi_utility.demo' and a few foreign loggers.

    The trailing DEBUG message comes after the WARNING so tests can tell
    whether the flight recorder flushed on the warning or on exit.
    """
    logger = logging.getLogger("esi_utility.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")

    third_party = logging.getLogger("some.thirdparty")
    third_party.debug("This is a debug-level third-party test message.")
    third_party.info("This is an info-level third-party test message.")
    third_party.warning("This is a warning-level third-party test message.")

    logging.getLogger("PIL.Image").debug("This is a debug-level Pillow test message.")

    logger.debug("This is a final debug-level test message.")


def _unregister(group: click.Group, name: str) -> None:
    """Drop ``name`` from the group and from any help sections click-extra keeps."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for section in getattr(group, "_sections", []):
        getattr(section, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Make ``esi-utility log-demo`` available for the duration of a test."""
    esi_utility.add_command(log_demo, name=DEMO_COMMAND)
    try:
        yield DEMO_COMMAND
    finally:
        _unregister(esi_utility, DEMO_COMMAND)


@pytest.fixture
def runner():
    """Click CliRunner for invoking the CLI."""
    return CliRunner()


@pytest.fixture
def fs(runner):
    """Run the test inside ``runner.isolated_filesystem()``."""
    with runner.isolated_filesystem():
        yield
