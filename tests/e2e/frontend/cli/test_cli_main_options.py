"""End-to-end tests for the top-level ``esi-utility`` options.

These tests exercise logging verbosity (-v/-q), per-logger overrides (-L and
ESI_UTILITY_LOGGER_LEVELS), debug formatting, the flight recorder and the
startup diagnostics by invoking the test-only ``log-demo`` command.
"""

import re
from pathlib import Path

import pytest

from esi_utility.entrypoints.cli.main import esi_utility

# pylint: disable=unused-argument, redefined-outer-name

LOG_PATH = "flight_recorder.log"


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def assert_not_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is NOT found in the output string."""
    if re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' found in output:\n{output}")


def read_log(path: str = LOG_PATH) -> str:
    """Return the flight recorder file contents."""
    return Path(path).read_text(encoding="utf-8")


# ============================================================================
#                               Console verbosity
# ============================================================================


@pytest.mark.parametrize(
    ("cli_args", "shown", "hidden"),
    [
        ([], "WARNING", "INFO"),
        (["-v"], "INFO", "DEBUG"),
        (["-q"], "ERROR", "WARNING"),
        (["-qq"], "CRITICAL", "ERROR"),
    ],
    ids=["default", "-v", "-q", "-qq"],
)
def test_verbosity_flags(registered_log_demo, runner, fs, cli_args, shown, hidden):
    """Each -v/-q step moves the console threshold by one level from WARNING."""
    result = runner.invoke(esi_utility, [*cli_args, "log-demo"])
    assert result.exit_code == 0
    assert_in_output(shown, result.output)
    assert_not_in_output(hidden, result.output)


def test_vv_shows_debug(registered_log_demo, runner, fs):
    """-vv should enable DEBUG-level console output."""
    result = runner.invoke(esi_utility, ["-vv", "log-demo"])
    assert result.exit_code == 0
    assert_in_output("DEBUG", result.output)


def test_third_party_records_are_prefixed(registered_log_demo, runner, fs):
    """Foreign loggers are tagged with their top-level package."""
    result = runner.invoke(esi_utility, ["log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"\[some\] This is a warning-level third-party test message\.", result.output)


# ============================================================================
#                               Logger overrides
# ============================================================================


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [
        ({}, ["-vv", "-L", "some.thirdparty=INFO"]),
        ({"ESI_UTILITY_LOGGER_LEVELS": "some.thirdparty=INFO"}, ["-vv"]),
    ],
    ids=["cli-flag", "env-var"],
)
def test_logger_level_silences_debug(registered_log_demo, runner, fs, env, cli_args):
    """Logger-level overrides should silence third-party DEBUG while keeping INFO+."""
    result = runner.invoke(esi_utility, [*cli_args, "log-demo"], env=env)
    assert result.exit_code == 0
    assert_not_in_output("This is a debug-level third-party test message.", result.output)
    assert_in_output("This is an info-level third-party test message.", result.output)


def test_pillow_is_quiet_by_default(registered_log_demo, runner, fs):
    """Pillow's DEBUG chatter is held at WARNING unless asked for."""
    quiet = runner.invoke(esi_utility, ["-vv", "log-demo"])
    loud = runner.invoke(esi_utility, ["-vv", "-L", "PIL=DEBUG", "log-demo"])

    assert quiet.exit_code == 0
    assert loud.exit_code == 0
    assert_not_in_output("This is a debug-level Pillow test message.", quiet.output)
    assert_in_output("This is a debug-level Pillow test message.", loud.output)


def test_invalid_logger_level_is_usage_error(registered_log_demo, runner, fs):
    """A malformed -L value stops the run before any command executes."""
    result = runner.invoke(esi_utility, ["-L", "PIL=LOUD", "log-demo"])
    assert result.exit_code == 2
    assert "Invalid log level: LOUD" in result.output


# ============================================================================
#                               Debug mode
# ============================================================================


def test_debug_mode_shows_paths(registered_log_demo, runner, fs):
    """When --debug is set, log output includes file paths and line numbers."""
    result = runner.invoke(esi_utility, ["--debug", "log-demo"])
    assert result.exit_code == 0
    assert_in_output(r"conftest\.py:\d+\b", result.output)


def test_debug_mode_is_off_by_default(registered_log_demo, runner, fs):
    """By default, file paths should not be included in log output."""
    result = runner.invoke(esi_utility, ["log-demo"])
    assert result.exit_code == 0
    assert_not_in_output(r"conftest\.py:\d+\b", result.output)


# ============================================================================
#                               Flight recorder
# ============================================================================


def test_flight_recorder_flush_on_warning(registered_log_demo, runner, fs):
    """Buffered DEBUG records are written when a WARNING occurs."""
    result = runner.invoke(
        esi_utility, ["--log-path", LOG_PATH, "-L", "some.thirdparty=INFO", "log-demo"]
    )
    assert result.exit_code == 0
    content = read_log()

    assert_in_output("This is a debug-level test message.", content)
    assert_not_in_output("This is a debug-level third-party test message.", content)
    assert_in_output("This is an info-level third-party test message.", content)
    assert_not_in_output("This is a debug-level Pillow test message.", content)
    assert_in_output("This is a warning-level test message.", content)
    assert_in_output("This is an error-level test message.", content)
    assert_in_output("This is a critical-level test message.", content)

    # Logged after the last WARNING and never flushed.
    assert_not_in_output("This is a final debug-level test message.", content)


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [({}, ["--force-flush"]), ({"ESI_UTILITY_FORCE_FLUSH": "true"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_force_flush(registered_log_demo, runner, fs, env, cli_args):
    """With force-flush (flag or env var) the final DEBUG records are written on exit."""
    result = runner.invoke(esi_utility, ["--log-path", LOG_PATH, *cli_args, "log-demo"], env=env)
    assert result.exit_code == 0
    assert_in_output("This is a final debug-level test message.", read_log())


@pytest.mark.parametrize(
    ("env", "cli_args"),
    [({}, ["--no-flight-recorder"]), ({"ESI_UTILITY_FLIGHT_RECORDER": "0"}, [])],
    ids=["cli-flag", "env-var"],
)
def test_flight_recorder_can_be_disabled(registered_log_demo, runner, fs, env, cli_args):
    """Disabling the flight recorder should prevent writing the log file."""
    result = runner.invoke(esi_utility, ["--log-path", LOG_PATH, *cli_args, "log-demo"], env=env)
    assert result.exit_code == 0
    assert not Path(LOG_PATH).exists()


def test_flight_recorder_log_path_from_env(registered_log_demo, runner, fs):
    """ESI_UTILITY_LOG_PATH chooses the recorder file."""
    result = runner.invoke(esi_utility, ["log-demo"], env={"ESI_UTILITY_LOG_PATH": "env.log"})
    assert result.exit_code == 0
    assert_in_output("This is a warning-level test message.", read_log("env.log"))


def test_flight_recorder_truncates_log(registered_log_demo, runner, fs):
    """Each run replaces the previous log instead of appending to it."""
    first = runner.invoke(esi_utility, ["--log-path", LOG_PATH, "log-demo"])
    assert first.exit_code == 0
    first_lines = len(read_log().splitlines())

    second = runner.invoke(esi_utility, ["--log-path", LOG_PATH, "log-demo"])
    assert second.exit_code == 0
    assert len(read_log().splitlines()) == first_lines


# ============================================================================
#                               Startup diagnostics
# ============================================================================


def test_startup_logging(registered_log_demo, runner, fs):
    """The flight recorder captures the startup summary and diagnostics."""
    log_path = "startup.log"
    result = runner.invoke(
        esi_utility,
        ["--log-path", log_path, "--flight-recorder", "--force-flush", "log-demo"],
        env={"ESI_UTILITY_LOGGER_LEVELS": "some.thirdparty=INFO"},
    )
    assert result.exit_code == 0
    content = read_log(log_path)

    assert_in_output(r"ESI Utility \d+\.\d+\.\d+", content)
    assert_in_output(r"console=WARNING", content)
    assert_in_output(r"flight-recorder=ON", content)
    assert_in_output(r"Python: \d+\.\d+\.\d+", content)
    assert_in_output(r"Platform: .+", content)
    assert_in_output(r"PID: \d+", content)
    assert_in_output(r"CWD: .+", content)
    assert_in_output(r"Pillow: \d+\.\d+\.\d+", content)
    assert_in_output(r"pytz: \d{4}\.\d+", content)
    assert_in_output(r"python-dateutil: \d+\.\d+", content)
    assert_in_output(r"Handlers: .+", content)
    assert_in_output(
        r"Flight recorder: path=startup\.log, capacity=2000, flush_on_close=True",
        content,
    )
    assert_in_output(
        r"Per-logger overrides: \{'PIL': 'WARNING', 'pytz': 'WARNING', 'some.thirdparty': 'INFO'\}",
        content,
    )
    assert_in_output(r"Settings: Settings\(encoding=", content)
