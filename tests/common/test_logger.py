from __future__ import annotations

# Standard Library Imports
import logging
import os

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.common.logger import (
    LOGGER_NAME,
    Logger,
    missiontimeLogDebug,
    missiontimeLogError,
    missiontimeLogInfo,
    missiontimeLogWarning,
)

# Local Imports
from .. import FIXTURE_DATA_DIR

CORRECT_OUTPUT: list[list[str | int]] = [
    ["test", logging.DEBUG, "This is a debug message."],
    ["test", logging.INFO, "This is an info message."],
    ["test", logging.WARNING, "This is a warning message."],
    ["test", logging.ERROR, "This is an error message."],
    ["test", logging.CRITICAL, "This is a critical message."],
]

CORRECT_FILE_OUTPUT: list[list[str | int]] = [
    ["test_logger", "DEBUG", "This is a debug message.\n"],
    ["test_logger", "INFO", "This is an info message.\n"],
    ["test_logger", "WARNING", "This is a warning message.\n"],
    ["test_logger", "ERROR", "This is an error message.\n"],
    ["test_logger", "CRITICAL", "This is a critical message.\n"],
]


def testStdout(caplog: pytest.LogCaptureFixture):
    """Test the logger's output to `sys.stdout`."""
    logger = Logger("test")
    assert logger.filename == "stdout"
    logger.debug("This is a debug message.")
    logger.info("This is an info message.")
    logger.warning("This is a warning message.")
    logger.error("This is an error message.")
    logger.critical("This is a critical message.")

    line_count = 0
    # Read captured stdout and stderr
    for item, record_tuple in enumerate(caplog.record_tuples):
        assert record_tuple == tuple(CORRECT_OUTPUT[item])
        line_count += 1

    assert line_count == 5


def testSingleHandler():
    """Test that re-creating a logger by name doesn't stack handlers."""
    first = Logger("single-handler-test")
    second = Logger("single-handler-test")
    assert first.logger is second.logger
    assert len(second.handlers) == 1

    Logger("single-handler-test", allow_multiple_handlers=True)
    assert len(second.handlers) == 2


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLogfile(datafiles: str):
    """Test the logger's output to a logfile."""
    saved_cwd = os.getcwd()
    os.chdir(datafiles)
    file_logger = Logger("logfile-test", path="logs/")
    assert file_logger.filename.startswith(os.path.join("logs", "logfile-test_"))

    file_logger.debug("This is a debug message.")
    file_logger.info("This is an info message.")
    file_logger.warning("This is a warning message.")
    file_logger.error("This is an error message.")
    file_logger.critical("This is a critical message.")

    with open(file_logger.filename, encoding="utf-8") as logfile:
        line_count = 0
        for item, line in enumerate(logfile):
            assert line.split(" - ")[1:] == CORRECT_FILE_OUTPUT[item]
            line_count += 1

        assert line_count == 5

    for handler in file_logger.handlers:
        handler.close()
    os.chdir(saved_cwd)


def testPackageOneLiners(caplog: pytest.LogCaptureFixture):
    """Test the one-liners record to the package's top-level logger."""
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    missiontimeLogDebug("Debug one-liner.")
    missiontimeLogInfo("Info one-liner.")
    missiontimeLogWarning("Warning one-liner.")
    missiontimeLogError("Error one-liner.")

    assert caplog.record_tuples == [
        (LOGGER_NAME, logging.DEBUG, "Debug one-liner."),
        (LOGGER_NAME, logging.INFO, "Info one-liner."),
        (LOGGER_NAME, logging.WARNING, "Warning one-liner."),
        (LOGGER_NAME, logging.ERROR, "Error one-liner."),
    ]
