from __future__ import annotations

# Standard Library Imports
import json
import os
from datetime import datetime

# Third Party Imports
import pytest

# MissionTime Imports
import missiontime.common.utilities as utils
from missiontime.common import pathSafeTime

# Local Imports
from .. import FIXTURE_DATA_DIR, FUTURE_LEAP_SECONDS_PATH, KERNEL_PATH


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLoadJSONFile(datafiles: str):
    """Ensure JSON file loader works properly."""
    # Valid JSON file
    kernel = utils.loadJSONFile(os.path.join(datafiles, KERNEL_PATH))
    assert "sclk" in kernel
    # Empty JSON file
    with pytest.raises(IOError, match="Empty JSON file:") as io_exc_info:
        utils.loadJSONFile(os.path.join(datafiles, "json/empty.json"))
    err_msg: str = io_exc_info.value.args[0]
    assert err_msg.endswith(".json")
    # Non-existant JSON file
    with pytest.raises(FileNotFoundError):
        utils.loadJSONFile(os.path.join(datafiles, "json/nonexistant.json"))
    # Invalid JSON file
    with pytest.raises(json.decoder.JSONDecodeError):
        utils.loadJSONFile(os.path.join(datafiles, "json/invalid.json"))


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLoadDatFile(datafiles: str):
    """Ensure dat file loader works properly."""
    # Valid dat file, comments skipped
    rows = utils.loadDatFile(os.path.join(datafiles, FUTURE_LEAP_SECONDS_PATH))
    assert rows[0] == [1972.0, 1.0, 1.0, 10.0]
    assert rows[-1] == [2031.0, 1.0, 1.0, 38.0]
    # Empty dat file
    with pytest.raises(IOError, match="Empty DAT file:") as io_exc_info:
        utils.loadDatFile(os.path.join(datafiles, "dat/empty.dat"))
    err_msg: str = io_exc_info.value.args[0]
    assert err_msg.endswith(".dat")
    # Non-existant dat file
    with pytest.raises(FileNotFoundError):
        utils.loadDatFile(os.path.join(datafiles, "dat/nonexistant.dat"))
    # Invalid dat file
    with pytest.raises(ValueError, match="Parsing error reading DAT file:") as io_exc_info:
        utils.loadDatFile(os.path.join(datafiles, "dat/invalid.dat"), delim=",")
    err_msg: str = io_exc_info.value.args[0]
    assert err_msg.endswith(".dat")


def testPathSafeTime():
    """Ensure time stamps contain no characters that are unsafe in file names."""
    stamp = pathSafeTime(datetime(2020, 1, 1, 12, 30, 0, 123456))
    assert stamp == "2020-01-01T12-30-00123456"
    assert ":" not in pathSafeTime()
