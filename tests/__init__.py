"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path

# MissionTime Imports
from missiontime.physics.time.epochs import EpochCatalog
from missiontime.physics.time.instant import Time

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
KERNEL_PATH = Path("kernels/test_kernel.json")
CVF_PATH = Path("cvf/test_epochs.cvf")
EARTH_EPHEMERIS_PATH = Path("dat/earth_ephemeris.dat")
SPACECRAFT_EPHEMERIS_PATH = Path("dat/spacecraft_ephemeris.dat")
FUTURE_LEAP_SECONDS_PATH = Path("dat/leapseconds_future.dat")

# Spacecraft ids defined in the test kernel
SCLK_DASH_ID = -168
"""``int``: SCLK rendered with ``-``, solar clock & Mars rotation for LMST/LTST."""
SCLK_COLON_ID = -69
"""``int``: SCLK rendered with ``:``."""
SCLK_OFFSET_ID = -189
"""``int``: SCLK whose coarse count lags ET by about 250 s, second solar clock."""

# Epochs defined in the default test catalog
TEST_EPOCHS: dict[str, str] = {
    "test": "2000-001T00:00:00",
    "Hello_there": "2020-001T00:00:00",
    "third": "2022-001T00:00:00",
    "gps_test": "2021-001T00:00:00",
}


def buildEpochCatalog() -> EpochCatalog:
    """Return a catalog holding :data:`.TEST_EPOCHS`."""
    return EpochCatalog({name: Time(value) for name, value in TEST_EPOCHS.items()})
