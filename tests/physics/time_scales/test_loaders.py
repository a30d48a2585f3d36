from __future__ import annotations

# Standard Library Imports
import datetime
import os

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.physics.time.instant import Time
from missiontime.physics.time_scales import KernelTimeScaleService, loadTimeScaleService
from missiontime.physics.time_scales.loaders import (
    LocalDotDatLeapSecondLoader,
    ModuleDotDatLeapSecondLoader,
    buildLeapSecond,
)
from missiontime.physics.time_scales.service import _loadLoader

# Local Imports
from ... import FIXTURE_DATA_DIR, FUTURE_LEAP_SECONDS_PATH


def testModuleLoader():
    """Test loading the leap second table shipped with the package."""
    leap_seconds = ModuleDotDatLeapSecondLoader("leapseconds.dat").getLeapSeconds()
    assert len(leap_seconds) == 28
    assert leap_seconds[0].date == datetime.date(1972, 1, 1)
    assert leap_seconds[0].delta_at == 10
    assert leap_seconds[-1].date == datetime.date(2017, 1, 1)
    assert leap_seconds[-1].delta_at == 37
    assert leap_seconds[-1].effective_tics == Time("2017-001T00:00:00").tics


def testMissingModuleResource():
    """Test that a missing packaged table raises when it is first used."""
    loader = ModuleDotDatLeapSecondLoader("nonexistent.dat")
    with pytest.raises(FileNotFoundError):
        loader.getLeapSeconds()


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLocalLoader(datafiles: str):
    """Test loading a local table with a hypothetical future leap second."""
    loader = LocalDotDatLeapSecondLoader(os.path.join(datafiles, FUTURE_LEAP_SECONDS_PATH))
    leap_seconds = loader.getLeapSeconds()
    assert leap_seconds[-1].date == datetime.date(2031, 1, 1)
    assert leap_seconds[-1].delta_at == 38

    service = KernelTimeScaleService(loader)
    assert service.deltaAT(Time("2030-365T23:59:59").tics) == 37
    assert service.deltaAT(Time("2031-001T00:00:00").tics) == 38

    tai = service.utcToTAI(Time("2030-365T23:59:59").tics)
    assert service.taiToUTC(tai + 100_000_000) == (Time("2030-365T23:59:59").tics, True)


def testSetLeapSeconds():
    """Test replacing a loader's table, which is kept sorted."""
    loader = ModuleDotDatLeapSecondLoader("leapseconds.dat")
    loader.setLeapSeconds([buildLeapSecond(1973, 1, 1, 12), buildLeapSecond(1972, 1, 1, 10)])
    leap_seconds = loader.getLeapSeconds()
    assert [leap.delta_at for leap in leap_seconds] == [10, 12]


def testLoaderRegistry():
    """Test that loaders are cached by name and location, and unknown names rejected."""
    assert _loadLoader() is _loadLoader("ModuleDotDatLeapSecondLoader", "leapseconds.dat")
    first = loadTimeScaleService()
    second = loadTimeScaleService()
    assert first is not second
    assert first.leapSeconds() == second.leapSeconds()

    with pytest.raises(ValueError, match="is undefined"):
        loadTimeScaleService(loader_name="BogusLeapSecondLoader")
