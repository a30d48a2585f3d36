from __future__ import annotations

# Standard Library Imports
import logging
import sys
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.physics.time.context import TimeContext, resetDefaultContext, setDefaultContext
from missiontime.physics.time.defaults import TimeDefaults
from missiontime.physics.time_scales.service import loadTimeScaleService

# Local Imports
from . import FIXTURE_DATA_DIR, KERNEL_PATH, buildEpochCatalog

# Type Checking Imports
if TYPE_CHECKING:
    # MissionTime Imports
    from missiontime.physics.time.epochs import EpochCatalog
    from missiontime.physics.time_scales.service import KernelTimeScaleService


@pytest.fixture(autouse=True)
def _resetDefaultContext() -> None:
    """Automatically discard the process-wide default context around each test.

    Note:
        This is used so tests can assume a "blank" context, and a test that mutates the default
        settings can't leak them into another test.
    """
    resetDefaultContext()
    yield
    resetDefaultContext()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> logging.Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


@pytest.fixture(name="time_scales")
def getTimeScaleService() -> KernelTimeScaleService:
    """Return a :class:`.KernelTimeScaleService` with the test kernel's SCLK & solar clocks."""
    return loadTimeScaleService(kernel_file=str(FIXTURE_DATA_DIR / KERNEL_PATH))


@pytest.fixture(name="epoch_catalog")
def getEpochCatalog() -> EpochCatalog:
    """Return a fresh catalog of the common test epochs."""
    return buildEpochCatalog()


@pytest.fixture(name="context")
def getTimeContext(time_scales: KernelTimeScaleService, epoch_catalog: EpochCatalog) -> TimeContext:
    """Install, and return, a default context backed by the test kernel and epochs.

    Conversions called without an explicit ``context`` use this one.
    """
    context = TimeContext(defaults=TimeDefaults(), time_scales=time_scales, epochs=epoch_catalog)
    setDefaultContext(context)
    return context
