from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.physics import constants as const
from missiontime.physics.lighttime import EphemerisLightTimeProvider, TabulatedEphemeris

# Local Imports
from ... import EARTH_EPHEMERIS_PATH, FIXTURE_DATA_DIR, SCLK_DASH_ID, SPACECRAFT_EPHEMERIS_PATH

# Type Checking Imports
if TYPE_CHECKING:
    # MissionTime Imports
    from missiontime.physics.time.context import TimeContext


@pytest.fixture(name="ephemeris")
def getTabulatedEphemeris() -> TabulatedEphemeris:
    """Return an ephemeris with a static Earth and a spacecraft 300 light seconds beyond it.

    Both tables cover ET 6e8 to 8e8 (mid 2019 to late 2025).
    """
    ephemeris = TabulatedEphemeris()
    ephemeris.loadBody(const.EARTH_BODY_ID, str(FIXTURE_DATA_DIR / EARTH_EPHEMERIS_PATH))
    ephemeris.loadBody(SCLK_DASH_ID, str(FIXTURE_DATA_DIR / SPACECRAFT_EPHEMERIS_PATH))
    return ephemeris


@pytest.fixture(name="ephemeris_context")
def getEphemerisContext(context: TimeContext, ephemeris: TabulatedEphemeris) -> TimeContext:
    """Return the default test context, with light times solved from :func:`.getTabulatedEphemeris`."""
    context.light_time = EphemerisLightTimeProvider(ephemeris)
    return context
