from __future__ import annotations

# Third Party Imports
import numpy as np
import pytest

# MissionTime Imports
from missiontime.common.exceptions import MissingEphemerisError
from missiontime.physics import constants as const
from missiontime.physics.lighttime import LightTimeDirection, TabulatedEphemeris

# Local Imports
from ... import FIXTURE_DATA_DIR, SCLK_DASH_ID

RECEDING_BODY_ID = 5
"""``int``: body moving directly away from the SSB at 1e-4 c."""


@pytest.fixture(name="receding_ephemeris")
def getRecedingEphemeris() -> TabulatedEphemeris:
    """Return an ephemeris whose only body is 1000 light seconds from the SSB at ET 7e8, receding."""
    epochs = np.linspace(6e8, 8e8, 5)
    positions = np.zeros((5, 3))
    positions[:, 0] = const.SPEED_OF_LIGHT * (1000.0 + 1e-4 * (epochs - 7e8))
    ephemeris = TabulatedEphemeris()
    ephemeris.addBody(RECEDING_BODY_ID, epochs, positions)
    return ephemeris


def testStaticLightTime(ephemeris: TabulatedEphemeris):
    """Test the light time between static bodies is the same in both directions."""
    assert ephemeris.bodies() == (SCLK_DASH_ID, const.EARTH_BODY_ID)
    for direction in ("->", "<-"):
        light_time = ephemeris.lightTime(7e8, const.EARTH_BODY_ID, direction, SCLK_DASH_ID)
        assert light_time == pytest.approx(300.0, abs=1e-9)


def testMovingLightTime(receding_ephemeris: TabulatedEphemeris):
    """Test a signal chasing a receding body takes longer than one arriving from it."""
    ssb = const.SOLAR_SYSTEM_BARYCENTER_ID
    transmit = receding_ephemeris.lightTime(7e8, ssb, LightTimeDirection.TRANSMIT, RECEDING_BODY_ID)
    receive = receding_ephemeris.lightTime(7e8, ssb, LightTimeDirection.RECEIVE, RECEDING_BODY_ID)
    assert transmit == pytest.approx(1000.0 / (1.0 - 1e-4), rel=1e-9)
    assert receive == pytest.approx(1000.0 / (1.0 + 1e-4), rel=1e-9)

    with pytest.raises(ValueError):
        receding_ephemeris.lightTime(7e8, ssb, "<>", RECEDING_BODY_ID)


def testPositions(ephemeris: TabulatedEphemeris):
    """Test interpolated positions and the barycenter."""
    np.testing.assert_allclose(ephemeris.position(const.EARTH_BODY_ID, 6.5e8), [1e8, 0.0, 0.0])
    np.testing.assert_array_equal(ephemeris.position(const.SOLAR_SYSTEM_BARYCENTER_ID, 0.0), np.zeros(3))

    with pytest.raises(MissingEphemerisError, match="No ephemeris is loaded"):
        ephemeris.position(const.MARS_BODY_ID, 7e8)
    with pytest.raises(MissingEphemerisError, match="covers ET"):
        ephemeris.position(const.EARTH_BODY_ID, 9e8)


def testAddBodyErrors():
    """Test that malformed tables are rejected."""
    ephemeris = TabulatedEphemeris()
    with pytest.raises(ValueError, match="at least two rows"):
        ephemeris.addBody(1, [0.0], [[0.0, 0.0, 0.0]])
    with pytest.raises(ValueError, match="Nx3 positions"):
        ephemeris.addBody(1, [0.0, 1.0], [[0.0, 0.0], [1.0, 1.0]])
    assert ephemeris.bodies() == ()

    # Rows may be given in any order
    ephemeris.addBody(1, [1.0, 0.0], [[1.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
    np.testing.assert_allclose(ephemeris.position(1, 0.5), [0.5, 0.0, 0.0])


def testLoadBodyErrors(tmp_path):
    """Test loading tables with the wrong number of columns or unparsable values."""
    ephemeris = TabulatedEphemeris()
    three_columns = tmp_path / "three_columns.dat"
    three_columns.write_text("0.0 1.0 2.0\n1.0 1.0 2.0\n", encoding="utf-8")
    with pytest.raises(ValueError, match="rows of 'et x y z'"):
        ephemeris.loadBody(1, str(three_columns))

    with pytest.raises(ValueError, match="Parsing error"):
        ephemeris.loadBody(1, str(FIXTURE_DATA_DIR / "dat/invalid.dat"))
