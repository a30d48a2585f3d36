from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.common.exceptions import LightTimeError
from missiontime.physics.lighttime import (
    ConstantLightTimeProvider,
    ert2ett,
    ert2scet,
    ett2ert,
    ett2scet,
    scet2ert,
    scet2ett,
)
from missiontime.physics.time.duration import Duration
from missiontime.physics.time.epochs import EpochRelativeTime
from missiontime.physics.time.instant import Time

# Local Imports
from ... import SCLK_DASH_ID

# Type Checking Imports
if TYPE_CHECKING:
    # MissionTime Imports
    from missiontime.physics.time.context import TimeContext


@pytest.fixture(name="constant_context")
def getConstantContext(context: TimeContext) -> TimeContext:
    """Return the default test context with a fixed five minute light time."""
    context.light_time = ConstantLightTimeProvider(Duration("00:05:00"))
    return context


@pytest.mark.parametrize(
    ("conversion", "expected"),
    [
        (scet2ert, "2019-200T00:05:00"),
        (scet2ett, "2019-199T23:55:00"),
        (ert2scet, "2019-199T23:55:00"),
        (ett2scet, "2019-200T00:05:00"),
        (ett2ert, "2019-200T00:10:00"),
        (ert2ett, "2019-199T23:50:00"),
    ],
)
def testConstantConversions(constant_context: TimeContext, conversion, expected: str):
    """Test every conversion with a fixed light time."""
    assert conversion(Time("2019-200T00:00:00"), SCLK_DASH_ID).toUTC(0) == expected


def testAsymmetricLegs(context: TimeContext):
    """Test that each conversion uses the right leg."""
    context.light_time = ConstantLightTimeProvider(Duration("00:05:00"), Duration("00:07:00"))
    instant = Time("2019-200T00:00:00")
    assert scet2ert(instant, SCLK_DASH_ID) == Time("2019-200T00:05:00")
    assert scet2ett(instant, SCLK_DASH_ID) == Time("2019-199T23:53:00")
    assert ett2ert(instant, SCLK_DASH_ID) == Time("2019-200T00:12:00")
    assert ert2ett(instant, SCLK_DASH_ID) == Time("2019-199T23:48:00")


def testRoundTrips(ephemeris_context: TimeContext):
    """Test that conversions and their inverses round trip against an ephemeris."""
    scet = Time("2022-001T00:00:00")
    ert = scet2ert(scet, SCLK_DASH_ID)
    assert ert == Time("2022-001T00:05:00")
    assert ert2scet(ert, SCLK_DASH_ID) == scet
    assert ett2scet(scet2ett(scet, SCLK_DASH_ID), SCLK_DASH_ID) == scet
    assert ert2ett(ett2ert(scet, SCLK_DASH_ID), SCLK_DASH_ID) == scet


def testDefaultSpacecraft(constant_context: TimeContext):
    """Test that the context's default spacecraft is used."""
    constant_context.defaults.spacecraft_id = SCLK_DASH_ID
    assert scet2ert(Time("2019-200T00:00:00")) == Time("2019-200T00:05:00")


def testExplicitContext(ephemeris_context: TimeContext):
    """Test passing a context instead of relying on the default one."""
    other = ephemeris_context.__class__(
        defaults=ephemeris_context.defaults,
        time_scales=ephemeris_context.time_scales,
        light_time=ConstantLightTimeProvider(Duration("00:01:00")),
    )
    scet = Time("2022-001T00:00:00")
    assert scet2ert(scet, SCLK_DASH_ID, context=other) == Time("2022-001T00:01:00")
    assert scet2ert(scet, SCLK_DASH_ID) == Time("2022-001T00:05:00")


def testEpochRelativeConversions(constant_context: TimeContext):
    """Test that epoch-relative times stay epoch-relative through a conversion."""
    scet = EpochRelativeTime("Hello_there+00:00:00")
    ert = scet2ert(scet, SCLK_DASH_ID)
    assert isinstance(ert, EpochRelativeTime)
    assert ert.toString(0) == "Hello_there+00:05:00"
    assert ert2ett(ert, SCLK_DASH_ID).toString(0) == "Hello_there-00:05:00"


def testMissingEphemeris(ephemeris_context: TimeContext):
    """Test that conversions surface ephemeris gaps as light time errors."""
    with pytest.raises(LightTimeError):
        scet2ert(Time("2022-001T00:00:00"), -999)
    with pytest.raises(LightTimeError):
        ert2scet(Time("2030-001T00:00:00"), SCLK_DASH_ID)
