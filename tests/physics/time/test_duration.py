from __future__ import annotations

# Third Party Imports
import pytest

# MissionTime Imports
from missiontime.common.exceptions import DurationFormatError, EmptyCollectionError, TimeDomainError
from missiontime.physics import constants as const
from missiontime.physics.time.duration import (
    DAY_DURATION,
    ZERO_DURATION,
    Duration,
    alignTics,
    roundHalfUp,
    secondsToTics,
)


@pytest.mark.parametrize(
    ("text", "tics"),
    [
        ("00:00:00.000001", 100),
        ("00:00:14.759484", 1_475_948_400),
        ("00:00:00.000000001", 0),
        ("00:00:00.000000005", 1),
        ("00:00:00.123456789", 12_345_679),
        ("+00:01:00", 60 * const.TICS_PER_SECOND),
        ("-00:01:00", -60 * const.TICS_PER_SECOND),
        ("T10:00:00", 10 * const.TICS_PER_HOUR),
        ("48:00:00", 2 * const.TICS_PER_DAY),
        ("2T03:00:00", 2 * const.TICS_PER_DAY + 3 * const.TICS_PER_HOUR),
        ("  -1T00:00:00.5 ", -(const.TICS_PER_DAY + const.TICS_PER_SECOND // 2)),
    ],
)
def testParse(text: str, tics: int):
    """Test parsing durations into an exact tic count."""
    assert Duration(text).tics == tics


@pytest.mark.parametrize(
    "text",
    ["", "garbage", "1:00:00", "00:60:00", "00:00:60", "1T24:00:00", "00:00", "00:00:00.1.2", "1D00:00:00"],
)
def testParseErrors(text: str):
    """Test that malformed durations are rejected."""
    with pytest.raises(DurationFormatError):
        Duration(text)


def testParseNonString():
    """Test that non-string values are rejected, and a duration is copied."""
    with pytest.raises(DurationFormatError):
        Duration(60)

    original = Duration("00:01:00")
    assert Duration(original) == original
    assert Duration(original) is not original


@pytest.mark.parametrize(
    ("text", "precision", "expected"),
    [
        ("00:59:59.8", 0, "01:00:00"),
        ("23:59:59.9", 0, "1T00:00:00"),
        ("23:59:59.9", 1, "23:59:59.9"),
        ("-1T02:00:00", 0, "-1T02:00:00"),
        ("00:00:00.123456789", 8, "00:00:00.12345679"),
        ("00:00:00.123456789", 3, "00:00:00.123"),
        ("00:00:00.0005", 3, "00:00:00.001"),
        ("-00:00:00.0004", 3, "00:00:00.000"),
        ("00:00:01", 12, "00:00:01.00000000"),
        ("100:00:00", 0, "4T04:00:00"),
    ],
)
def testToString(text: str, precision: int, expected: str):
    """Test formatting rounds to the precision and carries into larger fields."""
    assert Duration(text).toString(precision) == expected


def testDefaultPrecision():
    """Test that ``str()`` uses the default output precision."""
    assert str(Duration("00:00:01")) == "00:00:01.000000"
    assert repr(Duration("00:00:01")) == "Duration('00:00:01.00000000')"


@pytest.mark.parametrize(
    ("text", "pattern", "expected"),
    [
        ("00:45:11.009", "mm'M'ss'S'SSS'ms'", "45M11S009ms"),
        ("2T05:30:00", "d 'days' HH 'hours'", "2 days 5 hours"),
        ("2T05:30:00", "H:mm", "53:30"),
        ("00:00:01.5", "S", "1500"),
        ("-00:01:30", "s's'", "-90s"),
        ("00:00:05", "ss''", "5'"),
    ],
)
def testFormat(text: str, pattern: str, expected: str):
    """Test the custom pattern formatter."""
    assert Duration(text).format(pattern) == expected


def testFormatUnterminatedQuote():
    """Test that an unterminated literal is rejected."""
    with pytest.raises(ValueError, match="Unterminated quote"):
        Duration("00:00:01").format("ss 'seconds")


def testFieldGetters():
    """Test the whole-unit getters truncate toward zero."""
    duration = Duration("-1T02:03:04.005")
    assert duration.getDays() == -1
    assert duration.getHours() == -26
    assert duration.getMinutes() == -1563
    assert duration.getSeconds() == -93784
    assert duration.getMilliseconds() == -93784005
    assert duration.totalSeconds() == pytest.approx(-93784.005)


def testFactories():
    """Test building durations from numbers of units."""
    assert Duration.fromSeconds(1.5) == Duration("00:00:01.5")
    assert Duration.fromMilliseconds(250) == Duration("00:00:00.25")
    assert Duration.fromMinutes(90) == Duration("01:30:00")
    assert Duration.fromHours(-0.5) == Duration("-00:30:00")
    assert Duration.fromDays(2) == Duration("2T00:00:00")
    assert Duration.fromTics(7).tics == 7
    assert DAY_DURATION.tics == const.TICS_PER_DAY


def testArithmetic():
    """Test exact integer arithmetic and the operator protocol."""
    five_minutes = Duration("00:05:00")
    hour = Duration("01:00:00")

    assert five_minutes * 12 == hour
    assert 12 * five_minutes == hour
    assert hour / 4 == Duration("00:15:00")
    assert hour / five_minutes == 12.0
    assert hour - five_minutes == Duration("00:55:00")
    assert hour + five_minutes == Duration("01:05:00")
    assert -five_minutes == Duration("-00:05:00")
    assert +five_minutes is five_minutes
    assert abs(Duration("-00:05:00")) == five_minutes
    assert Duration("-00:07:00") % five_minutes == Duration("-00:02:00")
    assert Duration("00:07:00") % Duration("-00:05:00") == Duration("00:02:00")
    assert not ZERO_DURATION
    assert five_minutes


def testNonIntegralScaling():
    """Test that non-integral factors round to the nearest tic, halves toward +infinity."""
    assert (Duration.fromTics(3) * 0.5).tics == 2
    assert (Duration.fromTics(-3) * 0.5).tics == -1
    assert Duration.fromTics(10).divide(4).tics == 3
    assert Duration.fromTics(-10).divide(4).tics == -2
    assert roundHalfUp(-2.5) == -2
    assert secondsToTics("0.000000015") == 2


@pytest.mark.parametrize("text", ["00:05:00", "-00:05:00.00000001", "3T07:11:13.12345678", "-00:00:00.00000003"])
@pytest.mark.parametrize("factor", [1, 3, -7, 1000, 2.5, -4.5, 0.75])
def testScaleInverse(text: str, factor: float):
    """Test that scaling then dividing by the same factor recovers the duration to within a tic."""
    duration = Duration(text)
    assert abs(duration.multiply(factor).divide(factor).tics - duration.tics) <= 1


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("00:05:00", "01:00:00"),
        ("00:05:00", "-01:00:00"),
        ("-2T00:00:00.5", "00:00:00.00000001"),
        ("-00:00:01", "-00:00:00.9"),
        ("00:00:00", "-10T00:00:00"),
    ],
)
def testAddInverse(first: str, second: str):
    """Test that adding then subtracting a duration is exact for any signs."""
    a, b = Duration(first), Duration(second)
    assert a.add(b).subtract(b) == a
    assert a.subtract(b).add(b) == a
    assert (a + b) - b == a


@pytest.mark.parametrize(
    ("text", "precision"),
    [
        ("00:00:00", 0),
        ("01:02:03.4", 1),
        ("-1T02:03:04.567", 3),
        ("12T00:00:00.000001", 6),
        ("23:59:59.999999", 6),
        ("-00:00:00.00000001", 8),
    ],
)
def testStringRoundTrip(text: str, precision: int):
    """Test that a canonical string survives parsing and formatting at its own precision."""
    assert Duration(text).toString(precision) == text


def testDomainErrors():
    """Test dividing, taking the modulus, or aligning by zero."""
    with pytest.raises(TimeDomainError):
        Duration("00:05:00") / 0
    with pytest.raises(TimeDomainError):
        Duration("00:05:00") / ZERO_DURATION
    with pytest.raises(TimeDomainError):
        Duration("00:05:00") % ZERO_DURATION
    with pytest.raises(TimeDomainError):
        Duration("00:05:00").round(ZERO_DURATION)
    with pytest.raises(ValueError, match="Unknown alignment mode"):
        alignTics(10, 3, "truncate")


@pytest.mark.parametrize(
    ("text", "rounded", "ceiling", "floored"),
    [
        ("00:07:30", "00:10:00", "00:10:00", "00:05:00"),
        ("00:07:29", "00:05:00", "00:10:00", "00:05:00"),
        ("00:10:00", "00:10:00", "00:10:00", "00:10:00"),
        ("-00:07:30", "-00:05:00", "-00:05:00", "-00:10:00"),
        ("-00:07:31", "-00:10:00", "-00:05:00", "-00:10:00"),
    ],
)
def testRounding(text: str, rounded: str, ceiling: str, floored: str):
    """Test the rounding family is defined on the numeric tic value."""
    alignment = Duration("00:05:00")
    duration = Duration(text)
    assert duration.round(alignment) == Duration(rounded)
    assert duration.ceil(alignment) == Duration(ceiling)
    assert duration.floor(alignment) == Duration(floored)
    # Negative alignments behave like their magnitude
    assert duration.floor(-alignment) == Duration(floored)


def testComparison():
    """Test total ordering, tolerance checks, and min/max."""
    short, long = Duration("00:00:01"), Duration("00:01:00")
    assert short < long
    assert long >= short
    assert short != long
    assert short != "00:00:01"
    assert short.equalToWithin(Duration("00:00:01.4"), Duration("00:00:00.5"))
    assert not short.equalToWithin(Duration("00:00:01.6"), Duration("-00:00:00.5"))
    assert Duration.min(long, short, long) == short
    assert Duration.max(long, short) == long
    assert len({Duration("00:01:00"), Duration("T00:01:00"), long}) == 1

    with pytest.raises(EmptyCollectionError):
        Duration.min()
    with pytest.raises(EmptyCollectionError):
        Duration.max()


def testMarsDurations():
    """Test parsing and formatting durations in Mars sols."""
    sol = Duration.fromMarsDuration("1M00:00:00")
    assert sol.tics == 8_877_524_414_700
    assert sol.toMarsDurationString(0) == "1M00:00:00"
    assert Duration.fromMarsDuration("-M12:00:00") == -(sol / 2)
    assert ZERO_DURATION.toMarsDurationString(0) == "M00:00:00"
    assert Duration("1T00:00:00").toMarsDurationString(0) == "M23:21:28"

    with pytest.raises(DurationFormatError):
        Duration.fromMarsDuration("1T00:00:00")
