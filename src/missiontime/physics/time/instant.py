"""Defines the :class:`.Instant` base class and the absolute :class:`.Time` instant.

An instant is an integer tic count from the reference epoch ``2000-001T12:00:00`` UTC on a
leap-second-free count, so ``Time("2000-001T12:00:00") == Time.fromTics(0)`` and exact tic
arithmetic rolls ``2016-366T23:59:59 + 1s`` over to ``2017-001T00:00:00``. A leap second reading
(``23:59:60.f``) keeps the tics of ``23:59:59.f`` plus a ``leap`` marker that only affects
rendering; it never participates in equality or ordering.

:class:`.Time` and :class:`.EpochRelativeTime` share every conversion defined on
:class:`.Instant`; they differ in how they are constructed, shifted, and serialized.
"""

from __future__ import annotations

# Standard Library Imports
import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from enum import Enum
from fractions import Fraction
from functools import total_ordering
from math import floor
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

# Local Imports
from ...common.exceptions import EmptyCollectionError, TimeConversionError, TimeFormatError
from ...common.logger import missiontimeLogError
from .. import constants as const
from ..time_scales import TimeScaleServiceError
from .calendar import (
    fieldsFromTics,
    formatCalendar,
    formatDayOfYear,
    formatIsoCalendar,
    formatJulian,
    parseCalendarString,
)
from .context import resolveContext
from .duration import (
    Duration,
    alignTics,
    clampPrecision,
    formatClock,
    fractionDigitsToTics,
    roundHalfUp,
    secondsToTics,
)

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Callable
    from typing import Any, Final

    # Local Imports
    from .context import TimeContext


REFERENCE_TIME_STRING: Final[str] = "2000-001T00:00:00"
"""``str``: default reference for :meth:`.Instant.round`, :meth:`.Instant.ceil`, & :meth:`.Instant.floor`."""

J2000_DATETIME: Final[datetime] = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)
"""``datetime``: the reference epoch as an aware ``datetime``."""

LMST_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*(?:Sol-(?P<sol>\d+)M|(?P<compact>\d+)\s+)"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})(?:\.(?P<fraction>\d*))?\s*$",
)
"""``re.Pattern``: ``Sol-NNNNMHH:MM:SS[.f]`` or the compact ``NNNNNN HH:MM:SS[.f]``."""

LMST_GRAMMAR: Final[str] = "LMST form Sol-NNNNMHH:MM:SS[.f] or NNNNNN HH:MM:SS[.f]"

EXCEL_FORMATS: Final[tuple[str, ...]] = (
    "%m/%d/%y %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%y %H:%M",
    "%m/%d/%Y %H:%M",
)
"""``tuple``: ``strptime`` formats accepted by :meth:`.Time.fromExcelUTC`."""


class AmPm(str, Enum):
    """Half of a (solar) day."""

    AM = "AM"
    PM = "PM"


def _lookupModel(getter: Callable[..., Any], *keys, description: str, instant=None, spacecraft_id=None):
    """Fetch a model from the time scale service, re-raising service failures with context."""
    try:
        return getter(*keys)
    except TimeScaleServiceError as err:
        msg = f"Could not convert {instant if instant is not None else 'instant'} {description}: {err}"
        missiontimeLogError(msg)
        raise TimeConversionError(msg, instant=instant, spacecraft_id=spacecraft_id) from err


def _formatSol(local_tics: int, precision: int, separator: str, sol_digits: int) -> str:
    """Render a local solar tic count as ``Sol-NNNN<separator>HH:MM:SS[.f]``, rounded with carry."""
    precision = clampPrecision(precision)
    unit = 10 ** (const.MAX_PRECISION - precision)
    sol, time_of_sol = divmod(roundHalfUp(Fraction(local_tics, unit)) * unit, const.TICS_PER_DAY)
    return f"Sol-{sol:0{sol_digits}d}{separator}{formatClock(time_of_sol, precision)}"


@total_ordering
class Instant(ABC):  # noqa: PLR0904
    """Absolute point in time stored as an integer tic count.

    Every conversion accepts an optional ``context``; when omitted, the process-wide default
    :class:`.TimeContext` supplies defaults and the time scale service.
    """

    __slots__ = ("_tics", "_leap")

    @property
    def tics(self) -> int:
        """``int``: tics from ``2000-001T12:00:00`` UTC on a leap-second-free count."""
        return self._tics

    @property
    def leap(self) -> bool:
        """``bool``: whether this reading falls inside an inserted leap second."""
        return self._leap

    @abstractmethod
    def add(self, duration: Duration, context: TimeContext | None = None) -> Instant:
        """Return this instant shifted by `duration`."""
        raise NotImplementedError

    def subtract(self, other: Duration | Instant, context: TimeContext | None = None) -> Instant | Duration:
        """Shift back by a :class:`.Duration`, or return the :class:`.Duration` between two instants."""
        if isinstance(other, Instant):
            return Duration.fromTics(self._tics - other.tics)
        return self.add(-other, context=context)

    def equalToWithin(self, other: Instant, tolerance: Duration) -> bool:
        """Return whether two instants differ by no more than `tolerance`."""
        return abs(self._tics - other.tics) <= abs(tolerance.tics)

    def _align(self, alignment: Duration, reference: Instant | None, mode: str) -> Time:
        if reference is None:
            reference = Time(REFERENCE_TIME_STRING)
        offset = alignTics(self._tics - reference.tics, alignment.tics, mode)
        return Time.fromTics(reference.tics + offset)

    def round(self, alignment: Duration, reference: Instant | None = None) -> Time:
        """Round to the nearest ``reference + k * alignment``, with halves rounded up.

        Args:
            alignment (:class:`.Duration`): spacing of the grid to snap to
            reference (:class:`.Instant`, optional): grid origin. Defaults to ``2000-001T00:00:00``.

        Returns:
            :class:`.Time`: aligned instant
        """
        return self._align(alignment, reference, "round")

    def ceil(self, alignment: Duration, reference: Instant | None = None) -> Time:
        """Round up to the next ``reference + k * alignment``."""
        return self._align(alignment, reference, "ceil")

    def floor(self, alignment: Duration, reference: Instant | None = None) -> Time:
        """Round down to the previous ``reference + k * alignment``."""
        return self._align(alignment, reference, "floor")

    @staticmethod
    def min(*instants: Instant) -> Instant:
        """Return the earliest of `instants`.

        Raises:
            EmptyCollectionError: no instants were given
        """
        if not instants:
            raise EmptyCollectionError("min() requires at least one instant")
        return min(instants)

    @staticmethod
    def max(*instants: Instant) -> Instant:
        """Return the latest of `instants`.

        Raises:
            EmptyCollectionError: no instants were given
        """
        if not instants:
            raise EmptyCollectionError("max() requires at least one instant")
        return max(instants)

    # Calendar renderings

    @staticmethod
    def _precision(precision: int | None, context: TimeContext | None) -> int:
        if precision is None:
            return resolveContext(context).defaults.output_precision
        return precision

    def toUTC(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the day-of-year form ``YYYY-DDDTHH:MM:SS[.f]``, rounded with carry."""
        return formatDayOfYear(self._tics, self._leap, self._precision(precision, context))

    def toISOC(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the ISO calendar form ``YYYY-MM-DDTHH:MM:SS[.f]``, rounded with carry."""
        return formatIsoCalendar(self._tics, self._leap, self._precision(precision, context))

    def toCalendar(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the calendar form ``YYYY MON DD HH:MM:SS[.f]``, rounded with carry."""
        return formatCalendar(self._tics, self._leap, self._precision(precision, context))

    def toJulian(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the Julian date form ``JD nnnnnnn.fff`` with `precision` fractional day digits."""
        return formatJulian(self._tics, self._precision(precision, context))

    def getMidnightUTC(self) -> Time:
        """Return 00:00:00 UTC of this instant's day."""
        time_of_day = (self._tics + const.TICS_PER_HALF_DAY) % const.TICS_PER_DAY
        return Time.fromTics(self._tics - time_of_day)

    def getTimeOfDay(self) -> Duration:
        """Return the elapsed time since 00:00:00 UTC of this instant's day."""
        return Duration.fromTics((self._tics + const.TICS_PER_HALF_DAY) % const.TICS_PER_DAY)

    def toUtcAmPm(self) -> AmPm:
        """Return whether this instant is before or after noon UTC."""
        return AmPm.AM if self.getTimeOfDay().tics < const.TICS_PER_HALF_DAY else AmPm.PM

    def toDatetime(self) -> datetime:
        """Return an aware UTC ``datetime``, rounded to the microsecond.

        A leap second reading maps onto the ``23:59:59`` it duplicates.
        """
        microseconds = roundHalfUp(Fraction(self._tics, const.TICS_PER_SECOND // 1_000_000))
        return J2000_DATETIME + timedelta(microseconds=microseconds)

    def toTimezone(self, zone: str) -> datetime:
        """Return an aware ``datetime`` in the IANA time zone `zone`."""
        return self.toDatetime().astimezone(ZoneInfo(zone))

    def toTimezoneString(self, zone: str, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the day-of-year form of the local wall clock in the IANA time zone `zone`."""
        offset = ZoneInfo(zone).utcoffset(self.toDatetime())
        offset_tics = (offset.days * const.SECONDS_PER_DAY + offset.seconds) * const.TICS_PER_SECOND
        return formatDayOfYear(self._tics + offset_tics, self._leap, self._precision(precision, context))

    def toUnixMilliseconds(self) -> int:
        """Return whole milliseconds since 1970-01-01T00:00:00 UTC."""
        return (self._tics - const.UNIX_EPOCH_SECONDS * const.TICS_PER_SECOND) // const.TICS_PER_MILLISECOND

    def toExcelUTC(self, four_digit_year: bool = False) -> str:
        """Render the spreadsheet form ``MM/DD/YY HH:MM:SS``, rounded to the second."""
        rounded = roundHalfUp(Fraction(self._tics, const.TICS_PER_SECOND)) * const.TICS_PER_SECOND
        fields = fieldsFromTics(rounded, self._leap)
        year = f"{fields.year:04d}" if four_digit_year else f"{fields.year % 100:02d}"
        return (
            f"{fields.month:02d}/{fields.day:02d}/{year} "
            f"{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}"
        )

    def toExcelSerial(self) -> float:
        """Return the spreadsheet serial day number (days since 1899-12-30T00:00:00)."""
        return self._tics / const.TICS_PER_DAY - const.EXCEL_EPOCH_DAYS

    # Time scale conversions

    def toET(self, context: TimeContext | None = None) -> float:
        """Return ephemeris time, TDB seconds past J2000."""
        return resolveContext(context).time_scales.utcToET(self._tics, self._leap)

    def toTAI(self, context: TimeContext | None = None) -> float:
        """Return TAI seconds past J2000."""
        tai_tics = resolveContext(context).time_scales.utcToTAI(self._tics, self._leap)
        return tai_tics / const.TICS_PER_SECOND

    def toGPSSeconds(self) -> float:
        """Return GPS seconds since 1980-01-06, using the fixed GPS - UTC offset of 2021."""
        gps_tics = self._tics + (const.GPS_LEAP_SECONDS - const.GPS_EPOCH_SECONDS) * const.TICS_PER_SECOND
        return gps_tics / const.TICS_PER_SECOND

    def toGPS(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Render the GPS calendar reading (TAI - 19 s) in day-of-year form."""
        context = resolveContext(context)
        gps_tics = context.time_scales.utcToTAI(self._tics, self._leap)
        gps_tics -= const.GPS_TAI_OFFSET * const.TICS_PER_SECOND
        return formatDayOfYear(gps_tics, False, self._precision(precision, context))

    def toSCLK(self, spacecraft_id: int | None = None, context: TimeContext | None = None) -> str:
        """Render the spacecraft clock reading ``p/CCCCCCCCCC-FFFFF``.

        Args:
            spacecraft_id (``int``, optional): NAIF spacecraft id. Defaults to the context default.
            context (:class:`.TimeContext`, optional): context supplying the SCLK model

        Raises:
            TimeConversionError: no SCLK model is available for `spacecraft_id`

        Returns:
            ``str``: clock reading
        """
        context = resolveContext(context)
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.sclkModel,
            spacecraft_id,
            description=f"to SCLK for spacecraft {spacecraft_id}",
            instant=self,
            spacecraft_id=spacecraft_id,
        )
        return model.encode(self.toET(context))

    def toSCLKD(self, spacecraft_id: int | None = None, context: TimeContext | None = None) -> float:
        """Return the decimal spacecraft clock reading (coarse counts, unrounded)."""
        context = resolveContext(context)
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.sclkModel,
            spacecraft_id,
            description=f"to SCLKD for spacecraft {spacecraft_id}",
            instant=self,
            spacecraft_id=spacecraft_id,
        )
        return model.toDecimal(self.toET(context))

    def _localMeanTics(self, spacecraft_id: int | None, context: TimeContext) -> tuple[int, int, float]:
        """Return the LMST tic count, sol digits, and ephemeris time at this instant."""
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.solClockModel,
            spacecraft_id,
            description=f"to LMST for spacecraft {spacecraft_id}",
            instant=self,
            spacecraft_id=spacecraft_id,
        )
        et = self.toET(context)
        return roundHalfUp(Fraction(model.solsAt(et)) * const.TICS_PER_DAY), model.sol_digits, et

    def toLMST(
        self,
        spacecraft_id: int | None = None,
        precision: int | None = None,
        context: TimeContext | None = None,
    ) -> str:
        """Render local mean solar time ``Sol-NNNNMHH:MM:SS[.f]``.

        Args:
            spacecraft_id (``int``, optional): NAIF id of the surface asset. Defaults to the
                context default.
            precision (``int``, optional): fractional second digits. Defaults to the context default.
            context (:class:`.TimeContext`, optional): context supplying the solar clock model

        Raises:
            TimeConversionError: no solar clock model is available for `spacecraft_id`

        Returns:
            ``str``: local mean solar time
        """
        context = resolveContext(context)
        local_tics, sol_digits, _ = self._localMeanTics(spacecraft_id, context)
        return _formatSol(local_tics, self._precision(precision, context), "M", sol_digits)

    def toSolNumber(self, spacecraft_id: int | None = None, context: TimeContext | None = None) -> int:
        """Return the LMST sol number."""
        return floor(self.toFractionalSols(spacecraft_id, context))

    def toFractionalSols(self, spacecraft_id: int | None = None, context: TimeContext | None = None) -> float:
        """Return the LMST sols elapsed since the solar clock epoch."""
        local_tics, _, _ = self._localMeanTics(spacecraft_id, resolveContext(context))
        return local_tics / const.TICS_PER_DAY

    def toLmstAmPm(self, spacecraft_id: int | None = None, context: TimeContext | None = None) -> AmPm:
        """Return whether this instant is before or after local mean solar noon."""
        local_tics, _, _ = self._localMeanTics(spacecraft_id, resolveContext(context))
        return AmPm.AM if local_tics % const.TICS_PER_DAY < const.TICS_PER_HALF_DAY else AmPm.PM

    def toLTST(
        self,
        spacecraft_id: int | None = None,
        body_id: int | None = None,
        frame: str | None = None,
        precision: int = 0,
        context: TimeContext | None = None,
    ) -> str:
        """Render local true solar time ``Sol-NNNNTHH:MM:SS[.f]``.

        Local true solar time is local mean solar time plus the body's equation of time; the sol
        number follows the true solar day, so it wraps where the true sun crosses midnight.

        Args:
            spacecraft_id (``int``, optional): NAIF id of the surface asset
            body_id (``int``, optional): NAIF id of the body. Defaults to the context default.
            frame (``str``, optional): body-fixed frame. Defaults to the context default.
            precision (``int``, optional): fractional second digits. Defaults to 0.
            context (:class:`.TimeContext`, optional): context supplying the models

        Raises:
            TimeConversionError: no solar clock or rotation model is available

        Returns:
            ``str``: local true solar time
        """
        context = resolveContext(context)
        if body_id is None:
            body_id = context.defaults.lst_body_id
        if frame is None:
            frame = context.defaults.lst_body_frame
        local_tics, sol_digits, et = self._localMeanTics(spacecraft_id, context)
        rotation = _lookupModel(
            context.time_scales.rotationModel,
            body_id,
            frame,
            description=f"to LTST for body {body_id} in frame {frame}",
            instant=self,
            spacecraft_id=spacecraft_id,
        )
        local_tics += secondsToTics(rotation.equationOfTime(et))
        return _formatSol(local_tics, precision, "T", sol_digits)

    # Python protocol

    def __eq__(self, other) -> bool:
        """Compare tic counts; the leap marker and the variant don't participate."""
        if not isinstance(other, Instant):
            return NotImplemented
        return self._tics == other.tics

    def __lt__(self, other) -> bool:
        """Order by tic count."""
        if not isinstance(other, Instant):
            return NotImplemented
        return self._tics < other.tics

    def __hash__(self) -> int:
        """Hash the tic count, consistent with equality across variants."""
        return hash(("Instant", self._tics))

    def __add__(self, other):
        """Shift by a :class:`.Duration`."""
        if isinstance(other, Duration):
            return self.add(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        """Shift back by a :class:`.Duration`, or measure the :class:`.Duration` between instants."""
        if isinstance(other, (Duration, Instant)):
            return self.subtract(other)
        return NotImplemented


class Time(Instant):
    """Absolute instant parsed from, and rendered to, calendar strings."""

    __slots__ = ()

    def __init__(self, value: str | Instant):
        """Parse a calendar string, or convert any :class:`.Instant` to an absolute :class:`.Time`.

        Accepted grammars are ``YYYY-DDDTHH:MM:SS[.f]``, ``YYYY-MM-DDTHH:MM:SS[.f][Z]``,
        ``YYYY Mon D HH:MM:SS[.f]``, and ``JD nnnnnnn.fff``; the time of day is optional and the
        seconds field may be ``60`` at ``23:59``.

        Args:
            value (``str | Instant``): calendar string, or instant to convert

        Raises:
            TimeFormatError: `value` matches none of the calendar grammars
        """
        if isinstance(value, Instant):
            self._tics, self._leap = value.tics, value.leap
            return

        try:
            self._tics, self._leap = parseCalendarString(value)
        except TimeFormatError as err:
            missiontimeLogError(f"Could not parse time string: {err}")
            raise

    @classmethod
    def _create(cls, tics: int, leap: bool = False) -> Time:
        instant = cls.__new__(cls)
        instant._tics, instant._leap = int(tics), bool(leap)  # noqa: SLF001
        return instant

    @classmethod
    def fromTics(cls, tics: int, leap: bool = False) -> Time:
        """Create a :class:`.Time` directly from a tic count, optionally as a leap second reading."""
        return cls._create(tics, leap)

    @classmethod
    def fromDatetime(cls, value: datetime) -> Time:
        """Create a :class:`.Time` from a ``datetime``; naive values are taken as UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - J2000_DATETIME
        seconds = delta.days * const.SECONDS_PER_DAY + delta.seconds
        return cls._create(seconds * const.TICS_PER_SECOND + delta.microseconds * 100)

    @classmethod
    def fromET(cls, et: float, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from ephemeris time, TDB seconds past J2000."""
        return cls._create(*resolveContext(context).time_scales.etToUTC(et))

    @classmethod
    def fromTDBString(cls, text: str, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from a calendar string read on the TDB time scale."""
        tdb_tics, _ = parseCalendarString(text)
        return cls.fromET(Fraction(tdb_tics, const.TICS_PER_SECOND), context=context)

    @classmethod
    def fromTAI(cls, tai_seconds: float, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from TAI seconds past J2000."""
        return cls._create(*resolveContext(context).time_scales.taiToUTC(secondsToTics(tai_seconds)))

    @classmethod
    def fromGPSSeconds(cls, gps_seconds: float) -> Time:
        """Create a :class:`.Time` from GPS seconds, using the fixed GPS - UTC offset of 2021."""
        offset = (const.GPS_EPOCH_SECONDS - const.GPS_LEAP_SECONDS) * const.TICS_PER_SECOND
        return cls._create(secondsToTics(gps_seconds) + offset)

    @classmethod
    def fromGPS(cls, text: str, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from a GPS calendar reading (TAI - 19 s)."""
        gps_tics, _ = parseCalendarString(text)
        tai_tics = gps_tics + const.GPS_TAI_OFFSET * const.TICS_PER_SECOND
        return cls._create(*resolveContext(context).time_scales.taiToUTC(tai_tics))

    @classmethod
    def fromExcelUTC(cls, text: str) -> Time:
        """Create a :class:`.Time` from ``MM/DD/YY[YY] HH:MM[:SS]``; surrounding whitespace is ignored.

        Raises:
            TimeFormatError: `text` matches none of the spreadsheet formats
        """
        for excel_format in EXCEL_FORMATS:
            try:
                return cls.fromDatetime(datetime.strptime(text.strip(), excel_format))
            except ValueError:
                continue
        missiontimeLogError(f"Could not parse spreadsheet time string: {text!r}")
        raise TimeFormatError(text, "spreadsheet form MM/DD/YY[YY] HH:MM[:SS]")

    @classmethod
    def fromSCLK(cls, text: str, spacecraft_id: int | None = None, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from a spacecraft clock reading.

        Raises:
            TimeFormatError: `text` doesn't match the SCLK grammar
            TimeConversionError: no SCLK model is available for `spacecraft_id`
        """
        context = resolveContext(context)
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.sclkModel,
            spacecraft_id,
            description=f"from SCLK {text!r} for spacecraft {spacecraft_id}",
            spacecraft_id=spacecraft_id,
        )
        try:
            et = model.decode(text)
        except TimeFormatError as err:
            missiontimeLogError(f"Could not parse SCLK string: {err}")
            raise
        return cls.fromET(et, context=context)

    @classmethod
    def fromSCLKD(cls, sclkd: float, spacecraft_id: int | None = None, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from a decimal spacecraft clock reading in partition 1."""
        context = resolveContext(context)
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.sclkModel,
            spacecraft_id,
            description=f"from SCLKD {sclkd} for spacecraft {spacecraft_id}",
            spacecraft_id=spacecraft_id,
        )
        return cls.fromET(model.fromDecimal(sclkd), context=context)

    @classmethod
    def fromLMST(cls, text: str, spacecraft_id: int | None = None, context: TimeContext | None = None) -> Time:
        """Create a :class:`.Time` from ``Sol-NNNNMHH:MM:SS[.f]`` or ``NNNNNN HH:MM:SS[.f]``.

        Raises:
            TimeFormatError: `text` doesn't match the LMST grammar
            TimeConversionError: no solar clock model is available for `spacecraft_id`
        """
        match = LMST_PATTERN.match(text)
        if match is None:
            missiontimeLogError(f"Could not parse LMST string: {text!r}")
            raise TimeFormatError(text, LMST_GRAMMAR)
        minute, second = int(match.group("minute")), int(match.group("second"))
        if minute >= const.SECONDS_PER_MINUTE or second >= const.SECONDS_PER_MINUTE:
            raise TimeFormatError(text, LMST_GRAMMAR, "minutes and seconds must be less than 60")

        context = resolveContext(context)
        if spacecraft_id is None:
            spacecraft_id = context.defaults.spacecraft_id
        model = _lookupModel(
            context.time_scales.solClockModel,
            spacecraft_id,
            description=f"from LMST {text!r} for spacecraft {spacecraft_id}",
            spacecraft_id=spacecraft_id,
        )
        sol = int(match.group("sol") or match.group("compact"))
        local_tics = (
            sol * const.TICS_PER_DAY
            + int(match.group("hour")) * const.TICS_PER_HOUR
            + minute * const.TICS_PER_MINUTE
            + second * const.TICS_PER_SECOND
            + fractionDigitsToTics(match.group("fraction"))
        )
        return cls.fromET(model.etAt(local_tics / const.TICS_PER_DAY), context=context)

    def add(self, duration: Duration, context: TimeContext | None = None) -> Time:
        """Return this instant shifted by `duration`.

        By default the shift is exact tic arithmetic on the leap-free count. When the context
        enables ``use_service_math``, the shift is applied on the service's atomic (TAI) scale, so
        crossing an inserted leap second yields its ``23:59:60`` reading.
        """
        context = resolveContext(context)
        if not context.defaults.use_service_math:
            return Time.fromTics(self._tics + duration.tics)

        service = context.time_scales
        return Time._create(*service.taiToUTC(service.utcToTAI(self._tics, self._leap) + duration.tics))

    def setFromString(self, text: str):
        """Re-parse this instance in place; it is left untouched if `text` doesn't parse.

        Raises:
            TimeFormatError: `text` matches none of the calendar grammars
        """
        parsed = Time(text)
        self._tics, self._leap = parsed.tics, parsed.leap

    def __str__(self) -> str:
        """Render the day-of-year form with the default output precision."""
        return self.toUTC()

    def __repr__(self) -> str:
        """Render the full precision day-of-year form."""
        return f"Time({self.toUTC(const.MAX_PRECISION)!r})"
