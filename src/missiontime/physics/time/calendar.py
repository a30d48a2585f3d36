"""Calendar arithmetic and the calendar string grammars accepted by :class:`.Time`.

All functions work on integer tic counts from the reference epoch ``2000-001T12:00:00`` on a
leap-second-free UTC count. A leap second reading (``23:59:60.f``) is carried as the tics of
``23:59:59.f`` plus a ``leap`` flag, which only affects rendering.
"""

from __future__ import annotations

# Standard Library Imports
import re
from fractions import Fraction
from typing import TYPE_CHECKING, NamedTuple

# Local Imports
from ...common.exceptions import TimeFormatError
from .. import constants as const
from .duration import clampPrecision, fractionDigitsToTics, roundHalfUp

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing import Final


MONTH_NAMES: Final[tuple[str, ...]] = (
    "JANUARY",
    "FEBRUARY",
    "MARCH",
    "APRIL",
    "MAY",
    "JUNE",
    "JULY",
    "AUGUST",
    "SEPTEMBER",
    "OCTOBER",
    "NOVEMBER",
    "DECEMBER",
)

_CLOCK_REGEX: Final[str] = (
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:\.(?P<fraction>\d*))?)?"
)

DOY_PATTERN: Final[re.Pattern] = re.compile(
    rf"^\s*(?P<year>\d{{4}})-(?P<doy>\d{{3}})(?:T{_CLOCK_REGEX})?\s*Z?\s*$",
)
"""``re.Pattern``: day-of-year form, ``YYYY-DDD[THH:MM[:SS[.f]]]``."""

ISO_PATTERN: Final[re.Pattern] = re.compile(
    rf"^\s*(?P<year>\d{{4}})-(?P<month>\d{{2}})-(?P<day>\d{{2}})(?:[T ]{_CLOCK_REGEX})?\s*Z?\s*$",
)
"""``re.Pattern``: ISO calendar form, ``YYYY-MM-DD[THH:MM[:SS[.f]]][Z]``."""

CALENDAR_PATTERN: Final[re.Pattern] = re.compile(
    rf"^\s*(?P<year>\d{{4}})\s+(?P<month>[A-Za-z]{{3,9}})\.?\s+(?P<day>\d{{1,2}})(?:\s+{_CLOCK_REGEX})?\s*$",
)
"""``re.Pattern``: free-text calendar form, ``YYYY Mon D [HH:MM[:SS[.f]]]``."""

JULIAN_PATTERN: Final[re.Pattern] = re.compile(r"^\s*JD\s*(?P<julian>\d+(?:\.\d*)?)\s*$", re.IGNORECASE)
"""``re.Pattern``: Julian date form, ``JD nnnnnnn.fff``."""

CALENDAR_GRAMMARS: Final[str] = (
    "time forms YYYY-DDDTHH:MM:SS[.f], YYYY-MM-DDTHH:MM:SS[.f], 'YYYY Mon D HH:MM:SS[.f]', or 'JD n.f'"
)

_UNIX_EPOCH_DAYS: Final[int] = 719468
_REFERENCE_DAYS: Final[int] = 10957
"""``int``: days from 1970-01-01 to 2000-01-01."""


class CalendarFields(NamedTuple):
    """Broken-down UTC calendar reading of an instant."""

    year: int
    month: int
    day: int
    day_of_year: int
    hour: int
    minute: int
    second: int
    fraction: int
    """``int``: tics past the whole second."""


def isLeapYear(year: int) -> bool:
    """Return whether `year` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def daysInYear(year: int) -> int:
    """Return the number of days in `year`."""
    return 366 if isLeapYear(year) else 365


def daysInMonth(year: int, month: int) -> int:
    """Return the number of days in `month` of `year`."""
    if month == 2:
        return 29 if isLeapYear(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


def daysFromCivil(year: int, month: int, day: int) -> int:
    """Return the number of days from 2000-01-01 to the given proleptic Gregorian date."""
    year -= month <= 2
    era = year // 400
    year_of_era = year - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * 146097 + day_of_era - _UNIX_EPOCH_DAYS - _REFERENCE_DAYS


def civilFromDays(days: int) -> tuple[int, int, int]:
    """Return the ``(year, month, day)`` that is `days` days after 2000-01-01."""
    days += _UNIX_EPOCH_DAYS + _REFERENCE_DAYS
    era = days // 146097
    day_of_era = days - era * 146097
    year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    shifted_month = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * shifted_month + 2) // 5 + 1
    month = shifted_month + (3 if shifted_month < 10 else -9)
    return year_of_era + era * 400 + (month <= 2), month, day


def dayOfYear(year: int, month: int, day: int) -> int:
    """Return the 1-based day of year."""
    return daysFromCivil(year, month, day) - daysFromCivil(year, 1, 1) + 1


def ticsFromFields(year: int, month: int, day: int, hour=0, minute=0, second=0, fraction=0) -> int:
    """Return the tic count of a UTC calendar reading.

    Args:
        year (``int``): Gregorian year
        month (``int``): month, 1-12
        day (``int``): day of month
        hour (``int``, optional): hour of day
        minute (``int``, optional): minute of hour
        second (``int``, optional): second of minute, 0-59
        fraction (``int``, optional): tics past the whole second

    Returns:
        ``int``: tics from the reference epoch
    """
    days = daysFromCivil(year, month, day)
    return (
        days * const.TICS_PER_DAY
        - const.TICS_PER_HALF_DAY
        + hour * const.TICS_PER_HOUR
        + minute * const.TICS_PER_MINUTE
        + second * const.TICS_PER_SECOND
        + fraction
    )


def fieldsFromTics(tics: int, leap: bool = False) -> CalendarFields:
    """Break a tic count into UTC calendar fields.

    Args:
        tics (``int``): tics from the reference epoch
        leap (``bool``, optional): whether `tics` is a leap second reading, rendered as second 60

    Returns:
        :class:`.CalendarFields`: calendar reading
    """
    days, time_of_day = divmod(tics + const.TICS_PER_HALF_DAY, const.TICS_PER_DAY)
    year, month, day = civilFromDays(days)
    hour, rem = divmod(time_of_day, const.TICS_PER_HOUR)
    minute, rem = divmod(rem, const.TICS_PER_MINUTE)
    second, fraction = divmod(rem, const.TICS_PER_SECOND)
    if leap and time_of_day >= const.TICS_PER_DAY - const.TICS_PER_SECOND:
        second += 1
    return CalendarFields(year, month, day, dayOfYear(year, month, day), hour, minute, second, fraction)


def roundedFields(tics: int, leap: bool, precision: int) -> tuple[CalendarFields, int]:
    """Round `tics` to `precision` digits, with carry, and break it into calendar fields.

    Returns:
        ``tuple``: calendar fields and the clamped precision
    """
    precision = clampPrecision(precision)
    unit = 10 ** (const.MAX_PRECISION - precision)
    return fieldsFromTics(roundHalfUp(Fraction(tics, unit)) * unit, leap), precision


def _clockText(fields: CalendarFields, precision: int) -> str:
    # Second 60 of a leap second must survive, so the fields are rendered as they are.
    text = f"{fields.hour:02d}:{fields.minute:02d}:{fields.second:02d}"
    if precision:
        text += f".{fields.fraction // 10 ** (const.MAX_PRECISION - precision):0{precision}d}"
    return text


def formatDayOfYear(tics: int, leap: bool, precision: int) -> str:
    """Render ``YYYY-DDDTHH:MM:SS[.f]``."""
    fields, precision = roundedFields(tics, leap, precision)
    return f"{fields.year:04d}-{fields.day_of_year:03d}T{_clockText(fields, precision)}"


def formatIsoCalendar(tics: int, leap: bool, precision: int) -> str:
    """Render ``YYYY-MM-DDTHH:MM:SS[.f]``."""
    fields, precision = roundedFields(tics, leap, precision)
    return f"{fields.year:04d}-{fields.month:02d}-{fields.day:02d}T{_clockText(fields, precision)}"


def formatCalendar(tics: int, leap: bool, precision: int) -> str:
    """Render ``YYYY MON DD HH:MM:SS[.f]``, e.g. ``2020 JAN 02 00:00:00.000``."""
    fields, precision = roundedFields(tics, leap, precision)
    month = MONTH_NAMES[fields.month - 1][:3]
    return f"{fields.year:04d} {month} {fields.day:02d} {_clockText(fields, precision)}"


def formatJulian(tics: int, precision: int) -> str:
    """Render ``JD nnnnnnn.fff`` with `precision` fractional day digits."""
    precision = max(0, int(precision))
    scale = 10**precision
    scaled = roundHalfUp(Fraction(tics * scale, const.TICS_PER_DAY)) + const.J2000_JULIAN_DATE * scale
    whole, fraction = divmod(scaled, scale)
    if precision == 0:
        return f"JD {whole}"
    return f"JD {whole}.{fraction:0{precision}d}"


def _monthNumber(name: str) -> int | None:
    upper = name.upper()
    for index, full_name in enumerate(MONTH_NAMES):
        if upper in (full_name, full_name[:3]) or (len(upper) >= 3 and full_name.startswith(upper)):
            return index + 1
    return None


def _clockFields(match: re.Match, text: str) -> tuple[int, int, int, int, bool]:
    hour = int(match.group("hour") or 0)
    minute = int(match.group("minute") or 0)
    second = int(match.group("second") or 0)
    fraction = fractionDigitsToTics(match.group("fraction"))
    if hour > 23 or minute > 59 or second > 60:
        raise TimeFormatError(text, CALENDAR_GRAMMARS, "clock field out of range")
    leap = second == 60
    if leap:
        if hour != 23 or minute != 59:
            raise TimeFormatError(text, CALENDAR_GRAMMARS, "second 60 is only valid at 23:59")
        second = 59
    return hour, minute, second, fraction, leap


def parseCalendarString(text: str) -> tuple[int, bool]:
    """Parse any of the calendar grammars into a tic count.

    Args:
        text (``str``): day-of-year, ISO, free-text calendar, or Julian date string

    Raises:
        TimeFormatError: `text` matches none of the grammars, or a field is out of range

    Returns:
        ``tuple[int, bool]``: tics from the reference epoch, and whether the reading is a leap
        second
    """
    if not isinstance(text, str):
        raise TimeFormatError(repr(text), CALENDAR_GRAMMARS)

    if match := JULIAN_PATTERN.match(text):
        days = Fraction(match.group("julian")) - const.J2000_JULIAN_DATE
        return roundHalfUp(days * const.TICS_PER_DAY), False

    if match := DOY_PATTERN.match(text):
        year = int(match.group("year"))
        day_of_year = int(match.group("doy"))
        if not 1 <= day_of_year <= daysInYear(year):
            raise TimeFormatError(text, CALENDAR_GRAMMARS, f"day of year {day_of_year} is out of range")
        month, day = civilFromDays(daysFromCivil(year, 1, 1) + day_of_year - 1)[1:]

    elif match := ISO_PATTERN.match(text):
        year, month, day = int(match.group("year")), int(match.group("month")), int(match.group("day"))

    elif match := CALENDAR_PATTERN.match(text):
        year, day = int(match.group("year")), int(match.group("day"))
        month = _monthNumber(match.group("month"))
        if month is None:
            raise TimeFormatError(text, CALENDAR_GRAMMARS, f"unknown month {match.group('month')!r}")

    else:
        raise TimeFormatError(text, CALENDAR_GRAMMARS)

    if not 1 <= month <= 12 or not 1 <= day <= daysInMonth(year, month):
        raise TimeFormatError(text, CALENDAR_GRAMMARS, "calendar date is out of range")

    hour, minute, second, fraction, leap = _clockFields(match, text)
    return ticsFromFields(year, month, day, hour, minute, second, fraction), leap
