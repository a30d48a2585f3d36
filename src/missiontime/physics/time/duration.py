"""Defines the fixed-point :class:`.Duration` class and its string grammar.

A :class:`.Duration` is a signed, integer count of tics (:data:`.TICS_PER_SECOND` per second).
All arithmetic is exact integer arithmetic, except multiplication or division by a non-integral
factor, which rounds to the nearest tic with halves rounded toward positive infinity.

.. code-block:: python

    step = Duration("00:05:00")
    assert step * 12 == Duration("01:00:00")
    assert Duration("-1T02:00:00").toString(0) == "-1T02:00:00"
    assert Duration("00:59:59.8").toString(0) == "01:00:00"
"""

from __future__ import annotations

# Standard Library Imports
import re
from fractions import Fraction
from functools import total_ordering
from math import floor
from numbers import Integral, Real
from typing import TYPE_CHECKING

# Local Imports
from ...common.exceptions import DurationFormatError, EmptyCollectionError, TimeDomainError
from ...common.logger import missiontimeLogError
from .. import constants as const
from .context import resolveContext

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing import Final

    # Local Imports
    from .context import TimeContext


DURATION_REGEX: Final[str] = (
    r"(?P<sign>[+-])?(?:(?P<days>\d*)T)?(?P<hours>\d{2,}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d*))?"
)
"""``str``: ``[sign][D'T']HH:MM:SS[.fraction]``, shared by the epoch-relative grammar."""

DURATION_PATTERN: Final[re.Pattern] = re.compile(rf"^\s*{DURATION_REGEX}\s*$")

MARS_DURATION_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*(?P<sign>[+-])?(?P<days>\d*)M(?P<hours>\d{2,}):(?P<minutes>\d{2}):(?P<seconds>\d{2})"
    r"(?:\.(?P<fraction>\d*))?\s*$",
)

MARS_SOL_RATIO: Final[Fraction] = Fraction(str(const.MARS_SOL_SECONDS)) / const.SECONDS_PER_DAY
"""``Fraction``: Earth seconds per Mars second."""

_FORMAT_FIELDS: Final[tuple[tuple[str, int], ...]] = (
    ("d", const.SECONDS_PER_DAY * const.MILLISECONDS_PER_SECOND),
    ("H", const.SECONDS_PER_HOUR * const.MILLISECONDS_PER_SECOND),
    ("m", const.SECONDS_PER_MINUTE * const.MILLISECONDS_PER_SECOND),
    ("s", const.MILLISECONDS_PER_SECOND),
    ("S", 1),
)
"""Pattern letters of :meth:`.Duration.format`, largest unit first, with their size in ms."""


def roundHalfUp(value: Fraction | int) -> int:
    """Round an exact rational to the nearest integer, with halves rounded toward +infinity."""
    return floor(value + Fraction(1, 2))


def secondsToTics(seconds: Real | str) -> int:
    """Convert a number of seconds to the nearest tic count.

    Args:
        seconds (``Real | str``): seconds as a number, or as a decimal string for exact conversion

    Returns:
        ``int``: nearest tic count, halves rounded toward +infinity
    """
    return roundHalfUp(Fraction(seconds) * const.TICS_PER_SECOND)


def fractionDigitsToTics(digits: str | None) -> int:
    """Convert the digits after a decimal point into tics, rounding beyond tic resolution."""
    if not digits:
        return 0
    return roundHalfUp(Fraction(int(digits), 10 ** len(digits)) * const.TICS_PER_SECOND)


def clampPrecision(precision: int) -> int:
    """Clamp a requested number of fractional digits to ``[0, MAX_PRECISION]``."""
    return max(0, min(int(precision), const.MAX_PRECISION))


def roundToPrecision(tics: int, precision: int) -> int:
    """Round a non-negative tic count to `precision` fractional second digits."""
    unit = 10 ** (const.MAX_PRECISION - clampPrecision(precision))
    return roundHalfUp(Fraction(tics, unit)) * unit


def formatClock(tics: int, precision: int) -> str:
    """Render a tic count smaller than one day as ``HH:MM:SS[.fraction]`` without rounding."""
    precision = clampPrecision(precision)
    hours, rem = divmod(tics, const.TICS_PER_HOUR)
    minutes, rem = divmod(rem, const.TICS_PER_MINUTE)
    seconds, frac = divmod(rem, const.TICS_PER_SECOND)
    text = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if precision:
        text += f".{frac // 10 ** (const.MAX_PRECISION - precision):0{precision}d}"
    return text


def formatDayClock(tics: int, precision: int, separator: str = "T", always_separate: bool = False) -> str:
    """Render a signed tic count as ``[-][D<separator>]HH:MM:SS[.fraction]``.

    The magnitude is rounded to `precision` digits before it is split into fields so carries
    propagate all the way into the day count.

    Args:
        tics (``int``): signed tic count
        precision (``int``): number of fractional second digits, clamped to ``[0, 8]``
        separator (``str``, optional): character between the day count and the clock
        always_separate (``bool``, optional): whether to emit `separator` for a zero day count

    Returns:
        ``str``: formatted string
    """
    magnitude = roundToPrecision(abs(tics), precision)
    sign = "-" if tics < 0 and magnitude else ""
    days, rem = divmod(magnitude, const.TICS_PER_DAY)
    if days:
        prefix = f"{days}{separator}"
    elif always_separate:
        prefix = separator
    else:
        prefix = ""
    return f"{sign}{prefix}{formatClock(rem, precision)}"


def parseClockFields(match: re.Match, text: str) -> int:
    """Convert a matched duration-like string into a signed tic count.

    Args:
        match (``re.Match``): match with ``sign``, ``days``, ``hours``, ``minutes``, ``seconds``, &
            ``fraction`` groups
        text (``str``): original string, used in error messages

    Raises:
        DurationFormatError: minutes or seconds are out of range, or hours overflow a day count

    Returns:
        ``int``: signed tic count
    """
    days = int(match.group("days") or 0)
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    seconds = int(match.group("seconds"))
    if minutes >= const.SECONDS_PER_MINUTE or seconds >= const.SECONDS_PER_MINUTE:
        raise DurationFormatError(text, "minutes and seconds must be less than 60")
    if match.group("days") and hours >= 24:
        raise DurationFormatError(text, "hours must be less than 24 when a day count is given")

    tics = (
        days * const.TICS_PER_DAY
        + hours * const.TICS_PER_HOUR
        + minutes * const.TICS_PER_MINUTE
        + seconds * const.TICS_PER_SECOND
        + fractionDigitsToTics(match.group("fraction"))
    )
    return -tics if match.group("sign") == "-" else tics


def alignTics(tics: int, alignment: int, mode: str) -> int:
    """Snap a tic count onto a multiple of `alignment`.

    With ``r = tics mod |alignment|`` (non-negative), ``floor = tics - r``, ``ceil`` adds one
    alignment when ``r`` is nonzero, and ``round`` picks ``ceil`` when ``2r >= |alignment|``.

    Args:
        tics (``int``): tic count to align
        alignment (``int``): alignment in tics
        mode (``str``): one of ``"round"``, ``"ceil"``, or ``"floor"``

    Raises:
        TimeDomainError: `alignment` is zero

    Returns:
        ``int``: aligned tic count
    """
    step = abs(alignment)
    if step == 0:
        raise TimeDomainError("Cannot align to a zero duration")
    remainder = tics % step
    lower = tics - remainder
    upper = lower + step if remainder else lower
    if mode == "floor":
        return lower
    if mode == "ceil":
        return upper
    if mode == "round":
        return upper if 2 * remainder >= step else lower
    raise ValueError(f"Unknown alignment mode: {mode!r}")


def _tokenizePattern(pattern: str) -> list[tuple[str, str]]:
    """Split a :meth:`.Duration.format` pattern into ``(kind, text)`` tokens.

    `kind` is a field letter for runs of ``d``, ``H``, ``m``, ``s``, or ``S``, and ``""`` for
    literal text. Text inside single quotes is literal; ``''`` is a literal quote.
    """
    tokens: list[tuple[str, str]] = []
    index = 0
    while index < len(pattern):
        char = pattern[index]
        if char == "'":
            end = pattern.find("'", index + 1)
            if end == -1:
                raise ValueError(f"Unterminated quote in duration pattern: {pattern!r}")
            tokens.append(("", pattern[index + 1 : end] if end > index + 1 else "'"))
            index = end + 1
        elif char in "dHmsS":
            end = index
            while end < len(pattern) and pattern[end] == char:
                end += 1
            tokens.append((char, pattern[index:end]))
            index = end
        else:
            tokens.append(("", char))
            index += 1
    return tokens


@total_ordering
class Duration:
    """Signed elapsed interval stored as an integer tic count."""

    __slots__ = ("_tics",)

    def __init__(self, text: str | Duration):
        """Parse a duration string ``[+-][D'T']HH:MM:SS[.fraction]``.

        The day count is optional even when ``T`` is present, so ``"T10:00:00"`` is ten hours.
        Hours may exceed 24 when no day count is given (``"48:00:00"`` is two days). The fraction
        may have any length and is rounded to tic resolution.

        Args:
            text (``str | Duration``): string to parse, or another duration to copy

        Raises:
            DurationFormatError: `text` does not match the duration grammar
        """
        if isinstance(text, Duration):
            self._tics = text.tics
            return

        match = DURATION_PATTERN.match(text) if isinstance(text, str) else None
        if match is None:
            missiontimeLogError(f"Could not parse duration string: {text!r}")
            raise DurationFormatError(str(text))
        self._tics = parseClockFields(match, text)

    @classmethod
    def fromTics(cls, tics: int) -> Duration:
        """Create a :class:`.Duration` directly from a tic count."""
        duration = cls.__new__(cls)
        duration._tics = int(tics)  # noqa: SLF001
        return duration

    @classmethod
    def fromSeconds(cls, seconds: Real) -> Duration:
        """Create a :class:`.Duration` from a number of seconds, rounded to the nearest tic."""
        return SECOND_DURATION.multiply(seconds)

    @classmethod
    def fromMilliseconds(cls, milliseconds: Real) -> Duration:
        """Create a :class:`.Duration` from a number of milliseconds, rounded to the nearest tic."""
        return MILLISECOND_DURATION.multiply(milliseconds)

    @classmethod
    def fromMinutes(cls, minutes: Real) -> Duration:
        """Create a :class:`.Duration` from a number of minutes, rounded to the nearest tic."""
        return MINUTE_DURATION.multiply(minutes)

    @classmethod
    def fromHours(cls, hours: Real) -> Duration:
        """Create a :class:`.Duration` from a number of hours, rounded to the nearest tic."""
        return HOUR_DURATION.multiply(hours)

    @classmethod
    def fromDays(cls, days: Real) -> Duration:
        """Create a :class:`.Duration` from a number of days, rounded to the nearest tic."""
        return DAY_DURATION.multiply(days)

    @classmethod
    def fromMarsDuration(cls, text: str) -> Duration:
        """Parse a Mars duration ``[+-][sols]MHH:MM:SS[.fraction]``.

        The clock fields are Mars hours, minutes, and seconds, i.e. 1/86400 of a sol each.

        Args:
            text (``str``): Mars duration string, e.g. ``"1M00:00:00"``

        Raises:
            DurationFormatError: `text` does not match the Mars duration grammar

        Returns:
            :class:`.Duration`: equivalent elapsed Earth time
        """
        match = MARS_DURATION_PATTERN.match(text)
        if match is None:
            missiontimeLogError(f"Could not parse Mars duration string: {text!r}")
            raise DurationFormatError(text, "Mars durations are of the form [+-][sols]MHH:MM:SS[.f]")
        return cls.fromTics(roundHalfUp(parseClockFields(match, text) * MARS_SOL_RATIO))

    @property
    def tics(self) -> int:
        """``int``: signed tic count of this duration."""
        return self._tics

    def getDays(self) -> int:
        """Return the whole number of days, truncated toward zero."""
        return self._truncate(const.TICS_PER_DAY)

    def getHours(self) -> int:
        """Return the whole number of hours, truncated toward zero."""
        return self._truncate(const.TICS_PER_HOUR)

    def getMinutes(self) -> int:
        """Return the whole number of minutes, truncated toward zero."""
        return self._truncate(const.TICS_PER_MINUTE)

    def getSeconds(self) -> int:
        """Return the whole number of seconds, truncated toward zero."""
        return self._truncate(const.TICS_PER_SECOND)

    def getMilliseconds(self) -> int:
        """Return the whole number of milliseconds, truncated toward zero."""
        return self._truncate(const.TICS_PER_MILLISECOND)

    def _truncate(self, unit: int) -> int:
        whole = abs(self._tics) // unit
        return -whole if self._tics < 0 else whole

    def totalSeconds(self) -> float:
        """Return the duration in seconds as a ``float``."""
        return self._tics / const.TICS_PER_SECOND

    def add(self, other: Duration) -> Duration:
        """Return the exact sum of two durations."""
        return Duration.fromTics(self._tics + other.tics)

    def subtract(self, other: Duration) -> Duration:
        """Return the exact difference of two durations."""
        return Duration.fromTics(self._tics - other.tics)

    def multiply(self, factor: Real) -> Duration:
        """Scale this duration.

        Integer factors are exact; other real factors are applied exactly to the binary value of
        the factor and rounded to the nearest tic.

        Args:
            factor (``Real``): scale factor

        Returns:
            :class:`.Duration`: scaled duration
        """
        if isinstance(factor, Integral):
            return Duration.fromTics(self._tics * int(factor))
        return Duration.fromTics(roundHalfUp(self._tics * Fraction(factor)))

    def divide(self, divisor: Real | Duration) -> Duration | float:
        """Divide by a scalar, returning a :class:`.Duration`, or by a duration, returning a ratio.

        Args:
            divisor (``Real | Duration``): scalar or duration divisor

        Raises:
            TimeDomainError: `divisor` is zero

        Returns:
            :class:`.Duration` | ``float``: rounded quotient, or the ratio of the two durations
        """
        if isinstance(divisor, Duration):
            if divisor.tics == 0:
                raise TimeDomainError("Cannot divide by a zero duration")
            return self._tics / divisor.tics

        if divisor == 0:
            raise TimeDomainError("Cannot divide a duration by zero")
        return Duration.fromTics(roundHalfUp(Fraction(self._tics) / Fraction(divisor)))

    def mod(self, modulus: Duration) -> Duration:
        """Return the remainder of this duration divided by `modulus`.

        The result has the sign of this duration and a magnitude less than ``|modulus|``.

        Raises:
            TimeDomainError: `modulus` is zero
        """
        if modulus.tics == 0:
            raise TimeDomainError("Cannot take the modulus of a zero duration")
        remainder = abs(self._tics) % abs(modulus.tics)
        return Duration.fromTics(-remainder if self._tics < 0 else remainder)

    def negate(self) -> Duration:
        """Return the additive inverse of this duration."""
        return Duration.fromTics(-self._tics)

    def abs(self) -> Duration:
        """Return the magnitude of this duration."""
        return Duration.fromTics(abs(self._tics))

    def round(self, alignment: Duration) -> Duration:
        """Return the nearest multiple of `alignment`, with halves rounded up."""
        return Duration.fromTics(alignTics(self._tics, alignment.tics, "round"))

    def ceil(self, alignment: Duration) -> Duration:
        """Return the smallest multiple of `alignment` not less than this duration."""
        return Duration.fromTics(alignTics(self._tics, alignment.tics, "ceil"))

    def floor(self, alignment: Duration) -> Duration:
        """Return the largest multiple of `alignment` not greater than this duration."""
        return Duration.fromTics(alignTics(self._tics, alignment.tics, "floor"))

    def equalToWithin(self, other: Duration, tolerance: Duration) -> bool:
        """Return whether two durations differ by no more than `tolerance`."""
        return abs(self._tics - other.tics) <= abs(tolerance.tics)

    @staticmethod
    def min(*durations: Duration) -> Duration:
        """Return the smallest of `durations`.

        Raises:
            EmptyCollectionError: no durations were given
        """
        if not durations:
            raise EmptyCollectionError("Duration.min() requires at least one duration")
        return min(durations)

    @staticmethod
    def max(*durations: Duration) -> Duration:
        """Return the largest of `durations`.

        Raises:
            EmptyCollectionError: no durations were given
        """
        if not durations:
            raise EmptyCollectionError("Duration.max() requires at least one duration")
        return max(durations)

    def toString(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Format as ``[-][D'T']HH:MM:SS[.fraction]``.

        Args:
            precision (``int``, optional): fractional second digits, clamped to ``[0, 8]``.
                Defaults to the output precision of `context`.
            context (:class:`.TimeContext`, optional): context supplying the default precision

        Returns:
            ``str``: formatted duration, rounded with carry
        """
        if precision is None:
            precision = resolveContext(context).defaults.output_precision
        return formatDayClock(self._tics, precision)

    def toMarsDurationString(self, precision: int | None = None, context: TimeContext | None = None) -> str:
        """Format as a Mars duration ``[-][sols]MHH:MM:SS[.fraction]``.

        The ``M`` separator is always present, e.g. ``"M00:00:00"`` for a zero duration.
        """
        if precision is None:
            precision = resolveContext(context).defaults.output_precision
        mars_tics = roundHalfUp(Fraction(self._tics) / MARS_SOL_RATIO)
        return formatDayClock(mars_tics, precision, separator="M", always_separate=True)

    def format(self, pattern: str) -> str:
        """Format with a custom pattern.

        Pattern letters are ``d`` (days), ``H`` (hours), ``m`` (minutes), ``s`` (seconds), and ``S``
        (milliseconds). Text inside single quotes and any other character is copied through. A
        field absorbs the larger units whose letters are absent from the pattern, numbers are not
        zero-padded, and milliseconds following a seconds field are always three digits. The
        duration is rounded to the millisecond first.

        Example:
            ``Duration("00:45:11.009").format("mm'M'ss'S'SSS'ms'")`` returns ``"45M11S009ms"``.

        Args:
            pattern (``str``): pattern to render

        Returns:
            ``str``: formatted duration
        """
        tokens = _tokenizePattern(pattern)
        present = {kind for kind, _ in tokens if kind}

        remaining = roundHalfUp(Fraction(abs(self._tics), const.TICS_PER_MILLISECOND))
        values: dict[str, int] = {}
        for letter, size in _FORMAT_FIELDS:
            if letter in present:
                values[letter], remaining = divmod(remaining, size)

        pieces = ["-"] if self._tics < 0 else []
        after_seconds = False
        for kind, text in tokens:
            if not kind:
                pieces.append(text)
            elif kind == "S" and after_seconds:
                pieces.append(f"{values[kind]:03d}")
            else:
                pieces.append(str(values[kind]))
            if kind:
                after_seconds = kind == "s"
        return "".join(pieces)

    def __str__(self) -> str:
        """Format with the default output precision."""
        return self.toString()

    def __repr__(self) -> str:
        """Format with full precision so the representation round trips."""
        return f"Duration({self.toString(const.MAX_PRECISION)!r})"

    def __eq__(self, other) -> bool:
        """Compare tic counts."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self._tics == other.tics

    def __lt__(self, other) -> bool:
        """Order by tic count."""
        if not isinstance(other, Duration):
            return NotImplemented
        return self._tics < other.tics

    def __hash__(self) -> int:
        """Hash the tic count."""
        return hash(("Duration", self._tics))

    def __bool__(self) -> bool:
        """Return whether the duration is nonzero."""
        return self._tics != 0

    def __add__(self, other):
        """Add two durations; adding an instant is handled by the instant."""
        if isinstance(other, Duration):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        """Subtract two durations."""
        if isinstance(other, Duration):
            return self.subtract(other)
        return NotImplemented

    def __mul__(self, factor):
        """Scale by a real factor."""
        if isinstance(factor, Real):
            return self.multiply(factor)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        """Divide by a real factor or a duration."""
        if isinstance(divisor, (Duration, Real)):
            return self.divide(divisor)
        return NotImplemented

    def __mod__(self, modulus):
        """Remainder with the sign of the dividend."""
        if isinstance(modulus, Duration):
            return self.mod(modulus)
        return NotImplemented

    def __neg__(self) -> Duration:
        """Negate."""
        return self.negate()

    def __pos__(self) -> Duration:
        """Identity."""
        return self

    def __abs__(self) -> Duration:
        """Magnitude."""
        return self.abs()


ZERO_DURATION: Final[Duration] = Duration.fromTics(0)
MICROSECOND_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_SECOND // 1_000_000)
MILLISECOND_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_MILLISECOND)
SECOND_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_SECOND)
MINUTE_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_MINUTE)
HOUR_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_HOUR)
DAY_DURATION: Final[Duration] = Duration.fromTics(const.TICS_PER_DAY)
