"""Contains all the custom-defined exceptions used in :mod:`missiontime`."""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable


class TimeFormatError(ValueError):
    """Exception indicating a string doesn't match any of the accepted time grammars."""

    def __init__(self, text: str, expected: str, detail: str = ""):
        """Build the error message from the offending text and the grammar it failed to match.

        Args:
            text (``str``): string that failed to parse
            expected (``str``): description of the expected grammar(s)
            detail (``str``, optional): extra context appended to the message
        """
        self.text = text
        self.expected = expected
        msg = f"{text!r} does not match expected {expected}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class DurationFormatError(TimeFormatError):
    """Exception indicating a string doesn't match the duration grammar."""

    def __init__(self, text: str, detail: str = ""):
        """Build the error message for a malformed duration string."""
        super().__init__(text, "duration form [+-][DDD'T']HH:MM:SS[.ffffffff]", detail)


class EpochCatalogFormatError(ValueError):
    """Exception indicating a malformed context variable file (CVF)."""


class UnknownEpochError(LookupError):
    """Exception indicating an epoch name that isn't defined in the :class:`.EpochCatalog`."""

    def __init__(self, name: str, defined: Iterable[str]):
        """List every defined epoch name in the message to help debug typos.

        Args:
            name (``str``): requested epoch name
            defined (``Iterable[str]``): names currently defined in the catalog
        """
        self.name = name
        self.defined = tuple(defined)
        super().__init__(
            f"Epoch {name!r} is not defined. Defined epochs: {', '.join(self.defined) or '<none>'}",
        )

    def __str__(self) -> str:
        """Avoid the ``repr`` quoting that :class:`KeyError`-like exceptions apply."""
        return self.args[0]


class TimeDomainError(ArithmeticError):
    """Exception indicating arithmetic outside of its domain, e.g. a zero alignment or divisor."""


class EmptyCollectionError(ValueError):
    """Exception indicating a min/max reduction over zero values."""


class TimeConversionError(Exception):
    """Exception indicating a time scale service failure while converting an instant."""

    def __init__(self, message: str, instant=None, spacecraft_id: int | None = None):
        """Attach the request parameters to the error.

        Args:
            message (``str``): description of the failed conversion
            instant (:class:`.Instant`, optional): instant being converted
            spacecraft_id (``int``, optional): NAIF id of the spacecraft involved
        """
        self.instant = instant
        self.spacecraft_id = spacecraft_id
        super().__init__(message)


class LightTimeError(TimeConversionError):
    """Exception indicating a light time provider failure."""


class MissingEphemerisError(Exception):
    """Exception indicating that there is no ephemeris for a body at the requested epoch."""
