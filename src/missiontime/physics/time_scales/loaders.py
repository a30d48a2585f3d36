"""Module defining the infrastructure used to retrieve leap second tables from various sources."""

from __future__ import annotations

# Standard Library Imports
import datetime
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path

# Local Imports
from ...common.logger import missiontimeLogDebug
from ...common.utilities import loadDatFile
from .. import constants as const
from ..time.calendar import daysFromCivil
from . import LeapSecond


class LeapSecondLoader(ABC):
    """Abstract class defining how leap second tables should be loaded."""

    def __init__(self, location: str):
        """Initializes the loader.

        Args:
            location (str): Specifies where the leap second content to load is located.
        """
        self._location: str = location
        self._leap_seconds: list[LeapSecond] = []
        self._is_loaded: bool = False

    def getLeapSeconds(self) -> tuple[LeapSecond, ...]:
        """Return the leap second table, sorted by effective date.

        Returns:
            tuple[LeapSecond, ...]: every loaded :class:`.LeapSecond`, earliest first.
        """
        if not self._is_loaded:
            self.load()
        return tuple(self._leap_seconds)

    @abstractmethod
    def load(self):
        """Load the leap second content into local memory.

        A concrete implementation of this method should set the :attr:`._is_loaded` to ``True``.
        """
        raise NotImplementedError

    def setLeapSeconds(self, leap_seconds: list[LeapSecond]):
        """Replace the leap second table, e.g. to test against a future leap second.

        Args:
            leap_seconds (list[LeapSecond]): table rows, in any order.
        """
        self._leap_seconds = sorted(leap_seconds, key=lambda leap: leap.effective_tics)
        self._is_loaded = True


def buildLeapSecond(year: int, month: int, day: int, delta_at: int) -> LeapSecond:
    """Create a :class:`.LeapSecond` effective at the start of the given UTC date."""
    effective_tics = daysFromCivil(year, month, day) * const.TICS_PER_DAY - const.TICS_PER_HALF_DAY
    return LeapSecond(
        date=datetime.date(year, month, day),
        delta_at=delta_at,
        effective_tics=effective_tics,
    )


class DotDatLeapSecondLoader(LeapSecondLoader, ABC):
    """Abstract interface defining how to properly load a '.dat' leap second file.

    Each row holds ``year month day delta_at``.
    """

    def _parseDatData(self, raw_data: list[list[float]]):
        """Loads the specified `raw_data` into local memory.

        Args:
            raw_data (list[list[float]]): leap second file contents parsed using
                :meth:`.loadDatFile()`.
        """
        self.setLeapSeconds(
            [buildLeapSecond(int(row[0]), int(row[1]), int(row[2]), int(row[3])) for row in raw_data],
        )
        missiontimeLogDebug(f"Loaded {len(self._leap_seconds)} leap seconds from {self._location!r}")


class ModuleDotDatLeapSecondLoader(DotDatLeapSecondLoader):
    """Concrete class defining how leap seconds should be loaded as a Python module resource."""

    LEAP_SECOND_MODULE: str = "missiontime.physics.data.leapseconds"
    """``str``: defines leap second data module location."""

    def load(self) -> None:
        """Loads the leap second resources."""
        res = resources.files(self.LEAP_SECOND_MODULE).joinpath(self._location)
        with resources.as_file(res) as file_resource:
            raw_data = loadDatFile(file_resource)
        self._parseDatData(raw_data)


class LocalDotDatLeapSecondLoader(DotDatLeapSecondLoader):
    """Concrete class defining how leap seconds should be loaded from a local '.dat' file."""

    def __init__(self, location: str) -> None:
        """Initializes the loader.

        Args:
            location (str): Path of the leap second file to load.
        """
        super().__init__(location)
        self._path = Path(self._location)

    def load(self) -> None:
        """Load the leap second content into local memory."""
        raw_data = loadDatFile(self._path)
        self._parseDatData(raw_data)
