"""Module defining the time scale service interface and its kernel-file backed implementation."""

from __future__ import annotations

# Standard Library Imports
from abc import ABC, abstractmethod
from bisect import bisect_right
from collections import namedtuple
from fractions import Fraction
from math import sin
from typing import TYPE_CHECKING

# Local Imports
from ...common.behavioral_config import BehavioralConfig
from ...common.logger import missiontimeLogInfo
from ...common.utilities import loadJSONFile
from .. import constants as const
from ..time.duration import roundHalfUp
from . import MissingTimeScaleData
from .loaders import LocalDotDatLeapSecondLoader, ModuleDotDatLeapSecondLoader
from .sclk import SclkModel
from .solar import BodyRotationModel, SolClockModel

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from . import LeapSecond
    from .loaders import LeapSecondLoader


TT_MINUS_TAI_TICS: int = roundHalfUp(Fraction(str(const.TT_MINUS_TAI)) * const.TICS_PER_SECOND)
"""``int``: TT - TAI in tics."""


class TimeScaleService(ABC):
    """Abstract source of the data needed to convert between UTC, TAI, ET, SCLK, and solar time.

    Concrete services supply the leap second table and per-spacecraft models; the conversions
    between UTC, TAI, and ET are implemented here on top of them. UTC and TAI are handled as
    integer tic counts from the reference epoch, ET as ``float`` seconds past J2000.
    """

    @abstractmethod
    def leapSeconds(self) -> tuple[LeapSecond, ...]:
        """Return the leap second table, earliest first."""
        raise NotImplementedError

    @abstractmethod
    def sclkModel(self, spacecraft_id: int) -> SclkModel:
        """Return the spacecraft clock model of `spacecraft_id`.

        Raises:
            MissingTimeScaleData: no model is known for `spacecraft_id`
        """
        raise NotImplementedError

    @abstractmethod
    def solClockModel(self, spacecraft_id: int) -> SolClockModel:
        """Return the local mean solar time clock of `spacecraft_id`.

        Raises:
            MissingTimeScaleData: no model is known for `spacecraft_id`
        """
        raise NotImplementedError

    @abstractmethod
    def rotationModel(self, body_id: int, frame: str) -> BodyRotationModel:
        """Return the equation of time model of `body_id` in `frame`.

        Raises:
            MissingTimeScaleData: no model is known for `body_id` and `frame`
        """
        raise NotImplementedError

    def deltaAT(self, utc_tics: int) -> int:
        """Return TAI - UTC, in whole seconds, at a leap-free UTC tic count.

        Instants before the first table entry use the first entry's value.
        """
        table = self.leapSeconds()
        index = bisect_right([leap.effective_tics for leap in table], utc_tics) - 1
        return table[max(index, 0)].delta_at

    def utcToTAI(self, utc_tics: int, leap: bool = False) -> int:
        """Return the TAI tic count of a UTC reading; a leap second reading is one second later."""
        tai_tics = utc_tics + self.deltaAT(utc_tics) * const.TICS_PER_SECOND
        return tai_tics + const.TICS_PER_SECOND if leap else tai_tics

    def taiToUTC(self, tai_tics: int) -> tuple[int, bool]:
        """Return the UTC reading of a TAI tic count.

        A TAI instant inside an inserted leap second maps onto the tics of ``23:59:59.f`` with the
        leap flag set, so it renders as ``23:59:60.f``.

        Returns:
            ``tuple[int, bool]``: leap-free UTC tics, and whether the reading is a leap second
        """
        table = self.leapSeconds()
        previous = table[0].delta_at
        for leap_second in table:
            new_start = leap_second.effective_tics + leap_second.delta_at * const.TICS_PER_SECOND
            if tai_tics >= new_start:
                previous = leap_second.delta_at
                continue
            old_end = leap_second.effective_tics + previous * const.TICS_PER_SECOND
            if tai_tics >= old_end:
                return tai_tics - old_end + leap_second.effective_tics - const.TICS_PER_SECOND, True
            break
        return tai_tics - previous * const.TICS_PER_SECOND, False

    def tdbMinusTT(self, tt_seconds: float) -> float:
        """Return the periodic TDB - TT term at TT seconds past J2000."""
        mean_anomaly = const.TDB_M0 + const.TDB_M1 * tt_seconds
        eccentric_anomaly = mean_anomaly + const.TDB_EB * sin(mean_anomaly)
        return const.TDB_K * sin(eccentric_anomaly)

    def taiToET(self, tai_seconds: float) -> float:
        """Return ephemeris time for TAI seconds past J2000."""
        tt_seconds = tai_seconds + const.TT_MINUS_TAI
        return tt_seconds + self.tdbMinusTT(tt_seconds)

    def etToTAI(self, et: float) -> float:
        """Return TAI seconds past J2000 for an ephemeris time."""
        return self._etToTT(et) - const.TT_MINUS_TAI

    def _etToTT(self, et: float) -> float:
        tt_seconds = et
        for _ in range(3):
            tt_seconds = et - self.tdbMinusTT(tt_seconds)
        return tt_seconds

    def utcToET(self, utc_tics: int, leap: bool = False) -> float:
        """Return ephemeris time for a UTC reading."""
        tai_tics = self.utcToTAI(utc_tics, leap)
        tt_seconds = (tai_tics + TT_MINUS_TAI_TICS) / const.TICS_PER_SECOND
        return tt_seconds + self.tdbMinusTT(tt_seconds)

    def etToUTC(self, et: float) -> tuple[int, bool]:
        """Return the UTC reading, as leap-free tics and a leap flag, of an ephemeris time."""
        periodic = self.tdbMinusTT(self._etToTT(et))
        et_tics = roundHalfUp(Fraction(et) * const.TICS_PER_SECOND)
        periodic_tics = roundHalfUp(Fraction(periodic) * const.TICS_PER_SECOND)
        return self.taiToUTC(et_tics - periodic_tics - TT_MINUS_TAI_TICS)


class KernelTimeScaleService(TimeScaleService):
    """Time scale service backed by a leap second table and registered clock models.

    Models are registered directly or loaded from a JSON kernel file of the form:

    .. code-block:: json

        {
            "sclk": [{"spacecraft_id": -168, "coefficients": [...]}],
            "sol_clocks": [{"spacecraft_id": -168, "epoch_et": 666913418.97}],
            "rotation_models": []
        }

    The Mars24 rotation model is always registered for ``IAU_MARS``.
    """

    def __init__(self, leap_second_loader: LeapSecondLoader):
        """Initialize the service.

        Args:
            leap_second_loader (:class:`.LeapSecondLoader`): source of the leap second table
        """
        self._leap_second_loader = leap_second_loader
        self._sclk_models: dict[int, SclkModel] = {}
        self._sol_clocks: dict[int, SolClockModel] = {}
        self._rotation_models: dict[tuple[int, str], BodyRotationModel] = {}
        self.registerRotationModel(BodyRotationModel.mars())

    def leapSeconds(self) -> tuple[LeapSecond, ...]:
        """Return the leap second table of the configured loader."""
        return self._leap_second_loader.getLeapSeconds()

    def registerSclk(self, model: SclkModel):
        """Register (or replace) the spacecraft clock model of ``model.spacecraft_id``."""
        self._sclk_models[model.spacecraft_id] = model

    def registerSolClock(self, model: SolClockModel):
        """Register (or replace) the solar clock model of ``model.spacecraft_id``."""
        self._sol_clocks[model.spacecraft_id] = model

    def registerRotationModel(self, model: BodyRotationModel):
        """Register (or replace) the rotation model of ``model.body_id`` in ``model.frame``."""
        self._rotation_models[(model.body_id, model.frame.upper())] = model

    def sclkModel(self, spacecraft_id: int) -> SclkModel:
        """Return the registered spacecraft clock model of `spacecraft_id`."""
        try:
            return self._sclk_models[spacecraft_id]
        except KeyError as err:
            raise MissingTimeScaleData(f"No SCLK model is registered for spacecraft {spacecraft_id}") from err

    def solClockModel(self, spacecraft_id: int) -> SolClockModel:
        """Return the registered solar clock model of `spacecraft_id`."""
        try:
            return self._sol_clocks[spacecraft_id]
        except KeyError as err:
            raise MissingTimeScaleData(
                f"No solar clock model is registered for spacecraft {spacecraft_id}",
            ) from err

    def rotationModel(self, body_id: int, frame: str) -> BodyRotationModel:
        """Return the registered rotation model of `body_id` in `frame`."""
        try:
            return self._rotation_models[(body_id, frame.upper())]
        except KeyError as err:
            raise MissingTimeScaleData(
                f"No rotation model is registered for body {body_id} in frame {frame!r}",
            ) from err

    def loadKernelFile(self, file_name: str):
        """Register every model defined in a JSON kernel file.

        Args:
            file_name (``str``): path of the JSON kernel file

        Raises:
            pydantic.ValidationError: a model in the file is malformed
        """
        kernel = loadJSONFile(file_name)
        for sclk in kernel.get("sclk", []):
            self.registerSclk(SclkModel(**sclk))
        for sol_clock in kernel.get("sol_clocks", []):
            self.registerSolClock(SolClockModel(**sol_clock))
        for rotation in kernel.get("rotation_models", []):
            self.registerRotationModel(BodyRotationModel(**rotation))
        missiontimeLogInfo(f"Loaded time kernel file: {file_name}")


LoaderTag = namedtuple("LoaderTag", ("loader_name", "loader_location"))
"""NamedTuple: Tag used to identify different :class:`.LeapSecondLoader`'s."""

_LOADER_MAP: dict[str, type[LeapSecondLoader]] = {
    "ModuleDotDatLeapSecondLoader": ModuleDotDatLeapSecondLoader,
    "LocalDotDatLeapSecondLoader": LocalDotDatLeapSecondLoader,
}
"""dict[str, type[LeapSecondLoader]]: Maps loader class names to loader class references."""

_LEAP_SECOND_LOADERS: dict[LoaderTag, LeapSecondLoader] = {}
"""dict[LoaderTag, LeapSecondLoader]: Stores configured loaders based on tag."""


def _loadLoader(loader_name: str | None = None, loader_location: str | None = None) -> LeapSecondLoader:
    """Return leap second loader specified by `loader_name` and `loader_location`.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` to use.
        loader_location (str, optional): Location that the specified loader will load from.

    Returns:
        LeapSecondLoader: cached :class:`.LeapSecondLoader` for the tag.
    """
    behave_config = BehavioralConfig.getConfig()
    if loader_name is None:
        loader_name = behave_config.time_scales.LoaderName

    if loader_location is None:
        loader_location = behave_config.time_scales.LoaderLocation

    tag = LoaderTag(loader_name, loader_location)
    loader = _LEAP_SECOND_LOADERS.get(tag)
    if not loader:
        try:
            loader = _LOADER_MAP[loader_name](loader_location)
        except KeyError:
            err = f"Specified loader '{loader_name}' is undefined"
            raise ValueError(err)  # noqa: B904
        _LEAP_SECOND_LOADERS[tag] = loader
    return loader


def loadTimeScaleService(
    loader_name: str | None = None,
    loader_location: str | None = None,
    kernel_file: str | None = None,
) -> KernelTimeScaleService:
    """Build a :class:`.KernelTimeScaleService` from the ``[time_scales]`` configuration.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.LeapSecondLoader` to use.
        loader_location (str, optional): Location that the specified loader will load from.
        kernel_file (str, optional): JSON kernel file to load. Defaults to the configured
            ``KernelFile``, if any.

    Returns:
        KernelTimeScaleService: service sharing the cached leap second loader.
    """
    service = KernelTimeScaleService(_loadLoader(loader_name, loader_location))
    if kernel_file is None:
        kernel_file = BehavioralConfig.getConfig().time_scales.KernelFile
    if kernel_file:
        service.loadKernelFile(kernel_file)
    return service
