"""Defines the :class:`.EphemerisService` interface and the spline-based :class:`.TabulatedEphemeris`.

Positions are solar system barycenter (SSB) relative, in kilometers, at ephemeris time (TDB
seconds past J2000). One-way light time is solved by fixed-point iteration the same way as the
SPICE ``ltime`` routine: for a signal leaving the observer (``"->"``) the target position is
evaluated at ``et + lt``, for a signal arriving at the observer (``"<-"``) at ``et - lt``.

Tables are plain ``.dat`` files with one row per epoch:

.. code-block:: text

    # et            x (km)          y (km)          z (km)
    694267200.0     -2.56e7         1.33e8          5.77e7
"""

from __future__ import annotations

# Standard Library Imports
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import argsort, array, zeros
from scipy.interpolate import CubicSpline
from scipy.linalg import norm

# Local Imports
from ...common.exceptions import MissingEphemerisError
from ...common.logger import missiontimeLogDebug, missiontimeLogError
from ...common.utilities import loadDatFile
from .. import constants as const

# Type Checking Imports
if TYPE_CHECKING:
    # Third Party Imports
    from numpy import ndarray
    from numpy.typing import ArrayLike


LIGHT_TIME_ITERATIONS: int = 5
"""``int``: fixed-point iterations of the one-way light time solve."""


class LightTimeDirection(str, Enum):
    """Direction of a signal relative to the observer."""

    TRANSMIT = "->"
    RECEIVE = "<-"


class EphemerisService(ABC):
    """Source of SSB-relative body positions."""

    @abstractmethod
    def position(self, body_id: int, et: float) -> ndarray:
        """Return the SSB-relative position of `body_id` at `et`.

        Args:
            body_id (``int``): NAIF id of the body or spacecraft
            et (``float``): ephemeris time, TDB seconds past J2000

        Raises:
            MissingEphemerisError: no ephemeris covers `body_id` at `et`

        Returns:
            ``ndarray``: 3x1 position vector, km
        """
        raise NotImplementedError

    def lightTime(self, et: float, observer: int, direction: str | LightTimeDirection, target: int) -> float:
        """Return the one-way light time between `observer` at `et` and `target`.

        Args:
            et (``float``): ephemeris time at the observer, TDB seconds past J2000
            observer (``int``): NAIF id of the observer
            direction (``str | LightTimeDirection``): ``"->"`` for a signal sent by the observer,
                ``"<-"`` for a signal received by the observer
            target (``int``): NAIF id of the target

        Raises:
            MissingEphemerisError: no ephemeris covers one of the bodies
            ValueError: `direction` isn't one of ``"->"`` or ``"<-"``

        Returns:
            ``float``: light time, seconds
        """
        sign = 1.0 if LightTimeDirection(direction) is LightTimeDirection.TRANSMIT else -1.0
        observer_position = self.position(observer, et)
        light_time = 0.0
        for _ in range(LIGHT_TIME_ITERATIONS):
            target_position = self.position(target, et + sign * light_time)
            light_time = norm(target_position - observer_position) / const.SPEED_OF_LIGHT
        return float(light_time)


class TabulatedEphemeris(EphemerisService):
    """Ephemeris interpolated with cubic splines through tabulated SSB-relative positions.

    The solar system barycenter itself is always available at the origin.
    """

    def __init__(self):
        """Initialize an ephemeris with no bodies."""
        self._splines: dict[int, CubicSpline] = {}

    def bodies(self) -> tuple[int, ...]:
        """Return the NAIF ids of the tabulated bodies."""
        return tuple(sorted(self._splines))

    def addBody(self, body_id: int, epochs: ArrayLike, positions: ArrayLike):
        """Tabulate (or replace) the ephemeris of `body_id`.

        Args:
            body_id (``int``): NAIF id of the body or spacecraft
            epochs (``ArrayLike``): Nx1 ephemeris times, distinct
            positions (``ArrayLike``): Nx3 SSB-relative positions, km

        Raises:
            ValueError: fewer than two rows, or mismatched shapes
        """
        epochs = array(epochs, dtype=float)
        positions = array(positions, dtype=float)
        if epochs.ndim != 1 or positions.shape != (epochs.shape[0], 3):
            raise ValueError(f"Ephemeris of body {body_id} needs N epochs and Nx3 positions")
        if epochs.shape[0] < 2:
            raise ValueError(f"Ephemeris of body {body_id} needs at least two rows")

        order = argsort(epochs)
        self._splines[body_id] = CubicSpline(epochs[order], positions[order], axis=0)
        missiontimeLogDebug(f"Tabulated {epochs.shape[0]} ephemeris rows for body {body_id}")

    def loadBody(self, body_id: int, file_name: str):
        """Tabulate the ephemeris of `body_id` from a ``.dat`` file of ``et x y z`` rows."""
        table = array(loadDatFile(file_name))
        if table.ndim != 2 or table.shape[1] != 4:
            msg = f"Ephemeris file {file_name} must have rows of 'et x y z'"
            missiontimeLogError(msg)
            raise ValueError(msg)
        self.addBody(body_id, table[:, 0], table[:, 1:])

    def position(self, body_id: int, et: float) -> ndarray:
        """Return the interpolated SSB-relative position of `body_id` at `et`."""
        if body_id == const.SOLAR_SYSTEM_BARYCENTER_ID:
            return zeros(3)

        spline = self._splines.get(body_id)
        if spline is None:
            raise MissingEphemerisError(f"No ephemeris is loaded for body {body_id}")
        start, end = spline.x[0], spline.x[-1]
        if not start <= et <= end:
            raise MissingEphemerisError(
                f"Ephemeris of body {body_id} covers ET [{start}, {end}], requested {et}",
            )
        return spline(et)
