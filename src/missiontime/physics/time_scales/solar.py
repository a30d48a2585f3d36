"""Solar clock models: local mean solar time (LMST) and local true solar time (LTST).

LMST is modeled as a uniform count of sols from a landing-site epoch. LTST adds the body's
equation of time, computed from the series expansion of the equation of center and the
fictitious mean sun used by the Mars24 algorithm.

References:
    #. Allison & McEwen, "A post-Pathfinder evaluation of areocentric solar coordinates with
       improved timing recipes for Mars seasonal/diurnal climate studies", 2000
"""

from __future__ import annotations

# Third Party Imports
import numpy as np
from pydantic import BaseModel, Field

# Local Imports
from .. import constants as const

DEG_PER_LOCAL_SECOND = 360.0 / const.SECONDS_PER_DAY
"""``float``: degrees of hour angle per local (1/86400 sol) second."""


class SolClockModel(BaseModel):
    """Uniform local mean solar time clock of one surface asset."""

    spacecraft_id: int
    """``int``: NAIF id of the spacecraft (lander) that keeps this clock."""

    epoch_et: float
    """``float``: ephemeris time of ``Sol-0000M00:00:00``, seconds past J2000."""

    sol_seconds: float = Field(default=const.MARS_SOL_SECONDS, gt=0.0)
    """``float``: length of one mean solar day, ephemeris seconds."""

    sol_digits: int = Field(default=4, gt=0)
    """``int``: zero-padded width of the rendered sol number."""

    body_id: int = const.MARS_BODY_ID
    """``int``: NAIF id of the body the asset sits on."""

    def solsAt(self, et: float) -> float:
        """Return the fractional sols elapsed since the clock epoch at `et`."""
        return (et - self.epoch_et) / self.sol_seconds

    def etAt(self, sols: float) -> float:
        """Return the ephemeris time at which `sols` fractional sols have elapsed."""
        return self.epoch_et + sols * self.sol_seconds


class BodyRotationModel(BaseModel):
    """Analytic equation of time of a body, in the Mars24 form.

    With ``d`` ephemeris days since J2000, the mean anomaly is ``M = M0 + M1 d``, the equation
    of center is ``EOC = sum_k C_k sin(k M)``, the areocentric solar longitude is
    ``Ls = alpha_FMS + EOC``, and the equation of time (degrees) is
    ``EOT = sum_k E_k sin(2k Ls) - EOC``.
    """

    body_id: int
    """``int``: NAIF id of the body."""

    frame: str
    """``str``: body-fixed frame name."""

    mean_anomaly: tuple[float, float]
    """``tuple``: mean anomaly at J2000 (deg) and its rate (deg/day)."""

    mean_sun: tuple[float, float]
    """``tuple``: right ascension of the fictitious mean sun at J2000 (deg) and its rate (deg/day)."""

    center_coefficients: list[float]
    """``list``: amplitudes (deg) of ``sin(k M)`` in the equation of center, ``k = 1, 2, ...``."""

    center_drift: float = 0.0
    """``float``: growth of the first equation of center amplitude (deg/day)."""

    time_coefficients: list[float]
    """``list``: amplitudes (deg) of ``sin(2k Ls)`` in the equation of time, ``k = 1, 2, ...``."""

    @classmethod
    def mars(cls) -> BodyRotationModel:
        """Return the Mars24 model in the ``IAU_MARS`` frame."""
        return cls(
            body_id=const.MARS_BODY_ID,
            frame="IAU_MARS",
            mean_anomaly=(19.3871, 0.52402073),
            mean_sun=(270.3871, 0.524038496),
            center_coefficients=[10.691, 0.623, 0.050, 0.005, 0.0005],
            center_drift=3.0e-7,
            time_coefficients=[2.861, -0.071, 0.002],
        )

    def equationOfTime(self, et: float) -> float:
        """Return true minus mean solar time at `et`, in local seconds (1/86400 sol)."""
        days = et / const.SECONDS_PER_DAY
        mean_anomaly = np.radians(self.mean_anomaly[0] + self.mean_anomaly[1] * days)

        amplitudes = np.array(self.center_coefficients)
        amplitudes[0] += self.center_drift * days
        harmonics = np.arange(1, len(amplitudes) + 1)
        center = np.dot(amplitudes, np.sin(harmonics * mean_anomaly))

        solar_longitude = np.radians(self.mean_sun[0] + self.mean_sun[1] * days + center)
        harmonics = np.arange(1, len(self.time_coefficients) + 1)
        equation = np.dot(self.time_coefficients, np.sin(2 * harmonics * solar_longitude)) - center
        return float(equation) / DEG_PER_LOCAL_SECOND
