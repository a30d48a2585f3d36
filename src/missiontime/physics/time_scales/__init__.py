"""Time scale data package: leap seconds, SCLK coefficients, and solar clock models."""

# Standard Library Imports
import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class LeapSecond:
    """Data class defining one row of a leap second table."""

    date: datetime.date
    """datetime.date: UTC date at whose start `delta_at` takes effect."""

    delta_at: int
    """int: Difference in atomic time w.r.t UTC from `date` onward (seconds)."""

    effective_tics: int
    """int: tics of 00:00:00 UTC on `date`, from the reference epoch on a leap-free count."""


class TimeScaleServiceError(Exception):
    """Error raised by a :class:`.TimeScaleService` that can't complete a request."""


class MissingTimeScaleData(TimeScaleServiceError):  # noqa: N818
    """Error thrown when no SCLK, solar clock, or rotation model is registered for an id."""


# Local Imports
# forward-facing API import
from .service import KernelTimeScaleService, TimeScaleService, loadTimeScaleService  # noqa: E402, F401
