"""Light time package: one-way signal travel time and SCET/ERT/ETT conversions.

A :class:`.LightTimeProvider` supplies the downleg (spacecraft to body) and upleg (body to
spacecraft) light times of a spacecraft at an instant. The conversions in
:mod:`.lighttime.conversions` apply those legs to translate between spacecraft event time (SCET),
Earth received time (ERT), and Earth transmit time (ETT).
"""

# Local Imports
# forward-facing API import
from .conversions import ert2ett, ert2scet, ett2ert, ett2scet, scet2ert, scet2ett  # noqa: F401
from .ephemeris import EphemerisService, LightTimeDirection, TabulatedEphemeris  # noqa: F401
from .provider import (  # noqa: F401
    ConstantLightTimeProvider,
    EphemerisLightTimeProvider,
    LightTimeProvider,
    TimeReference,
)
