"""Defines :class:`.TimeContext` and the process-wide default context.

Every conversion that depends on external state (defaults, time scale data, light time, or the
epoch catalog) accepts an optional ``context`` keyword. When it is omitted, the process-wide
default context is used; the module-level ``set*``/``get*`` functions act on that default.

Note:
    The default context is shared, mutable state. Mutating it from several threads requires the
    caller to provide mutual exclusion.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from .defaults import TimeDefaults

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ..lighttime.provider import LightTimeProvider
    from ..time_scales.service import TimeScaleService
    from .epochs import EpochCatalog


class TimeContext:
    """Bundle of the defaults and services that time conversions consult.

    Collaborators that aren't supplied are built lazily on first use: the defaults from
    :class:`.BehavioralConfig`, a :class:`.KernelTimeScaleService` from the configured leap second
    loader, an :class:`.EphemerisLightTimeProvider` over an empty :class:`.TabulatedEphemeris`,
    and an empty :class:`.EpochCatalog`.
    """

    def __init__(
        self,
        defaults: TimeDefaults | None = None,
        time_scales: TimeScaleService | None = None,
        light_time: LightTimeProvider | None = None,
        epochs: EpochCatalog | None = None,
    ):
        """Initialize the context.

        Args:
            defaults (:class:`.TimeDefaults`, optional): default conversion parameters
            time_scales (:class:`.TimeScaleService`, optional): leap second, SCLK, & solar data
            light_time (:class:`.LightTimeProvider`, optional): one-way light time provider
            epochs (:class:`.EpochCatalog`, optional): named epochs for epoch-relative times
        """
        self._defaults = defaults
        self._time_scales = time_scales
        self._light_time = light_time
        self._epochs = epochs

    @property
    def defaults(self) -> TimeDefaults:
        """:class:`.TimeDefaults`: default conversion parameters."""
        if self._defaults is None:
            self._defaults = TimeDefaults.fromConfig()
        return self._defaults

    @defaults.setter
    def defaults(self, defaults: TimeDefaults):
        self._defaults = defaults

    @property
    def time_scales(self) -> TimeScaleService:
        """:class:`.TimeScaleService`: leap second, SCLK, & solar clock data."""
        if self._time_scales is None:
            # Local Imports
            from ..time_scales.service import loadTimeScaleService

            self._time_scales = loadTimeScaleService()
        return self._time_scales

    @time_scales.setter
    def time_scales(self, service: TimeScaleService):
        self._time_scales = service

    @property
    def light_time(self) -> LightTimeProvider:
        """:class:`.LightTimeProvider`: one-way light time provider."""
        if self._light_time is None:
            # Local Imports
            from ..lighttime.ephemeris import TabulatedEphemeris
            from ..lighttime.provider import EphemerisLightTimeProvider

            self._light_time = EphemerisLightTimeProvider(TabulatedEphemeris())
        return self._light_time

    @light_time.setter
    def light_time(self, provider: LightTimeProvider):
        self._light_time = provider

    @property
    def epochs(self) -> EpochCatalog:
        """:class:`.EpochCatalog`: named epochs used by :class:`.EpochRelativeTime`."""
        if self._epochs is None:
            # Local Imports
            from .epochs import EpochCatalog

            self._epochs = EpochCatalog()
        return self._epochs

    @epochs.setter
    def epochs(self, catalog: EpochCatalog):
        self._epochs = catalog


_DEFAULT_CONTEXT: TimeContext | None = None
"""TimeContext: process-wide context used when a conversion isn't given one."""


def getDefaultContext() -> TimeContext:
    """Return the process-wide default :class:`.TimeContext`, creating it on first use."""
    global _DEFAULT_CONTEXT  # noqa: PLW0603
    if _DEFAULT_CONTEXT is None:
        _DEFAULT_CONTEXT = TimeContext()
    return _DEFAULT_CONTEXT


def setDefaultContext(context: TimeContext):
    """Replace the process-wide default :class:`.TimeContext`."""
    global _DEFAULT_CONTEXT  # noqa: PLW0603
    _DEFAULT_CONTEXT = context


def resetDefaultContext():
    """Discard the process-wide default so it is rebuilt from configuration on next use."""
    setDefaultContext(None)


def resolveContext(context: TimeContext | None) -> TimeContext:
    """Return `context`, or the process-wide default when it is ``None``."""
    return getDefaultContext() if context is None else context


def setDefaultSpacecraftId(spacecraft_id: int):
    """Set the default NAIF spacecraft id."""
    getDefaultContext().defaults.spacecraft_id = spacecraft_id


def getDefaultSpacecraftId() -> int:
    """Return the default NAIF spacecraft id."""
    return getDefaultContext().defaults.spacecraft_id


def setDefaultLstBodyId(body_id: int):
    """Set the default NAIF body id used for local true solar time."""
    getDefaultContext().defaults.lst_body_id = body_id


def getDefaultLstBodyId() -> int:
    """Return the default NAIF body id used for local true solar time."""
    return getDefaultContext().defaults.lst_body_id


def setDefaultLstBodyFrame(frame: str):
    """Set the default body-fixed frame used for local true solar time."""
    getDefaultContext().defaults.lst_body_frame = frame


def getDefaultLstBodyFrame() -> str:
    """Return the default body-fixed frame used for local true solar time."""
    return getDefaultContext().defaults.lst_body_frame


def setDefaultOutputPrecision(precision: int):
    """Set the number of fractional second digits used by ``str()``, between 0 and 8."""
    getDefaultContext().defaults.output_precision = precision


def getDefaultOutputPrecision() -> int:
    """Return the number of fractional second digits used by ``str()``."""
    return getDefaultContext().defaults.output_precision


def setUseServiceMath(use_service_math: bool):
    """Set whether :class:`.Time` arithmetic is delegated to the time scale service."""
    getDefaultContext().defaults.use_service_math = use_service_math


def getUseServiceMath() -> bool:
    """Return whether :class:`.Time` arithmetic is delegated to the time scale service."""
    return getDefaultContext().defaults.use_service_math


def setLightTimeProvider(provider: LightTimeProvider):
    """Bind the light time provider of the default context."""
    getDefaultContext().light_time = provider


def getLightTimeProvider() -> LightTimeProvider:
    """Return the light time provider of the default context."""
    return getDefaultContext().light_time


def setTimeScaleService(service: TimeScaleService):
    """Bind the time scale service of the default context."""
    getDefaultContext().time_scales = service


def getTimeScaleService() -> TimeScaleService:
    """Return the time scale service of the default context."""
    return getDefaultContext().time_scales


def setEpochCatalog(catalog: EpochCatalog):
    """Bind the epoch catalog of the default context."""
    getDefaultContext().epochs = catalog


def getEpochCatalog() -> EpochCatalog:
    """Return the epoch catalog of the default context."""
    return getDefaultContext().epochs
