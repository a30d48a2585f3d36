"""Submodule defining the default values used by time conversions."""

from __future__ import annotations

# Third Party Imports
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Local Imports
from ...common.behavioral_config import BehavioralConfig
from .. import constants as const


class TimeDefaults(BaseModel):
    """Default parameters applied when a conversion isn't given them explicitly."""

    model_config = ConfigDict(validate_assignment=True)
    """ConfigDict: Configuration management for ``pydantic.BaseModel`` class.

    ``validate_assignment`` keeps the process-wide setters from storing invalid values.
    """

    spacecraft_id: int = -1
    """``int``: NAIF id of the spacecraft used by SCLK, LMST, LTST, and light time conversions."""

    lst_body_id: int = const.MARS_BODY_ID
    """``int``: NAIF id of the body whose local true solar time is computed."""

    lst_body_frame: str = "IAU_MARS"
    """``str``: body-fixed frame name of the local true solar time body."""

    output_precision: int = Field(default=6, ge=0, le=const.MAX_PRECISION)
    """``int``: number of fractional second digits used by ``str()``."""

    use_service_math: bool = False
    """``bool``: whether :class:`.Time` arithmetic is delegated to the time scale service."""

    @field_validator("lst_body_frame")
    @classmethod
    def upper_frame(cls, val: str) -> str:
        """Frame names are case-insensitive; store them upper-case."""
        return val.upper()

    @classmethod
    def fromConfig(cls) -> TimeDefaults:
        """Build the defaults from the ``[time]`` section of :class:`.BehavioralConfig`."""
        time_config = BehavioralConfig.getConfig().time
        return cls(
            spacecraft_id=time_config.DefaultSpacecraftId,
            lst_body_id=time_config.DefaultLstBodyId,
            lst_body_frame=time_config.DefaultLstBodyFrame,
            output_precision=time_config.OutputPrecision,
            use_service_math=time_config.UseServiceMath,
        )
