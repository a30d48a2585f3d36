"""Spacecraft clock (SCLK) models.

A spacecraft clock reading ``p/CCCCCCCCCC-FFFFF`` names a partition ``p``, a coarse count, and a
fine count in units of ``1 / fine_modulus`` coarse counts. Readings are "encoded" into a
continuous tick count across partitions, and encoded ticks are related to ephemeris time by a
piecewise-linear table of :class:`.SclkCoefficient` records.
"""

from __future__ import annotations

# Standard Library Imports
import re
from bisect import bisect_right
from typing import TYPE_CHECKING

# Third Party Imports
from pydantic import BaseModel, Field, field_validator, model_validator
from typing_extensions import Self

# Local Imports
from ...common.exceptions import TimeFormatError

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from typing import Final


SCLK_PATTERN: Final[re.Pattern] = re.compile(
    r"^\s*(?:(?P<partition>\d+)/)?(?P<coarse>\d+)[-:., ](?P<fine>\d+)\s*$",
)
"""``re.Pattern``: ``[partition/]coarse<sep>fine``, separator one of ``- : . , <space>``."""

SCLK_GRAMMAR: Final[str] = "SCLK form [p/]CCCCCCCCCC-FFFFF (separator '-', ':', '.', ',', or ' ')"


class SclkPartition(BaseModel):
    """Range of raw clock readings, in fine ticks, covered by one partition."""

    start: int = Field(..., ge=0)
    """``int``: first reading of the partition, in fine ticks."""

    end: int
    """``int``: reading at which the clock rolled into the next partition, in fine ticks."""

    @model_validator(mode="after")
    def end_after_start(self) -> Self:
        """Validate that :attr:`.end` is after :attr:`.start`."""
        if self.end <= self.start:
            raise ValueError("Partition end must be after partition start")
        return self


class SclkCoefficient(BaseModel):
    """One record of the SCLK to ephemeris time correlation."""

    sclk_ticks: float
    """``float``: encoded SCLK, in fine ticks, at which this record applies."""

    parallel_et: float
    """``float``: ephemeris time (TDB seconds past J2000) at :attr:`.sclk_ticks`."""

    rate: float = Field(default=1.0, gt=0.0)
    """``float``: ephemeris seconds per coarse count after :attr:`.sclk_ticks`."""


class SclkModel(BaseModel):
    """Encoding and time correlation of one spacecraft clock."""

    spacecraft_id: int
    """``int``: NAIF id of the spacecraft that owns the clock."""

    fine_modulus: int = Field(default=65536, gt=1)
    """``int``: number of fine ticks per coarse count."""

    coarse_digits: int = Field(default=10, gt=0)
    """``int``: zero-padded width of the rendered coarse count."""

    fine_digits: int = Field(default=5, gt=0)
    """``int``: zero-padded width of the rendered fine count."""

    delimiter: str = Field(default="-", pattern=r"^[-:., ]$")
    """``str``: separator rendered between the coarse and fine counts."""

    partitions: list[SclkPartition] = Field(default_factory=list)
    """``list``: clock partitions, in order. Empty means a single partition starting at zero."""

    coefficients: list[SclkCoefficient] = Field(..., min_length=1)
    """``list``: correlation records, sorted by :attr:`.SclkCoefficient.sclk_ticks`."""

    @field_validator("coefficients")
    @classmethod
    def sort_coefficients(cls, val: list[SclkCoefficient]) -> list[SclkCoefficient]:
        """Keep the correlation records in increasing encoded SCLK order."""
        return sorted(val, key=lambda record: record.sclk_ticks)

    def _partitionBounds(self) -> list[tuple[int, int, float]]:
        """Return ``(start, encoded_offset, end)`` for each partition."""
        if not self.partitions:
            return [(0, 0, float("inf"))]
        bounds, offset = [], 0
        for partition in self.partitions:
            bounds.append((partition.start, offset, partition.end))
            offset += partition.end - partition.start
        return bounds

    def ticksToET(self, encoded: float) -> float:
        """Convert encoded SCLK ticks to ephemeris time."""
        keys = [record.sclk_ticks for record in self.coefficients]
        record = self.coefficients[max(bisect_right(keys, encoded) - 1, 0)]
        return record.parallel_et + (encoded - record.sclk_ticks) / self.fine_modulus * record.rate

    def etToTicks(self, et: float) -> float:
        """Convert ephemeris time to continuous encoded SCLK ticks."""
        keys = [record.parallel_et for record in self.coefficients]
        record = self.coefficients[max(bisect_right(keys, et) - 1, 0)]
        return record.sclk_ticks + (et - record.parallel_et) / record.rate * self.fine_modulus

    def _locate(self, encoded: float) -> tuple[int, float]:
        """Return the 1-based partition number and raw reading of an encoded tick count."""
        bounds = self._partitionBounds()
        for number, (start, offset, end) in enumerate(bounds[:-1], start=1):
            if encoded < offset + (end - start):
                return number, start + (encoded - offset)
        start, offset, _ = bounds[-1]
        return len(bounds), start + (encoded - offset)

    def encode(self, et: float) -> str:
        """Render the clock reading at `et`, rounded to the nearest fine tick."""
        partition, reading = self._locate(round(self.etToTicks(et)))
        coarse, fine = divmod(int(reading), self.fine_modulus)
        return f"{partition}/{coarse:0{self.coarse_digits}d}{self.delimiter}{fine:0{self.fine_digits}d}"

    def decode(self, text: str) -> float:
        """Return the ephemeris time of a clock reading string.

        Raises:
            TimeFormatError: `text` doesn't match the SCLK grammar, or a field is out of range
        """
        match = SCLK_PATTERN.match(text)
        if match is None:
            raise TimeFormatError(text, SCLK_GRAMMAR)
        fine = int(match.group("fine"))
        if fine >= self.fine_modulus:
            raise TimeFormatError(text, SCLK_GRAMMAR, f"fine count must be less than {self.fine_modulus}")
        partition = int(match.group("partition") or 1)
        reading = int(match.group("coarse")) * self.fine_modulus + fine
        return self.ticksToET(self._encodeReading(partition, reading, text))

    def _encodeReading(self, partition: int, reading: float, text: str) -> float:
        bounds = self._partitionBounds()
        if not 1 <= partition <= len(bounds):
            raise TimeFormatError(text, SCLK_GRAMMAR, f"partition {partition} is not defined")
        start, offset, _ = bounds[partition - 1]
        return offset + (reading - start)

    def toDecimal(self, et: float) -> float:
        """Return the unrounded clock reading at `et` in coarse counts (partition dropped)."""
        return self._locate(self.etToTicks(et))[1] / self.fine_modulus

    def fromDecimal(self, sclkd: float, partition: int = 1) -> float:
        """Return the ephemeris time of a decimal clock reading in `partition`."""
        return self.ticksToET(self._encodeReading(partition, sclkd * self.fine_modulus, str(sclkd)))
