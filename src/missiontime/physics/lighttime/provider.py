"""Defines the :class:`.LightTimeProvider` interface and its concrete providers."""

from __future__ import annotations

# Standard Library Imports
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

# Local Imports
from ...common.exceptions import LightTimeError, MissingEphemerisError
from ...common.logger import missiontimeLogError
from ..time.duration import Duration
from .ephemeris import LightTimeDirection

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ..time.context import TimeContext
    from ..time.instant import Instant
    from .ephemeris import EphemerisService


class TimeReference(str, Enum):
    """Frame in which an instant passed to a :class:`.LightTimeProvider` is expressed."""

    SCET = "SCET"
    """Spacecraft event time."""

    ERT = "ERT"
    """Earth (body) received time."""

    ETT = "ETT"
    """Earth (body) transmit time."""


class LightTimeProvider(ABC):
    """Source of one-way light times between a spacecraft and a body.

    Implementations may wrap an ephemeris, a light time file, or fixed values; the SCET/ERT/ETT
    conversions only depend on this interface.
    """

    @abstractmethod
    def downleg(
        self,
        instant: Instant,
        spacecraft_id: int,
        body_id: int,
        time_reference: TimeReference | str,
        context: TimeContext | None = None,
    ) -> Duration:
        """Return the light time from the spacecraft to the body.

        Args:
            instant (:class:`.Instant`): instant at which the light time is desired
            spacecraft_id (``int``): NAIF id of the spacecraft
            body_id (``int``): NAIF id of the body
            time_reference (:class:`.TimeReference`): frame `instant` is expressed in
            context (:class:`.TimeContext`, optional): context used for time scale conversions

        Returns:
            :class:`.Duration`: one-way light time
        """
        raise NotImplementedError

    @abstractmethod
    def upleg(
        self,
        instant: Instant,
        spacecraft_id: int,
        body_id: int,
        time_reference: TimeReference | str,
        context: TimeContext | None = None,
    ) -> Duration:
        """Return the light time from the body to the spacecraft; see :meth:`.downleg`."""
        raise NotImplementedError


class EphemerisLightTimeProvider(LightTimeProvider):
    """Light times solved from an :class:`.EphemerisService`.

    An instant in SCET is the spacecraft's own time, so the spacecraft is the observer. An
    instant in ERT or ETT is the body's time, so the body is the observer.
    """

    def __init__(self, ephemeris: EphemerisService):
        """Initialize the provider.

        Args:
            ephemeris (:class:`.EphemerisService`): source of body positions
        """
        self.ephemeris = ephemeris

    def _lightTime(
        self,
        leg: str,
        instant: Instant,
        spacecraft_id: int,
        body_id: int,
        time_reference: TimeReference | str,
        context: TimeContext | None,
    ) -> Duration:
        reference = TimeReference(time_reference)
        to_body = leg == "downleg"
        if reference is TimeReference.SCET:
            observer, target = spacecraft_id, body_id
            direction = LightTimeDirection.TRANSMIT if to_body else LightTimeDirection.RECEIVE
        else:
            observer, target = body_id, spacecraft_id
            direction = LightTimeDirection.RECEIVE if to_body else LightTimeDirection.TRANSMIT

        et = instant.toET(context)
        try:
            seconds = self.ephemeris.lightTime(et, observer, direction, target)
        except MissingEphemerisError as err:
            msg = (
                f"Could not compute {leg} between spacecraft {spacecraft_id} and body {body_id} "
                f"at {reference.value} {instant!s} (ET {et}): {err}"
            )
            missiontimeLogError(msg)
            raise LightTimeError(msg, instant=instant, spacecraft_id=spacecraft_id) from err
        return Duration.fromSeconds(seconds)

    def downleg(self, instant, spacecraft_id, body_id, time_reference, context=None) -> Duration:
        """Return the light time from the spacecraft to the body.

        Raises:
            LightTimeError: the ephemeris doesn't cover the spacecraft or body
            ValueError: `time_reference` isn't one of ``SCET``, ``ERT``, or ``ETT``
        """
        return self._lightTime("downleg", instant, spacecraft_id, body_id, time_reference, context)

    def upleg(self, instant, spacecraft_id, body_id, time_reference, context=None) -> Duration:
        """Return the light time from the body to the spacecraft.

        Raises:
            LightTimeError: the ephemeris doesn't cover the spacecraft or body
            ValueError: `time_reference` isn't one of ``SCET``, ``ERT``, or ``ETT``
        """
        return self._lightTime("upleg", instant, spacecraft_id, body_id, time_reference, context)


class ConstantLightTimeProvider(LightTimeProvider):
    """Provider returning fixed light times, regardless of instant, spacecraft, or body."""

    def __init__(self, downleg: Duration, upleg: Duration | None = None):
        """Initialize the provider.

        Args:
            downleg (:class:`.Duration`): light time from spacecraft to body
            upleg (:class:`.Duration`, optional): light time from body to spacecraft. Defaults to
                `downleg`.
        """
        self._downleg = downleg
        self._upleg = downleg if upleg is None else upleg

    def downleg(self, instant, spacecraft_id, body_id, time_reference, context=None) -> Duration:
        """Return the fixed downleg light time."""
        TimeReference(time_reference)
        return self._downleg

    def upleg(self, instant, spacecraft_id, body_id, time_reference, context=None) -> Duration:
        """Return the fixed upleg light time."""
        TimeReference(time_reference)
        return self._upleg
