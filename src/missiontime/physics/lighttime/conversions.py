"""Conversions between spacecraft event time (SCET), Earth received time (ERT), and Earth transmit time (ETT).

Each conversion shifts the instant by a leg from the context's :class:`.LightTimeProvider`, so an
:class:`.EpochRelativeTime` stays epoch-relative:

* ``scet2ert(t) = t + downleg(t, SCET)``
* ``scet2ett(t) = t - upleg(t, SCET)``
* ``ert2scet(t) = t - downleg(t, ERT)``
* ``ett2scet(t) = t + upleg(t, ETT)``

``ett2ert`` and ``ert2ett`` are composed through SCET. The reference body defaults to Earth and
the spacecraft to the context's default spacecraft id.
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from .. import constants as const
from ..time.context import resolveContext
from .provider import TimeReference

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ..time.context import TimeContext
    from ..time.instant import Instant


def _spacecraft(spacecraft_id: int | None, context: TimeContext) -> int:
    return context.defaults.spacecraft_id if spacecraft_id is None else spacecraft_id


def scet2ert(
    scet: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the time an event on the spacecraft at `scet` is received at `body_id`.

    Args:
        scet (:class:`.Instant`): spacecraft event time
        spacecraft_id (``int``, optional): NAIF id of the spacecraft. Defaults to the context default.
        body_id (``int``, optional): NAIF id of the receiving body. Defaults to Earth.
        context (:class:`.TimeContext`, optional): context supplying the light time provider

    Returns:
        :class:`.Instant`: Earth received time, the same variant as `scet`
    """
    context = resolveContext(context)
    spacecraft_id = _spacecraft(spacecraft_id, context)
    leg = context.light_time.downleg(scet, spacecraft_id, body_id, TimeReference.SCET, context=context)
    return scet.add(leg, context=context)


def scet2ett(
    scet: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the time a signal must leave `body_id` to arrive at the spacecraft at `scet`."""
    context = resolveContext(context)
    spacecraft_id = _spacecraft(spacecraft_id, context)
    leg = context.light_time.upleg(scet, spacecraft_id, body_id, TimeReference.SCET, context=context)
    return scet.subtract(leg, context=context)


def ert2scet(
    ert: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the spacecraft event time of a signal received at `body_id` at `ert`."""
    context = resolveContext(context)
    spacecraft_id = _spacecraft(spacecraft_id, context)
    leg = context.light_time.downleg(ert, spacecraft_id, body_id, TimeReference.ERT, context=context)
    return ert.subtract(leg, context=context)


def ett2scet(
    ett: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the time a signal sent from `body_id` at `ett` arrives at the spacecraft."""
    context = resolveContext(context)
    spacecraft_id = _spacecraft(spacecraft_id, context)
    leg = context.light_time.upleg(ett, spacecraft_id, body_id, TimeReference.ETT, context=context)
    return ett.add(leg, context=context)


def ett2ert(
    ett: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the time the response to a signal sent at `ett` is received, via the spacecraft."""
    scet = ett2scet(ett, spacecraft_id, body_id, context)
    return scet2ert(scet, spacecraft_id, body_id, context)


def ert2ett(
    ert: Instant,
    spacecraft_id: int | None = None,
    body_id: int = const.EARTH_BODY_ID,
    context: TimeContext | None = None,
) -> Instant:
    """Return the transmit time whose turnaround at the spacecraft is received at `ert`."""
    scet = ert2scet(ert, spacecraft_id, body_id, context)
    return scet2ett(scet, spacecraft_id, body_id, context)
