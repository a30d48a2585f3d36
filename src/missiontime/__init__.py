"""Main Module Documentation.

The top-level module is documented below. :mod:`missiontime` provides fixed-point spacecraft
time types (:class:`.Duration`, :class:`.Time`, :class:`.EpochRelativeTime`), conversions between
time scales, and light time adjusted relationships between spacecraft event time and Earth
received/transmit time.

.. code-block:: python

    from missiontime import Duration, Time

    pass_start = Time("2020-001T00:00:00")
    pass_end = pass_start + Duration("00:45:00")
    print(pass_end.toISOC(3))
"""

from __future__ import annotations

__version__ = "1.0.0"

# Local Imports
# forward-facing API import
from .physics.time.context import TimeContext, getDefaultContext  # noqa: E402, F401
from .physics.time.duration import Duration  # noqa: E402, F401
from .physics.time.epochs import EpochCatalog, EpochRelativeTime, parseTime  # noqa: E402, F401
from .physics.time.instant import Time  # noqa: E402, F401
