"""Contains configuration, logging, and error handling shared by the :mod:`missiontime` packages."""

from __future__ import annotations

# Standard Library Imports
from datetime import datetime


def pathSafeTime(dt: datetime | None = None) -> str:
    """Return a path-safe string representation of `dt`, used to stamp log file names.

    Args:
        dt: The date and time to generate a path-safe time stamp from. Defaults to now.

    Returns:
        A path-safe string representation of `dt`, e.g. ``"2020-01-01T12-30-00123456"``.
    """
    if dt is None:
        dt = datetime.now()
    return dt.isoformat().replace(":", "-").replace(".", "")
