"""Global time & physics constants.

This module holds all constants that are used in various places across the
codebase, allowing for a consistent place to store them. Constants specific
to objects and classes remain in those files.

All epochs are expressed relative to the reference epoch ``2000-001T12:00:00`` UTC on a
leap-second-free count, which is where :attr:`.Time.tics` equals zero.

References:
    #. NAIF leapseconds kernel ``naif0012.tls``, ``DELTET`` parameters
    #. Allison & McEwen, "A post-Pathfinder evaluation of areocentric solar coordinates", 2000
"""

from __future__ import annotations

# Tic resolution
TICS_PER_SECOND: int = 100_000_000
"""``int``: number of tics in one second; one tic is 10 nanoseconds."""

MAX_PRECISION: int = 8
"""``int``: maximum number of fractional second digits that carry information."""

# Conversion constants
SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
MILLISECONDS_PER_SECOND = 1000
TICS_PER_MILLISECOND = TICS_PER_SECOND // MILLISECONDS_PER_SECOND
TICS_PER_MINUTE = SECONDS_PER_MINUTE * TICS_PER_SECOND
TICS_PER_HOUR = SECONDS_PER_HOUR * TICS_PER_SECOND
TICS_PER_DAY = SECONDS_PER_DAY * TICS_PER_SECOND
TICS_PER_HALF_DAY = TICS_PER_DAY // 2

# Reference epochs
J2000_JULIAN_DATE = 2451545
"""``int``: Julian date of the reference epoch, 2000-01-01 12:00:00."""

GPS_EPOCH_SECONDS = -630763200
"""``int``: GPS epoch, 1980-01-06 00:00:00 UTC, in seconds from the reference epoch."""

GPS_LEAP_SECONDS = 18
"""``int``: GPS - UTC as of 2021, used by the fixed-offset GPS seconds conversions."""

GPS_TAI_OFFSET = 19
"""``int``: TAI - GPS, constant since the GPS epoch."""

UNIX_EPOCH_SECONDS = -946728000
"""``int``: Unix epoch, 1970-01-01 00:00:00 UTC, in seconds from the reference epoch."""

EXCEL_EPOCH_DAYS = -36526.5
"""``float``: spreadsheet serial day zero, 1899-12-30 00:00:00, in days from the reference epoch."""

# Dynamical time constants, from the leapseconds kernel
TT_MINUS_TAI = 32.184
"""``float``: TT - TAI, seconds."""

TDB_K = 1.657e-3
"""``float``: amplitude of the TDB - TT periodic term, seconds."""

TDB_EB = 1.671e-2
"""``float``: eccentricity of the heliocentric orbit of the Earth-Moon barycenter."""

TDB_M0 = 6.239996
"""``float``: mean anomaly of the Earth-Moon barycenter at J2000, radians."""

TDB_M1 = 1.99096871e-7
"""``float``: rate of the mean anomaly of the Earth-Moon barycenter, radians/second."""

# Solar system
SPEED_OF_LIGHT = 299792.458  # Speed of Light, (km/s)
MARS_SOL_SECONDS = 88775.244147  # Mean solar day on Mars, (s)

# NAIF body ids
SOLAR_SYSTEM_BARYCENTER_ID = 0
EARTH_BODY_ID = 399
MARS_BODY_ID = 499
