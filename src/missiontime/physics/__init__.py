"""Time scale, calendar, and light time algorithms.

The :mod:`.time` package holds the fixed-point value types, :mod:`.time_scales` supplies the
leap second, SCLK, and solar clock data they convert through, and :mod:`.lighttime` relates
spacecraft event time to Earth received/transmit time.
"""
