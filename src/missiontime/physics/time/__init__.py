"""Contains the fixed-point duration and instant classes and their string conversions.

Both :class:`.Duration` and :class:`.Time` store a single integer tic count (10 nanosecond
resolution) so that repeated parsing, formatting, and arithmetic never accumulates rounding
error. Conversions that need external time scale data consult a :class:`.TimeContext`.
"""
