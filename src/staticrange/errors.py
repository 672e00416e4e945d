"""
errors.py
---------
Exception types raised by staticrange.
"""


class StaticRangeError(Exception):
    """Base class for staticrange errors."""


class RangeError(StaticRangeError, ValueError):
    """Start address is greater than the end address."""


class DriverError(StaticRangeError):
    """The OS networking layer returned something unusable."""
