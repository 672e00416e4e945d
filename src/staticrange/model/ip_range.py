"""
ip_range.py
-----------
IPv4 dotted-quad <-> 32-bit integer conversion and inclusive range expansion.

Nothing in here touches the OS, so everything is safe to call from tests.
"""

import re

from staticrange.errors import RangeError

_OCTET_RE = re.compile(r"[0-9]{1,3}")
_MAX_IPV4 = 0xFFFFFFFF


# ------------------------------------------------------------
# Codec
# ------------------------------------------------------------
def validate_ip(text) -> bool:
    """Return True if text is four dot-separated decimal octets in 0-255."""
    if not isinstance(text, str):
        return False
    parts = text.split(".")
    if len(parts) != 4:
        return False
    # int() alone would accept "+1", " 1" and "1_0"
    return all(_OCTET_RE.fullmatch(p) and int(p) <= 255 for p in parts)


def ip_to_int(text: str) -> int:
    """
    Pack a validated dotted-quad into an unsigned 32-bit integer.

    Example: '10.103.35.100' -> 0x0A672364
    """
    value = 0
    for part in text.split("."):
        value = (value << 8) + int(part)
    return value


def int_to_ip(value: int) -> str:
    """
    Unpack an unsigned 32-bit integer into dotted-quad text.

    Example: 0x0A672364 -> '10.103.35.100'
    """
    value &= _MAX_IPV4
    return ".".join(str((value >> shift) & 0xFF) for shift in (24, 16, 8, 0))


def normalize_ip(text: str) -> str:
    """Canonical dotted-quad ('010.001.000.001' -> '10.1.0.1')."""
    return int_to_ip(ip_to_int(text))


# ------------------------------------------------------------
# Range generator
# ------------------------------------------------------------
class IPRange:
    """
    Ordered, inclusive run of IPv4 addresses from start to end.

    Iteration is lazy; list(ip_range) materialises it.
    """

    def __init__(self, start: str, end: str):
        for label, value in (("start", start), ("end", end)):
            if not validate_ip(value):
                raise ValueError(f"Invalid {label} address '{value}'")

        self.first = ip_to_int(start)
        self.last = ip_to_int(end)
        if self.first > self.last:
            raise RangeError(f"Start address {start} is greater than end address {end}")

    @property
    def start(self) -> str:
        return int_to_ip(self.first)

    @property
    def end(self) -> str:
        return int_to_ip(self.last)

    def __iter__(self):
        for value in range(self.first, self.last + 1):
            yield int_to_ip(value)

    def __len__(self):
        return self.last - self.first + 1

    def __eq__(self, other):
        if not isinstance(other, IPRange):
            return NotImplemented
        return (self.first, self.last) == (other.first, other.last)

    def __repr__(self):
        return f"IPRange({self.start!r}, {self.end!r})"


def build_range(start: str, end: str) -> IPRange:
    """Validate both endpoints and return the IPRange between them."""
    return IPRange(start, end)


def expand_range(start: str, end: str) -> list:
    """Eager form of build_range: every address from start to end inclusive."""
    return list(IPRange(start, end))
