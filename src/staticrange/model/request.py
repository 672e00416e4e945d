"""
request.py
----------
Validated per-run configuration (prefix, gateway, DNS) shared by every
address in the range.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from staticrange.model.ip_range import normalize_ip, validate_ip


@dataclass(frozen=True)
class ConfigurationRequest:
    """
    Settings applied alongside the address range.

    Attributes:
        prefix_length (int): Subnet mask as a bit count (0-32)
        gateway (str | None): Default gateway, set with the first address only
        dns_servers (tuple): One or two DNS servers, set with the first address only
    """
    prefix_length: int
    gateway: Optional[str] = None
    dns_servers: Tuple[str, ...] = ()

    def __post_init__(self):
        if isinstance(self.prefix_length, bool) or not isinstance(self.prefix_length, int):
            raise ValueError(f"Prefix length must be an integer, got {self.prefix_length!r}")
        if not 0 <= self.prefix_length <= 32:
            raise ValueError(f"Prefix length {self.prefix_length} is outside 0-32")

        if self.gateway is not None:
            if not validate_ip(self.gateway):
                raise ValueError(f"Invalid gateway address '{self.gateway}'")
            # PowerShell 5.1 may read zero-padded octets as octal
            object.__setattr__(self, "gateway", normalize_ip(self.gateway))

        servers = tuple(self.dns_servers)
        if not 1 <= len(servers) <= 2:
            raise ValueError("One or two DNS servers are required")
        for server in servers:
            if not validate_ip(server):
                raise ValueError(f"Invalid DNS server address '{server}'")
        object.__setattr__(self, "dns_servers", tuple(normalize_ip(s) for s in servers))
