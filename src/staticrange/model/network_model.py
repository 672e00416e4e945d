import socket
import logging
from dataclasses import dataclass

import psutil

from staticrange.config import DEFAULT_EXCLUDE_KEYWORDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterSelection:
    """One active network interface, chosen once per run."""
    index: int
    name: str
    description: str = ""
    current_ip: str = ""

    @property
    def display_name(self) -> str:
        if self.description and self.description != self.name:
            return f"{self.name} ({self.description})"
        return self.name


def is_excluded(name: str, description: str, keywords=None) -> bool:
    """True for loopback, bluetooth, virtual and similar adapters."""
    if keywords is None:
        keywords = DEFAULT_EXCLUDE_KEYWORDS
    name = (name or "").lower()
    description = (description or "").lower()
    if name in ("lo", "lo0") or name.startswith("loopback"):
        return True
    return any(k in name or k in description for k in keywords)


# ------------------------------------------------------------
# Helper: Hardware descriptions of enabled adapters via WMI
# ------------------------------------------------------------
def _wmi_descriptions():
    """{connection name: description} for adapters WMI reports as enabled; {} off Windows."""
    try:
        import wmi

        nics = wmi.WMI().Win32_NetworkAdapter(NetEnabled=True)
    except Exception as e:
        logger.debug("WMI adapter descriptions unavailable: %s", e)
        return {}
    return {
        nic.NetConnectionID: nic.Description or nic.Name
        for nic in nics
        if nic.NetConnectionID
    }


# ------------------------------------------------------------
# Helper: Current IPv4 per adapter via psutil
# ------------------------------------------------------------
def current_ipv4_map():
    """Return {adapter_name: first IPv4 address} for every adapter that has one."""
    result = {}
    for name, addrs in psutil.net_if_addrs().items():
        ipv4 = next((a.address for a in addrs if a.family == socket.AF_INET), "")
        if ipv4:
            result[name] = ipv4
    return result


# ------------------------------------------------------------
# Active adapter listing (psutil + WMI)
# ------------------------------------------------------------
def get_active_adapters(exclude_keywords=None):
    """
    Return AdapterSelection entries for every adapter whose link is up.

    Unlike the PowerShell listing this one works without elevation, so the
    driver falls back to it when Get-NetAdapter gives nothing usable.
    """
    stats = psutil.net_if_stats()
    ipv4_map = current_ipv4_map()
    desc_map = _wmi_descriptions()

    adapters = []
    for name, stat in stats.items():
        if not stat.isup:
            continue

        description = desc_map.get(name, name)
        if is_excluded(name, description, exclude_keywords):
            continue

        try:
            index = socket.if_nametoindex(name)
        except OSError:
            logger.debug("No interface index for %s, skipping", name)
            continue

        adapters.append(AdapterSelection(
            index=index,
            name=name,
            description=description,
            current_ip=ipv4_map.get(name, ""),
        ))

    adapters.sort(key=lambda a: a.index)
    return adapters
