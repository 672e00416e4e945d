"""
network_apply.py
----------------
Applies IPv4 / DNS configuration to a network adapter via PowerShell.

All mutating commands require Administrator privileges. Every call returns a
result dict instead of raising, so one failing address cannot stop a batch:

    {"success": bool, "command": str, "stdout": str, "stderr": str}
"""

import abc
import ctypes
import json
import logging
import os
import subprocess
import sys

from staticrange.config import AppSettings
from staticrange.errors import DriverError
from staticrange.model.network_model import (
    AdapterSelection,
    current_ipv4_map,
    get_active_adapters,
    is_excluded,
)

logger = logging.getLogger(__name__)


def is_admin() -> bool:
    """True when running elevated (Administrator on Windows, root elsewhere)."""
    if sys.platform == "win32":
        try:
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except (AttributeError, OSError):
            return False
    return hasattr(os, "geteuid") and os.geteuid() == 0


# ------------------------------------------------------------
# Driver interface
# ------------------------------------------------------------
class AdapterDriver(abc.ABC):
    """OS boundary: everything that reads or changes adapter configuration."""

    @abc.abstractmethod
    def list_adapters(self) -> list:
        """Return AdapterSelection entries for adapters whose status is Up."""

    @abc.abstractmethod
    def clear_configuration(self, adapter: AdapterSelection) -> dict:
        """Remove existing IPv4 addresses, default route and DNS servers."""

    @abc.abstractmethod
    def assign_address(self, adapter: AdapterSelection, ip: str, prefix_length: int,
                       gateway: str = None) -> dict:
        """Add one static IPv4 address, optionally with a default gateway."""

    @abc.abstractmethod
    def set_dns_servers(self, adapter: AdapterSelection, servers) -> dict:
        """Replace the adapter's DNS server list."""

    @abc.abstractmethod
    def get_configuration(self, adapter: AdapterSelection) -> dict:
        """
        Return the adapter's current configuration:

            {"addresses": ["10.0.0.5/24", ...], "gateways": [...], "dns_servers": [...]}
        """


# ------------------------------------------------------------
# PowerShell implementation
# ------------------------------------------------------------
class PowerShellDriver(AdapterDriver):
    """AdapterDriver backed by the NetTCPIP and DnsClient cmdlets."""

    def __init__(self, settings: AppSettings = None):
        self.settings = settings or AppSettings()

    def run(self, cmd: str) -> dict:
        """
        Run one PowerShell command line.

        Args:
            cmd (str): Command text passed to ``-Command``

        Returns:
            dict: {"success", "command", "stdout", "stderr"}
        """
        logger.debug("PS> %s", cmd)
        try:
            result = subprocess.run(
                [self.settings.powershell_executable, "-NoProfile", "-NonInteractive", "-Command", cmd],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="ignore",
                timeout=self.settings.command_timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            stderr = f"Timed out after {self.settings.command_timeout_seconds:g}s"
            return {"success": False, "command": cmd, "stdout": "", "stderr": stderr}
        except OSError as e:
            return {"success": False, "command": cmd, "stdout": "", "stderr": str(e)}

        return {
            "success": result.returncode == 0,
            "command": cmd,
            "stdout": (result.stdout or "").strip(),
            "stderr": (result.stderr or "").strip(),
        }

    def _run_json(self, cmd: str):
        res = self.run(cmd)
        if not res["success"]:
            raise DriverError(res["stderr"] or f"Command failed: {cmd}")
        if not res["stdout"]:
            return None
        try:
            return json.loads(res["stdout"])
        except ValueError as e:
            raise DriverError(f"Unparseable PowerShell output: {e}") from e

    # ------------------------------------------------------------
    def list_adapters(self) -> list:
        cmd = (
            "Get-NetAdapter | Where-Object { $_.Status -eq 'Up' } | "
            "Select-Object ifIndex, Name, InterfaceDescription | "
            "ConvertTo-Json -Depth 2"
        )
        try:
            data = self._run_json(cmd)
        except DriverError as e:
            logger.warning("Get-NetAdapter failed (%s), falling back to psutil", e)
            return get_active_adapters(self.settings.exclude_keywords)

        if data is None:
            return []
        # Normalize JSON output
        if isinstance(data, dict):
            data = [data]

        ipv4_map = current_ipv4_map()
        adapters = []
        for nic in data:
            name = nic.get("Name", "") or ""
            desc = nic.get("InterfaceDescription", "") or ""
            index = nic.get("ifIndex")
            if index is None or is_excluded(name, desc, self.settings.exclude_keywords):
                continue
            adapters.append(AdapterSelection(
                index=int(index),
                name=name,
                description=desc,
                current_ip=ipv4_map.get(name, ""),
            ))
        return adapters

    def clear_configuration(self, adapter: AdapterSelection) -> dict:
        idx = adapter.index
        cmd = (
            f"Set-NetIPInterface -InterfaceIndex {idx} -Dhcp Disabled -ErrorAction SilentlyContinue; "
            f"Remove-NetIPAddress -InterfaceIndex {idx} -AddressFamily IPv4 "
            f"-Confirm:$false -ErrorAction SilentlyContinue; "
            f"Remove-NetRoute -InterfaceIndex {idx} -AddressFamily IPv4 -DestinationPrefix '0.0.0.0/0' "
            f"-Confirm:$false -ErrorAction SilentlyContinue; "
            f"Set-DnsClientServerAddress -InterfaceIndex {idx} -ResetServerAddresses "
            f"-ErrorAction SilentlyContinue"
        )
        return self.run(cmd)

    def assign_address(self, adapter: AdapterSelection, ip: str, prefix_length: int,
                       gateway: str = None) -> dict:
        cmd = (
            f"New-NetIPAddress -InterfaceIndex {adapter.index} -AddressFamily IPv4 "
            f"-IPAddress {ip} -PrefixLength {int(prefix_length)}"
        )
        if gateway:
            cmd += f" -DefaultGateway {gateway}"
        cmd += " -ErrorAction Stop | Out-Null"
        return self.run(cmd)

    def set_dns_servers(self, adapter: AdapterSelection, servers) -> dict:
        server_list = ",".join(f"'{s}'" for s in servers)
        cmd = (
            f"Set-DnsClientServerAddress -InterfaceIndex {adapter.index} "
            f"-ServerAddresses ({server_list}) -ErrorAction Stop"
        )
        return self.run(cmd)

    def get_configuration(self, adapter: AdapterSelection) -> dict:
        idx = adapter.index
        cmd = (
            f"$ip = @(Get-NetIPAddress -InterfaceIndex {idx} -AddressFamily IPv4 "
            f"-ErrorAction SilentlyContinue | Select-Object IPAddress, PrefixLength); "
            f"$gw = @(Get-NetRoute -InterfaceIndex {idx} -DestinationPrefix '0.0.0.0/0' "
            f"-ErrorAction SilentlyContinue | Select-Object -ExpandProperty NextHop); "
            f"$dns = @((Get-DnsClientServerAddress -InterfaceIndex {idx} -AddressFamily IPv4 "
            f"-ErrorAction SilentlyContinue).ServerAddresses); "
            f"[pscustomobject]@{{Addresses=$ip; Gateways=$gw; DnsServers=$dns}} | ConvertTo-Json -Depth 3"
        )
        data = self._run_json(cmd) or {}
        return {
            "addresses": [
                f"{a.get('IPAddress')}/{a.get('PrefixLength')}"
                for a in _as_list(data.get("Addresses"))
            ],
            "gateways": [str(g) for g in _as_list(data.get("Gateways"))],
            "dns_servers": [str(s) for s in _as_list(data.get("DnsServers"))],
        }


def _as_list(value) -> list:
    """ConvertTo-Json collapses one-element arrays to a scalar or object."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]
