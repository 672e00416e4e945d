import io

import pytest
from rich.console import Console

from staticrange.config import AppSettings
from staticrange.model.network_apply import AdapterDriver
from staticrange.model.network_model import AdapterSelection


def ok(cmd="ok"):
    return {"success": True, "command": cmd, "stdout": "", "stderr": ""}


def failed(message="boom"):
    return {"success": False, "command": "fail", "stdout": "", "stderr": message}


class FakeDriver(AdapterDriver):
    """In-memory AdapterDriver that records every call."""

    def __init__(self, adapters=None, fail_on=(), raise_on=(), dns_fails=False):
        self.adapters = list(adapters or [])
        self.fail_on = set(fail_on)
        self.raise_on = set(raise_on)
        self.dns_fails = dns_fails
        self.calls = []
        self.assigned = []

    def list_adapters(self):
        return list(self.adapters)

    def clear_configuration(self, adapter):
        self.calls.append(("clear", adapter.index))
        self.assigned.clear()
        return ok("clear")

    def assign_address(self, adapter, ip, prefix_length, gateway=None):
        self.calls.append(("assign", ip, prefix_length, gateway))
        if ip in self.raise_on:
            raise RuntimeError(f"driver exploded on {ip}")
        if ip in self.fail_on:
            return failed(f"cannot assign {ip}")
        self.assigned.append(ip)
        return ok(f"assign {ip}")

    def set_dns_servers(self, adapter, servers):
        self.calls.append(("dns", tuple(servers)))
        return failed("dns refused") if self.dns_fails else ok("dns")

    def get_configuration(self, adapter):
        self.calls.append(("query", adapter.index))
        return {"addresses": [f"{ip}/24" for ip in self.assigned], "gateways": [], "dns_servers": []}


@pytest.fixture
def adapter():
    return AdapterSelection(index=12, name="Ethernet", description="Intel(R) Ethernet I225-V")


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def settings(monkeypatch, tmp_path):
    # keep a developer's .env or STATICRANGE_* variables out of the tests
    monkeypatch.chdir(tmp_path)
    for name in ("POWERSHELL_EXECUTABLE", "COMMAND_TIMEOUT_SECONDS", "LOG_LEVEL", "LOG_FILE", "EXCLUDE_KEYWORDS"):
        monkeypatch.delenv(f"STATICRANGE_{name}", raising=False)
    return AppSettings()


@pytest.fixture
def fake_driver_cls():
    return FakeDriver
