import logging
from dataclasses import dataclass, field

from staticrange.model.ip_range import IPRange
from staticrange.model.network_apply import AdapterDriver
from staticrange.model.network_model import AdapterSelection
from staticrange.model.request import ConfigurationRequest

logger = logging.getLogger(__name__)


@dataclass
class BatchReport:
    """
    Per-address outcome of one configure_range() call.

    Each entry of ``results`` is the driver's result dict plus an "address" key.
    """
    results: list = field(default_factory=list)
    dns_result: dict = None

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r["success"])

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r["success"])

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def failed_addresses(self) -> list:
        return [r["address"] for r in self.results if not r["success"]]


def _call(step: str, func, *args, **kwargs) -> dict:
    """Invoke a driver method; anything it raises becomes a failed result."""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        logger.exception("%s raised unexpectedly", step)
        return {"success": False, "command": None, "stdout": "", "stderr": str(e)}


def configure_range(driver: AdapterDriver, adapter: AdapterSelection, ip_range: IPRange,
                    request: ConfigurationRequest) -> BatchReport:
    """
    Assign every address of ip_range to adapter, in order.

    The gateway and DNS servers go with the first address only. A failure is
    logged and counted, and the loop moves on to the next address.
    """
    report = BatchReport()

    for position, ip in enumerate(ip_range):
        first = position == 0
        gateway = request.gateway if first else None

        res = _call(f"assign {ip}", driver.assign_address, adapter, ip, request.prefix_length, gateway)
        report.results.append(dict(res, address=ip))

        if res["success"]:
            logger.info("Assigned %s/%d to %s", ip, request.prefix_length, adapter.name)
        else:
            logger.error("Failed to assign %s: %s", ip, res["stderr"] or res["stdout"] or "unknown error")

        if first:
            dns = _call("set DNS", driver.set_dns_servers, adapter, request.dns_servers)
            report.dns_result = dns
            if dns["success"]:
                logger.info("DNS servers set to %s", ", ".join(request.dns_servers))
            else:
                logger.error("Failed to set DNS servers: %s", dns["stderr"] or "unknown error")

    logger.info("Batch finished: %d succeeded, %d failed", report.succeeded, report.failed)
    return report
