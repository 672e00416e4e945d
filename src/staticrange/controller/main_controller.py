import logging

from rich.console import Console

from staticrange.config import AppSettings
from staticrange.controller.batch import configure_range
from staticrange.controller.prompts import ConfigurationCollector
from staticrange.model.network_apply import AdapterDriver, PowerShellDriver, is_admin
from staticrange.view import (
    build_configuration_table,
    build_results_table,
    build_summary_panel,
    print_banner,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


# ------------------------------------------------------------
# Main Controller
# ------------------------------------------------------------
class MainController:
    """
    Runs the whole pipeline once: pick adapter, collect settings, confirm,
    clear, assign the range, report.
    """

    def __init__(self, driver: AdapterDriver = None, console: Console = None,
                 settings: AppSettings = None, stream=None, check_admin=is_admin):
        self.settings = settings or AppSettings()
        self.driver = driver or PowerShellDriver(self.settings)
        self.console = console or Console()
        self.collector = ConfigurationCollector(self.console, stream=stream)
        self.check_admin = check_admin

    def run(self) -> int:
        """Returns the process exit code."""
        print_banner(self.console)

        try:
            adapters = self.driver.list_adapters()
        except Exception as e:
            logger.error("Listing network adapters failed: %s", e)
            adapters = []
        if not adapters:
            logger.error("No active network adapters found")
            self.console.print("[red]No active network adapters found.[/red]")
            return EXIT_FAILURE

        adapter = self.collector.choose_adapter(adapters)
        logger.debug("Selected adapter %s (ifIndex %d)", adapter.name, adapter.index)

        ip_range, request = self.collector.collect_request()
        if ip_range is None:
            return EXIT_FAILURE

        self.console.print(build_summary_panel(adapter, ip_range, request))
        if not self.check_admin():
            self.console.print(
                "[yellow]Warning:[/yellow] not running as Administrator, "
                "configuration changes will most likely fail."
            )
        if not self.collector.confirm():
            self.console.print("Cancelled, nothing was changed.")
            return EXIT_OK

        self._clear(adapter)

        with self.console.status(f"Configuring {len(ip_range)} addresses on {adapter.name}..."):
            report = configure_range(self.driver, adapter, ip_range, request)

        self.console.print(build_results_table(report))
        if report.failed:
            self.console.print(f"[red]{report.failed} of {report.total} addresses failed.[/red]")
        else:
            self.console.print(f"[green]All {report.total} addresses configured.[/green]")

        self._show_configuration(adapter)
        return EXIT_OK

    # ------------------------------------------------------------
    def _clear(self, adapter):
        """Best-effort removal of the existing configuration."""
        self.console.print(f"Clearing existing IPv4 configuration on {adapter.name}...")
        try:
            res = self.driver.clear_configuration(adapter)
        except Exception as e:
            logger.warning("Clearing configuration raised: %s", e)
            return
        if not res["success"]:
            logger.warning("Clearing configuration failed: %s", res["stderr"] or res["stdout"])

    def _show_configuration(self, adapter):
        try:
            config = self.driver.get_configuration(adapter)
        except Exception as e:
            # adapter is already changed; exit code stays 0
            logger.warning("Could not read back adapter configuration: %s", e)
            return
        self.console.print(build_configuration_table(adapter, config))
