# Rich tables and panels for the interactive console
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def print_banner(console: Console):
    title = Text("staticrange", style="bold cyan")
    subtitle = Text("Assign a range of static IPv4 addresses to one adapter", style="dim")
    console.print(Panel(Text.assemble(title, "\n", subtitle), border_style="cyan", padding=(0, 2)))


def build_adapter_table(adapters) -> Table:
    table = Table(title="Active network adapters")
    table.add_column("#", style="bold", justify="right")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("IPv4", style="magenta")
    table.add_column("ifIndex", style="dim", justify="right")
    for number, adapter in enumerate(adapters, start=1):
        table.add_row(str(number), adapter.name, adapter.description or "—",
                      adapter.current_ip or "—", str(adapter.index))
    return table


def build_summary_panel(adapter, ip_range, request) -> Panel:
    body = Text()
    body.append("Adapter:  ", style="bold")
    body.append(f"{adapter.display_name}\n")
    body.append("Range:    ", style="bold")
    body.append(f"{ip_range.start} - {ip_range.end} ({len(ip_range)} addresses)\n")
    body.append("Prefix:   ", style="bold")
    body.append(f"/{request.prefix_length}\n")
    body.append("Gateway:  ", style="bold")
    body.append(f"{request.gateway or 'none'}\n")
    body.append("DNS:      ", style="bold")
    body.append(", ".join(request.dns_servers))
    body.append("\n\nExisting IPv4 configuration on this adapter will be removed.", style="yellow")
    return Panel(body, title="Pending changes", border_style="yellow")


def build_results_table(report) -> Table:
    table = Table(title=f"Results: {report.succeeded} succeeded, {report.failed} failed")
    table.add_column("Address", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Details", style="dim")
    for res in report.results:
        status = "[green]OK[/green]" if res["success"] else "[red]FAILED[/red]"
        table.add_row(res["address"], status, res["stderr"] or res["stdout"] or "")
    return table


def build_configuration_table(adapter, config) -> Table:
    table = Table(title=f"Current configuration: {adapter.name}")
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="white")
    table.add_row("IPv4 addresses", "\n".join(config.get("addresses") or ["—"]))
    table.add_row("Default gateway", "\n".join(config.get("gateways") or ["—"]))
    table.add_row("DNS servers", "\n".join(config.get("dns_servers") or ["—"]))
    return table
