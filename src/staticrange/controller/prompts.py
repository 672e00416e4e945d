"""
prompts.py
----------
Interactive collection of the adapter choice, address range and settings.

Every prompt re-asks until the answer is valid, so whatever leaves this
module needs no further validation.
"""

import logging

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, IntPrompt, Prompt

from staticrange.errors import RangeError
from staticrange.model.ip_range import IPRange, normalize_ip, validate_ip
from staticrange.model.request import ConfigurationRequest
from staticrange.view import build_adapter_table

logger = logging.getLogger(__name__)


class ConfigurationCollector:
    """
    Prompt loop on a rich Console.

    Args:
        console (Console): Where prompts and errors are printed
        stream: Optional file-like object answers are read from instead of stdin
    """

    def __init__(self, console: Console, stream=None):
        self.console = console
        self.stream = stream

    def _ask(self, label: str) -> str:
        return Prompt.ask(label, console=self.console, stream=self.stream).strip()

    # ------------------------------------------------------------
    def choose_adapter(self, adapters):
        self.console.print(build_adapter_table(adapters))
        while True:
            number = IntPrompt.ask("Select adapter number", console=self.console, stream=self.stream)
            if 1 <= number <= len(adapters):
                return adapters[number - 1]
            self.console.print(f"[red]Enter a number between 1 and {len(adapters)}[/red]")

    def prompt_ip(self, label: str, optional: bool = False):
        """Ask for an IPv4 address; an optional prompt returns None on an empty answer."""
        if optional:
            label = f"{label} (leave blank for none)"
        while True:
            answer = self._ask(label)
            if optional and not answer:
                return None
            if validate_ip(answer):
                return normalize_ip(answer)
            self.console.print(f"[red]'{escape(answer)}' is not a valid IPv4 address[/red]")

    def prompt_prefix_length(self) -> int:
        while True:
            value = IntPrompt.ask("Prefix length (0-32)", console=self.console, stream=self.stream)
            if 0 <= value <= 32:
                return value
            self.console.print("[red]Prefix length must be between 0 and 32[/red]")

    def build_range(self, start: str, end: str):
        """Returns None (after reporting) when start > end."""
        try:
            return IPRange(start, end)
        except RangeError as e:
            logger.error("Invalid range: %s", e)
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return None

    def collect_request(self):
        """
        Ask for every field, then expand the range.

        Returns:
            tuple: (IPRange or None, ConfigurationRequest or None)
        """
        start = self.prompt_ip("Start IP")
        end = self.prompt_ip("End IP")
        prefix_length = self.prompt_prefix_length()
        gateway = self.prompt_ip("Default gateway", optional=True)
        dns = [self.prompt_ip("Primary DNS")]
        secondary = self.prompt_ip("Secondary DNS", optional=True)
        if secondary:
            dns.append(secondary)

        ip_range = self.build_range(start, end)
        if ip_range is None:
            return None, None

        request = ConfigurationRequest(prefix_length=prefix_length, gateway=gateway, dns_servers=tuple(dns))
        return ip_range, request

    def confirm(self, question: str = "Apply this configuration?") -> bool:
        return Confirm.ask(question, console=self.console, stream=self.stream, default=False)
