"""
log.py
------
One-time logging setup: rich console handler plus an optional log file.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from staticrange.config import AppSettings


def setup_logging(settings: AppSettings, console: Console = None) -> None:
    handlers = [RichHandler(console=console, show_path=False, markup=False)]

    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )
