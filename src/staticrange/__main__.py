import sys

from pydantic import ValidationError
from rich.console import Console

from staticrange.config import AppSettings
from staticrange.controller.main_controller import MainController
from staticrange.log import setup_logging

EXIT_CANCELLED = 130


def main():
    console = Console()
    try:
        settings = AppSettings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red]\n{e}")
        sys.exit(2)

    setup_logging(settings, console)

    controller = MainController(console=console, settings=settings)
    try:
        code = controller.run()
    except (KeyboardInterrupt, EOFError):
        console.print("\nCancelled")
        code = EXIT_CANCELLED

    sys.exit(code)


if __name__ == "__main__":
    main()
