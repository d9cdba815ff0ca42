"""
General utility functions for the CLI application.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

console: Console = Console()

# Packages whose module loggers are routed to the console
LOGGER_NAMES = ("adapters", "core", "ui", "main")


def configure_logging(verbose: bool = False) -> None:
    """
    Send the project's log records to stderr through Rich.

    Args:
        verbose: Log at DEBUG level when True, WARNING otherwise.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers = [handler]
        logger.setLevel(level)
        logger.propagate = False

