"""Console logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

LOG_FORMAT = "%(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers
_QUIET_LOGGERS = ("httpx", "httpcore", "anthropic", "fontTools", "weasyprint")


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
