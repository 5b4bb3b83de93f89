"""Logging setup shared by the CLI and the services.

Log records go to stderr through Rich so that stdout only carries the edit
URL announcement.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "remdit"


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger for module `name`."""

    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")


def configure_logging(*, verbose: bool = False) -> None:
    """Install a Rich handler on the application logger.

    INFO by default (save and close events), DEBUG with `--verbose`.
    Calling it twice replaces the handler instead of stacking a new one.
    """

    logger = logging.getLogger(_ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=verbose,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
