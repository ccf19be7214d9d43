"""Logging setup for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "genapp-rich"


def configure_logging(verbose: bool = False) -> None:
    """Route ``genapp`` loggers to stderr through Rich.

    WARNING and above by default, DEBUG when *verbose*. Calling it again only
    updates the level.
    """
    logger = logging.getLogger("genapp")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=False,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
