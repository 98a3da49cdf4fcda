"""
Logging setup for PortSim.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves. Applications (the CLI) call
:func:`configure_logging` once to route the ``portsim`` logger hierarchy
to stderr through rich.

Example
-------
>>> from portsim.logger import configure_logging
>>> logger = configure_logging("INFO")
>>> logger.info("ready")
"""

from __future__ import annotations

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["LOGGER_NAME", "configure_logging"]

LOGGER_NAME = "portsim"


def configure_logging(level: Union[int, str] = "WARNING") -> logging.Logger:
    """
    Attach a stderr RichHandler to the ``portsim`` logger and set its level.

    Calling it again only updates the level; handlers are not duplicated.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
