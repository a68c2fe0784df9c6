"""
Logging setup for applications embedding the registry.

Library modules only create loggers (logging.getLogger(__name__)); they
never configure handlers on import. An application calls setup_logging()
once to send the "sharedata" logger tree to the console through rich.

Usage:
    from sharedata.logging_config import setup_logging

    setup_logging("DEBUG")
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "sharedata"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV = "SHAREDATA_LOG_LEVEL"

_handler: RichHandler | None = None


def setup_logging(level: str | None = None, *, console: Console | None = None) -> logging.Logger:
    """
    Configure the registry's logger tree.

    Level resolution: argument, then $SHAREDATA_LOG_LEVEL, then INFO.
    Calling again replaces the handler rather than stacking a second one.
    """
    global _handler

    level_name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    numeric = logging.getLevelName(level_name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    _handler.setFormatter(logging.Formatter("%(name)s | %(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
