"""Logging setup for the mobility advisor packages.

Modules log through ``logging.getLogger(__name__)``; this module only
attaches handlers, and is called by the CLI.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme


_LOG_THEME = Theme({
    "logging.level.debug": "dim cyan",
    "logging.level.info": "green",
    "logging.level.warning": "yellow",
    "logging.level.error": "bold red",
    "logging.level.critical": "bold white on red",
})

_console = Console(theme=_LOG_THEME, stderr=True)

# Package loggers that share the handler
LOGGER_NAMES = ("mobility_advisor", "content_catalog")

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "WARNING", show_path: bool = False) -> None:
    """Route package logs to a rich console handler on stderr.

    Safe to call more than once; the level is updated and the handler is
    only attached the first time.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        show_path: Whether to show the source location of each record
    """
    global _handler

    level_value = getattr(logging, level.upper(), logging.WARNING)

    if _handler is None:
        _handler = RichHandler(
            console=_console,
            show_path=show_path,
            rich_tracebacks=True,
            markup=False,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        for name in LOGGER_NAMES:
            logging.getLogger(name).addHandler(_handler)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level_value)
