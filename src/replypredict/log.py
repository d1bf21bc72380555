"""Logging setup for host applications.

Library modules only create loggers; nothing is emitted until the host
configures handlers, either its own or the rich console handler below.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "replypredict"


class LogLevel:
    """Log level constants with numeric values for comparison.

    Lower numeric value = more verbose.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


def configure_logging(
    level: str | int = "INFO",
    console: Console | None = None,
) -> logging.Logger:
    """Attach a rich console handler to the package logger.

    Calling it again replaces the previously installed handler. Records
    stop propagating to the root logger so they are printed once.

    Args:
        level: Level name ("debug", "info", ...) or numeric level
        console: Optional Rich console (defaults to stderr)

    Returns:
        The configured package logger
    """
    numeric = level if isinstance(level, int) else LogLevel.from_string(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(numeric)
    logger.propagate = False
    return logger
