"""Colored console logging shared by every LinxPay component.

Importing this module attaches a single colored stdout handler to the root
logger (once) and applies the level from ``LOG_LEVEL``. Components obtain
their loggers through ``get_logger`` and never configure handlers themselves.
"""

import datetime
import logging
import os
import sys
from typing import ClassVar

DEFAULT_LEVEL = "INFO"


class ColoredFormatter(logging.Formatter):
    """Formatter producing ``time | LEVEL | name | message`` lines.

    Only the level column is colored; timestamps are grey. DEBUG records get
    millisecond timestamps so request/refresh ordering is visible.

    Attributes:
        COLORS: Mapping of level names to ANSI color codes.
        GREY: ANSI code used for timestamps.
        RESET: ANSI reset code.
        NAME_WIDTH: Column width the logger name is padded to.
    """

    COLORS: ClassVar[dict[str, str]] = {
        "DEBUG": "\033[90m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    GREY: ClassVar[str] = "\033[90m"
    RESET: ClassVar[str] = "\033[0m"
    NAME_WIDTH: ClassVar[int] = 24

    def format(self, record: logging.LogRecord) -> str:
        """Render a record as an aligned, colorized single line.

        Args:
            record: LogRecord to render.

        Returns:
            The formatted message, with the traceback appended when the
            record carries exception info.
        """
        created = datetime.datetime.fromtimestamp(record.created)
        if record.levelno <= logging.DEBUG:
            timestamp = created.strftime("%H:%M:%S.%f")[:-3]
        else:
            timestamp = created.strftime("%H:%M:%S")

        level_color = self.COLORS.get(record.levelname, self.RESET)
        message = (
            f"{self.GREY}{timestamp}{self.RESET} | "
            f"{level_color}{record.levelname.ljust(8)}{self.RESET} | "
            f"{record.name.ljust(self.NAME_WIDTH)} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def _resolve_log_level(explicit_level: str | int | None = None) -> int:
    """Resolve a logging level from an explicit value or ``LOG_LEVEL``.

    Explicit levels win over the environment. Unknown names fall back to INFO.
    """
    if isinstance(explicit_level, int):
        return explicit_level

    level_name = explicit_level if explicit_level is not None else os.getenv("LOG_LEVEL")
    level = getattr(logging, str(level_name or DEFAULT_LEVEL).upper(), None)
    return level if isinstance(level, int) else logging.INFO


def _ensure_handler(root_logger: logging.Logger) -> None:
    if not root_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(ColoredFormatter())
        root_logger.addHandler(handler)


def _setup_global_logging() -> None:
    """Attach the colored handler to the root logger if none is present."""
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        _ensure_handler(root_logger)
        root_logger.setLevel(_resolve_log_level())


_setup_global_logging()


def get_logger(name: str) -> logging.Logger:
    """Get a named logger whose level follows ``LOG_LEVEL``.

    Args:
        name: Logger name, usually the owning class name.

    Returns:
        Logger that emits through the shared colored handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_log_level())
    return logger


def configure_logging(level: str | int | None = None) -> None:
    """Explicitly set the global logging level.

    The root logger and every logger created so far are moved to ``level``
    (or ``LOG_LEVEL`` when omitted). Used by the CLI's ``--log-level`` flag.
    """
    root_logger = logging.getLogger()
    _ensure_handler(root_logger)

    resolved_level = _resolve_log_level(level)
    root_logger.setLevel(resolved_level)
    for name in logging.root.manager.loggerDict:
        logging.getLogger(name).setLevel(resolved_level)
