"""
=========================================================
Centralized logging configuration for the query builder.
=========================================================

All project modules log through logging.getLogger(__name__). This module
wires those loggers to console and file handlers once, at startup:

- Colored console output with emoji level markers
- Optional file output under a log directory
- A separate level for the query loggers ('builder', 'utils'), so rendered
  SQL can be traced at DEBUG while the rest of the application stays at INFO

Example:
    >>> from core.logger import get_logger, setup_logging
    >>>
    >>> # Trace every rendered statement, keep everything else at INFO
    >>> setup_logging(log_level='INFO', query_level='DEBUG', log_file='queries.log')
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info("Builder ready")
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import config

QUERY_LOGGERS = ('builder', 'utils')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Console formatter adding ANSI colors and an emoji per level.

    Exposes the extra %(emoji)s field to the format string. Records are copied
    before decoration so file handlers on the same logger keep plain level names.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    EMOJI = {
        'DEBUG': '🔍',
        'INFO': 'ℹ️ ',
        'WARNING': '⚠️ ',
        'ERROR': '❌',
        'CRITICAL': '🔥'
    }

    def format(self, record):
        decorated = logging.makeLogRecord(record.__dict__)
        levelname = decorated.levelname
        decorated.emoji = self.EMOJI.get(levelname, '')
        if levelname in self.COLORS:
            decorated.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
        return super().format(decorated)


def _to_level(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name!r}")
    return level


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """Get a logger, optionally overriding its level.

    Args:
        name: Logger name (typically __name__ of calling module)
        level: Optional level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(_to_level(level))
    return logger


def setup_logging(
    log_level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
    use_colors: bool = True,
    query_level: Optional[str] = None
) -> None:
    """Configure the root logger and the query loggers.

    Replaces any handlers already on the root logger. Call once at startup.

    Args:
        log_level: Level for the whole application
        log_file: Optional log file name (e.g., 'queries.log')
        log_dir: Directory for log_file (defaults to 'logs/')
        console_output: If True, log to stdout
        use_colors: If True, decorate console output with ColoredFormatter
        query_level: Level for the 'builder' and 'utils' loggers; None makes
            them follow log_level

    Raises:
        ValueError: If a level name is unknown
    """
    level = _to_level(log_level)
    query = _to_level(query_level) if query_level else level
    # Handlers must let the more verbose of the two levels through
    handler_level = min(level, query)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    for name in QUERY_LOGGERS:
        logging.getLogger(name).setLevel(query if query_level else logging.NOTSET)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(handler_level)
        if use_colors:
            console_handler.setFormatter(ColoredFormatter(f'%(emoji)s {LOG_FORMAT}', datefmt=DATE_FORMAT))
        else:
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir) if log_dir else Path('logs')
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path / log_file, encoding='utf-8')
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get the logger for a module (use __name__)."""
    return logging.getLogger(module_name)


def _init_default_logging():
    """Apply core.config logging settings unless the root logger is already configured."""
    if not logging.getLogger().handlers:
        setup_logging(
            log_level=config.logging.level,
            log_file=config.logging.log_file,
            use_colors=config.logging.use_colors,
            query_level=config.logging.query_level
        )


# Auto-initialize on import
_init_default_logging()
