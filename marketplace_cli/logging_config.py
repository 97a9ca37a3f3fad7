"""
Logging configuration for the Marketplace CLI.

Everything is logged under the ``marketplace_cli`` namespace. Console records
go to stderr so that stdout only ever carries rendered tables and JSON.
"""

import logging
import sys
from typing import Optional

LOGGER_NAME = 'marketplace_cli'

BRIEF_FORMAT = '%(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'

# chatty at DEBUG; only raised to DEBUG together with --verbose
LIBRARY_LOGGERS = ('botocore', 'boto3', 's3transfer', 'urllib3')


class ColoredFormatter(logging.Formatter):
    """Formatter that highlights the level name with ANSI colors."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # cyan
        logging.INFO: '\033[32m',      # green
        logging.WARNING: '\033[33m',   # yellow
        logging.ERROR: '\033[31m',     # red
        logging.CRITICAL: '\033[35m',  # magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record):
        message = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or color is None:
            return message
        return message.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def _console_handler(level: int, verbose: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    use_colors = hasattr(sys.stderr, 'isatty') and sys.stderr.isatty()
    handler.setFormatter(ColoredFormatter(DETAILED_FORMAT if verbose else BRIEF_FORMAT, use_colors=use_colors))
    return handler


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the ``marketplace_cli`` logger for one command run.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives every record at DEBUG
        verbose: Force DEBUG on the console and use the detailed format

    Returns:
        The package logger
    """
    console_level = getattr(logging, level.upper(), logging.WARNING)
    if verbose:
        console_level = logging.DEBUG

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file else console_level)

    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    logger.addHandler(_console_handler(console_level, verbose))

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        logger.addHandler(file_handler)

    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``marketplace_cli.<name>`` child logger."""
    return logging.getLogger(f'{LOGGER_NAME}.{name}')
