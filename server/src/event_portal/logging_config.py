"""Logging setup shared by the Event Portal web app and its migrations"""

import logging
import sys

from event_portal.config import config

LOG_FORMAT = "%(asctime)s %(levelname)s:%(name)s:%(message)s"

# Third-party loggers that are too chatty at INFO for a request-per-page app
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "multipart")


class BelowWarningFilter(logging.Filter):
    """Let through only records below WARNING (DEBUG and INFO)"""

    def filter(self, record):
        return record.levelno < logging.WARNING


def setup_logging(level_name: str | None = None):
    """
    Route DEBUG/INFO records to stdout and WARNING and above to stderr.

    Args:
        level_name: Overrides the configured LOG_LEVEL when given
    """
    level_name = level_name or config.get("log_level", "INFO")
    level = getattr(logging, level_name.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(logging.DEBUG)
    stdout_handler.addFilter(BelowWarningFilter())
    stdout_handler.setFormatter(formatter)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Usually __name__ from the calling module
    """
    return logging.getLogger(name)
