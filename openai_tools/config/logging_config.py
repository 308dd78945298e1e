"""
Configure logging for applications using the library.

The library itself only ever asks for ``logging.getLogger(LOGGER_NAME)`` and
never installs handlers on import. Applications that want the library's
messages on the console (and in a rotating log file) call
:func:`configure_logging` once at startup.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from openai_tools.config.constants import LOGGER_NAME

# Log levels
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Log file configuration
LOG_DIR = Path(os.getenv("OPENAI_TOOLS_LOG_DIR", "logs"))
LOG_FILE = LOG_DIR / "openai_tools.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def configure_logging(log_to_file: bool = True):
    """
    Configure the library logger with console and file handlers.

    Args:
        log_to_file: Also write to a rotating file under ``LOG_DIR``

    Returns:
        logging.Logger: The configured logger instance
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))

    # Remove existing handlers if any
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            file_handler = RotatingFileHandler(
                LOG_FILE,
                maxBytes=MAX_LOG_SIZE,
                backupCount=BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")

    # Prevent log propagation to root logger
    logger.propagate = False

    logger.info("Logging configured")
    return logger
