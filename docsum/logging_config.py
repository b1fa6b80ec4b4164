"""
Logging setup shared by every docsum command.

Each command configures the root logger once after parsing its arguments.
Log records go to stdout so they interleave in order with the progress lines
the commands print. The level is the ``--log-level`` flag when given,
otherwise ``log_level`` from the configuration (``DOCSUM_LOG_LEVEL``).
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import get_config


CONSOLE_FORMAT = "%(levelname)s: %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# SDK HTTP clients and the PDF parser log every request and page below WARNING
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "openai", "anthropic", "pdfminer")


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Union[str, Path]] = None,
    verbose: bool = False,
) -> logging.Logger:
    """
    Configure the root logger for a docsum command.

    Args:
        log_level: Level name; defaults to the configured ``log_level``
        log_file: Optional file receiving every record with full timestamps
        verbose: Use the detailed format (time, logger name) on the console too

    Returns:
        The configured root logger
    """
    level_name = (log_level or get_config().log_level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level_name)

    # Repeated setup (e.g. __main__ then the command) must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(
        logging.Formatter(DETAILED_FORMAT if verbose else CONSOLE_FORMAT, datefmt="%H:%M:%S")
    )
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given module name."""
    return logging.getLogger(name)
