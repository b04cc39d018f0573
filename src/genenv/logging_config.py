"""Centralized logging configuration for the genenv package."""
import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = 'genenv'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO, log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """Set up logging configuration for all modules.

    Console output goes to stderr so that stdout only carries progress and
    the final package list.

    Args:
        level: Level for the console handler
        log_file: Optional path of a debug log file
    """
    root_logger = logging.getLogger(LOGGER_NAME)

    # Repeated calls replace the handlers instead of stacking them
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG)

    # Prevent propagation to root logger to avoid duplicate logs
    root_logger.propagate = False

    return root_logger
