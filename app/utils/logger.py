import logging
import sys
from typing import Optional
import os

from app.utils.config import get_settings

LOG_FORMAT = '[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Setup and configure a logger instance.

    Args:
        name: The name of the logger (typically __name__ from the calling module)
        level: Optional logging level (DEBUG, INFO, etc.). If None, the
            configured LOG_LEVEL setting is used.

    Returns:
        logging.Logger: Configured logger instance
    """
    settings = get_settings()
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, (level or settings.log_level).upper(), logging.INFO))

    # Only add handlers if the logger doesn't already have them
    if not logger.handlers:
        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if settings.log_file:
            log_dir = os.path.dirname(settings.log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(settings.log_file)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.propagate = True

    return logger
