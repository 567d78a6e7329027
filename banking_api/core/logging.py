import logging
from typing import Optional

from banking_api.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging(level: Optional[str] = None, logger_name: str = "banking_api") -> logging.Logger:
    """
    Attaches a single stream handler to the package logger.
    Safe to call more than once; existing handlers are replaced.
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))

    return logger
