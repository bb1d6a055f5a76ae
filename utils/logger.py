import logging
import sys
from typing import Optional

from config import LOG_LEVEL, SERVICE_NAME


def get_logger(name: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(name or SERVICE_NAME)

    # one handler per logger, even when imported from several modules
    if logger.handlers:
        return logger

    level = getattr(logging, LOG_LEVEL, logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(handler)
    return logger
