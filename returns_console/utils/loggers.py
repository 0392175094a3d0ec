import logging

from ..config import LOG_FORMAT, LOG_LEVEL
from ..constants import LOGGER_NAME


def get_logger(name=LOGGER_NAME):
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    return logger
