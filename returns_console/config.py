import logging

from .constants import LOG_LEVEL_NAME, CURRENCY_CODE, MONEY_PLACES

LOG_LEVEL = logging.getLevelName(LOG_LEVEL_NAME)
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

CURRENCY = CURRENCY_CODE
MONEY_DECIMALS = MONEY_PLACES
