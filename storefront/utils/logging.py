# storefront/utils/logging.py
import logging
import sys

from storefront.utils.settings import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(logging.Formatter(_FORMAT))


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    #jeden handler na logger, bez duplikatow przy ponownym imporcie
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
        logger.setLevel(LOG_LEVEL)
        logger.propagate = False

    return logger
