"""Application-wide logger

Modules import the shared instance with ``from utils.logger import logger``.
"""

import logging
import sys

from config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def setup_logger(name: str = "vipaccess", level: str = None) -> logging.Logger:
    """Create (or fetch) the named logger with a single stderr handler"""
    log = logging.getLogger(name)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)

    log.setLevel((level or settings.LOG_LEVEL).upper())
    return log


logger = setup_logger()
