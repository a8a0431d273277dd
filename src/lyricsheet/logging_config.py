"""Logging configuration for the command-line tool."""

import logging

from .config import ExchangeConfig


def setup_logging(config: ExchangeConfig) -> logging.Logger:
    logger = logging.getLogger("lyricsheet")
    logger.setLevel(config.log_level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(config.log_level)
    console_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    logger.addHandler(console_handler)
    return logger
