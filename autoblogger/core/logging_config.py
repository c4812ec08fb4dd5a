# /autoblogger/core/logging_config.py

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Installs a single stream handler on the application's root logger."""
    logger = logging.getLogger("autoblogger")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers = []
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
