"""Logging configuration for the job submission service.

Modules log through `logging.getLogger(__name__)`; this module attaches one
stream handler to the package root logger.
"""

import logging

_PACKAGE_LOGGER_NAME = "zoophy_jobs"


def logging_configure(log_level: str = "INFO") -> logging.Logger:
    """Configure the package root logger once and return it.

    Args:
        log_level: Standard logging level name.

    Returns:
        logging.Logger: Configured package root logger.
    """

    logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(log_level)
    return logger
