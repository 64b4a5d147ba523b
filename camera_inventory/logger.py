"""
Logging setup for Camera Inventory.

Every module logs through ``logging.getLogger(__name__)``; this module only
installs handlers on the package logger. The extra TRACE level carries the
raw ffmpeg stderr lines, which are too noisy for DEBUG.
"""

import os
import logging
import logging.handlers

PACKAGE_LOGGER = "camera_inventory"
LOG_FILE_NAME = "camera-inventory.log"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS = {
    'trace': TRACE,
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'warn': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

LEVEL_ABBREVIATIONS = {
    'CRITICAL': 'CRI',
    'ERROR': 'ERR',
    'WARNING': 'WRN',
    'INFO': 'INF',
    'DEBUG': 'DBG',
    'TRACE': 'TRC',
}


class InventoryFormatter(logging.Formatter):
    """``YYYY-MM-DD HH:MM:SS [LVL] [logger.name] message``"""

    def __init__(self):
        super().__init__('%(asctime)s [%(levelabbr)s] [%(name)s] %(message)s',
                         datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        record.levelabbr = LEVEL_ABBREVIATIONS.get(record.levelname, record.levelname[:3])
        return super().format(record)


def level_from_string(level_name):
    """Numeric level for a name such as ``"debug"``; unknown names mean INFO."""
    return LEVELS.get(str(level_name).lower(), logging.INFO)


def configure_logging(level="INFO", log_dir=None):
    """
    Send package logs to stderr and, with ``log_dir``, to a daily rotated file.

    Calling it again replaces the handlers installed by the previous call.

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers = []
    logger.setLevel(level_from_string(level))

    handlers = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.TimedRotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME), when='midnight', backupCount=7))

    for handler in handlers:
        handler.setFormatter(InventoryFormatter())
        logger.addHandler(handler)

    return logger
