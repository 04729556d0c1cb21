"""
Logging utilities for sunvoypy modules.

Every component logs under one of the fixed ``sunvoypy.<area>`` names in
LOGGER_NAMES. Those loggers never get handlers of their own. They
propagate to the root logger, so whoever owns the process decides where
output goes. The ``sunvoy`` CLI installs a RichHandler through
basicConfig and turns on DEBUG with ``--verbose``. An application that
embeds SunvoyClient keeps its own logging setup untouched.

When the process has configured nothing at all, the package stays at
WARNING. That keeps a library import from printing the per-request INFO
lines (login, fetch counts, snapshot writes) to stderr.
"""

import logging


LOGGER_NAMES = (
    'sunvoypy',
    'sunvoypy.api',
    'sunvoypy.auth',
    'sunvoypy.client',
    'sunvoypy.cookies',
    'sunvoypy.output',
    'sunvoypy.retry',
    'sunvoypy.session',
)


def get_logger(name: str) -> logging.Logger:
    """Get a package logger that defers to the root logger's handlers.

    The level is only forced to WARNING when the root logger has no
    handlers yet, so basicConfig() called before or after import keeps
    working without setup_logging().

    Args:
        name: One of LOGGER_NAMES

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger


def set_package_level(level: int) -> None:
    """Set one level on every sunvoypy logger."""
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = True
