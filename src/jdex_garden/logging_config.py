"""Logging configuration for jdex-garden."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Send loguru output to stderr.

    ``verbose`` shows every planned and applied action, ``quiet`` only
    warnings and errors. Verbose wins when both are set.
    """
    logger.remove()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "WARNING"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
