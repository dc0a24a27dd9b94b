##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""Log output of the `mongostore` command line."""

import logging
import sys

import coloredlogs


LOG_FORMAT = "[%(asctime)s: %(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(asctime)s: %(levelname)s] [%(name)s: %(lineno)d] %(message)s"

# The driver logs every command and heartbeat at DEBUG
DRIVER_LOGGER = "pymongo"


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Send the records of `logger` to stdout.

    The driver's own records are only let through at DEBUG; at any other
    level just its warnings and errors are shown.

    Args:
        logger: The logger of the command line, usually the package logger.
        log_level: The name of the level to log at.
        colors: Whether to color the output with `coloredlogs`.
    """
    fmt = DEBUG_LOG_FORMAT if log_level == "DEBUG" else LOG_FORMAT
    logger.propagate = False
    logging.getLogger(DRIVER_LOGGER).setLevel(logging.DEBUG if log_level == "DEBUG" else logging.WARNING)

    if colors:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt, stream=sys.stdout)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(log_level)
