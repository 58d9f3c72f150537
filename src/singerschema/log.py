# Copyright 2026 singerschema Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for command-line use."""

import logging

# ###############
# Public Interface
# ###############

LOGGER_NAME = "singerschema"


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this repeatedly only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
    )
    logger.addHandler(handler)
    # stop passing records to the root logger (avoid duplicated messages)
    logger.propagate = False
    return logger
