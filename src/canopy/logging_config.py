"""Logging setup for the canopy CLI and embedding applications."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Route canopy's loguru output to stderr.

    ``quiet`` keeps only warnings (build diagnostics, listener failures) and
    wins over ``verbose``.
    """
    logger.remove()
    if quiet:
        level = "WARNING"
    elif verbose:
        level = "DEBUG"
    else:
        level = "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {name}: {message}")
