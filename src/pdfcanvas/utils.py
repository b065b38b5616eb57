# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions for pdfcanvas."""

import logging
import math
import sys
from decimal import Decimal

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Reals are written in fixed notation; PDF has no exponent syntax.
REAL_PRECISION = 6


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for pdfcanvas.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for pdfcanvas.
    """
    # Determine log level (quiet takes precedence)
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    pdfcanvas_logger = logging.getLogger("pdfcanvas")
    pdfcanvas_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    pdfcanvas_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pdfcanvas_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return pdfcanvas_logger


def format_number(value: int | float | Decimal) -> str:
    """Formats a number in PDF syntax.

    Integers are written as-is. Reals use fixed notation with at most
    ``REAL_PRECISION`` decimals and no trailing zeros, so ``2.0`` becomes
    ``2`` and ``0.5`` stays ``0.5``.

    Args:
        value: The number to format.

    Returns:
        The PDF representation of the number.

    Raises:
        ValueError: If the value is NaN or infinite.
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not PDF numbers")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Cannot write non-finite number {value}")
        value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot write non-finite number {value}")
    text = f"{value:.{REAL_PRECISION}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text
