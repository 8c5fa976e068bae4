from __future__ import annotations

import logging
import sys

import numpy as np


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def period_count(years: float, frequency: int) -> int:
    """
    Number of coupon periods to maturity.

    years * frequency is rounded to the nearest whole period; for the integer
    years accepted by the calculator this is exact.
    """
    return int(round(years * frequency))


def discount_factors(periodic_yield: float, periods: int) -> np.ndarray:
    """
    (1 + y)^i for i = 1..periods.

    A zero periodic yield gives a vector of ones, never a division by zero.
    """
    exponents = np.arange(1, periods + 1, dtype=float)
    return np.power(1.0 + periodic_yield, exponents)


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    Safe to call more than once; existing handlers are left in place.
    """
    logger = logging.getLogger("bond_valuation")
    logger.setLevel(getattr(logging, str(level).upper(), logging.WARNING))

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    return logger
