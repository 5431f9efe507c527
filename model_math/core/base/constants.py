"""
Process-wide numerical constants and lookup tables.

The factorial and log-factorial tables are built lazily on first use and
are read-only afterwards. Their length is not part of the public contract;
callers test ``n < len(table)`` rather than relying on a specific size.
"""

import math
from dataclasses import dataclass
from functools import lru_cache

import numpy as np


@dataclass(frozen=True)
class MathConstants:
    """
    Mathematical constants shared by all kernels.
    """
    PI: float = math.pi
    E: float = math.e
    EPSILON: float = 2.0 ** -52
    INFINITY: float = math.inf
    NAN: float = math.nan
    DEFAULT_LAMBERT_W_EPSILON: float = 4.0 * 2.0 ** -52
    SQRT_PI: float = math.sqrt(math.pi)
    SQRT_TWO_PI: float = math.sqrt(2.0 * math.pi)
    LN_PI: float = math.log(math.pi)
    INVERSE_E: float = 1.0 / math.e


CONSTANTS = MathConstants()

pi = CONSTANTS.PI
e = CONSTANTS.E
epsilon = CONSTANTS.EPSILON
infinity = CONSTANTS.INFINITY
NaN = CONSTANTS.NAN
default_lambert_w_epsilon = CONSTANTS.DEFAULT_LAMBERT_W_EPSILON

INTEGER_MAX = 2 ** 63 - 1
INTEGER_MIN = -2 ** 63


@lru_cache(maxsize=None)
def factorial_table() -> np.ndarray:
    """Return the table of k! for every k whose factorial is finite.

    The table grows until the next multiplication overflows, which gives
    171 entries on binary64.

    Returns
    -------
    np.ndarray
        Read-only float64 array, entry k holds k!
    """
    values = []
    last = 1.0
    i = 1
    while not math.isinf(last):
        values.append(last)
        last *= i
        i += 1

    table = np.array(values, dtype=np.float64)
    table.setflags(write=False)
    return table


@lru_cache(maxsize=None)
def log_factorial_table() -> np.ndarray:
    """Return the table of ln(k!) parallel to :func:`factorial_table`.

    Returns
    -------
    np.ndarray
        Read-only float64 array, entry k holds ln(k!)
    """
    table = np.log(factorial_table())
    table.setflags(write=False)
    return table
