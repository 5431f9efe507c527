"""
Parameter checks used by the numerical kernels.

Unlike the raising validators in :mod:`exceptions`, these helpers report
through the error sink and return ``False`` so the caller can return its
sentinel. A NaN argument fails the check silently: NaN is already the
error signal and is propagated without a sink call.
"""

import math
from typing import Union

from .error_sink import trigger_invalid_parameter

Number = Union[int, float]


def is_whole(value: Number) -> bool:
    """Check whether a real value is a finite whole number."""
    return math.isfinite(value) and float(value) == math.floor(value)


def require_positive(value: Number, name: str) -> bool:
    """Check ``value > 0``.

    Parameters
    ----------
    value : int or float
        Value to check
    name : str
        Name of the parameter for error reports

    Returns
    -------
    bool
        True if the check passed
    """
    if value > 0:
        return True
    if not math.isnan(value):
        trigger_invalid_parameter(name, value)
    return False


def require_non_negative(value: Number, name: str) -> bool:
    """Check ``value >= 0``."""
    if value >= 0:
        return True
    if not math.isnan(value):
        trigger_invalid_parameter(name, value)
    return False


def require_probability(p: Number, name: str = "p") -> bool:
    """Check ``0 <= p <= 1``."""
    if 0 <= p <= 1:
        return True
    if not math.isnan(p):
        trigger_invalid_parameter(name, p)
    return False


def require_whole(value: Number, name: str) -> bool:
    """Check that a real value is a whole number."""
    if is_whole(value):
        return True
    if not math.isnan(value):
        trigger_invalid_parameter(name, value)
    return False
