"""
Error function, complementary error function and inverse error function.

Small arguments use the Maclaurin series

    erf(x) = (2 / sqrt(pi)) e^(-x^2) x sum_k (2 x^2)^k / (1 3 5 ... (2k + 1))

and large ones the continued fraction for erfc, with ``2 + ceil(100 / x)``
terms. Complex arguments go through the Faddeeva function in SciPy.
"""

import math

import numpy as np
from scipy import special

from ..base.constants import epsilon, infinity, NaN
from ..base.error_sink import trigger_can_not_converge, trigger_invalid_parameter
from .incomplete_gamma import upper_gamma_real

RECIPROCAL_SQRT_PI = 1.0 / math.sqrt(math.pi)
ERF_CONSTANT = 2.0 * RECIPROCAL_SQRT_PI

SERIES_LIMIT = 2.0

ERF_INV_TOLERANCE = 2000.0 * epsilon
ERF_INV_SETTLE_ITERATIONS = 10
MAXIMUM_ERF_INV_ITERATIONS = 100


def _erf_series(x: float) -> float:
    x2 = x * x
    x2t2 = 2.0 * x2
    numerator = 1.0
    denominator = 1.0
    denominator_term = 1.0
    total = 1.0

    while True:
        denominator_term += 2.0
        numerator *= x2t2
        denominator *= denominator_term

        last = total
        total += numerator / denominator
        if total == last:
            break

    return ERF_CONSTANT * math.exp(-x2) * x * total


def _erfc_continued_fraction(x: float) -> float:
    iterations = int(2 + math.ceil(100.0 / x))
    numerator = iterations / 2.0
    f = 0.0

    while numerator >= 0.5:
        f = numerator / (x + f)
        numerator -= 0.5

    return RECIPROCAL_SQRT_PI * math.exp(-x * x) / (x + f)


def erf_real(x: float) -> float:
    """Error function of a real argument.

    Examples
    --------
    >>> round(erf_real(1.0), 12)
    0.84270079295
    """
    if math.isnan(x):
        return NaN
    if x < -SERIES_LIMIT:
        return _erfc_continued_fraction(-x) - 1.0
    if x < 0:
        return -_erf_series(-x)
    if x < SERIES_LIMIT:
        return _erf_series(x)
    return 1.0 - _erfc_continued_fraction(x)


def erfc_real(x: float) -> float:
    """Complementary error function ``1 - erf(x)`` without cancellation."""
    if math.isnan(x):
        return NaN
    if x < -SERIES_LIMIT:
        return 2.0 - _erfc_continued_fraction(-x)
    if x < 0:
        return 1.0 + _erf_series(-x)
    if x < SERIES_LIMIT:
        return RECIPROCAL_SQRT_PI * upper_gamma_real(0.5, x * x)
    return _erfc_continued_fraction(x)


def erf_complex(x: complex) -> complex:
    """Error function of a complex argument, through the Faddeeva function
    in :func:`scipy.special.erf`."""
    if math.isnan(x.real) or math.isnan(x.imag):
        return complex(NaN, 0) if x.imag == 0 else complex(NaN, NaN)
    return complex(special.erf(np.complex128(x)))


def erfc_complex(x: complex) -> complex:
    if x.imag == 0:
        return complex(erfc_real(x.real), 0)
    return complex(special.erfc(np.complex128(x)))


def erf_inv(x: float) -> float:
    """Inverse error function by Newton-Raphson.

    Parameters
    ----------
    x : float
        Value in ``[-1, 1]``

    Returns
    -------
    float
        y with ``erf(y) = x``; -inf and +inf at -1 and 1, NaN outside

    Notes
    -----
    The iteration stops once ten steps have moved the estimate by no more
    than ``2000 * epsilon``, or when a step leaves it unchanged.
    """
    if math.isnan(x):
        return NaN
    if x == 1.0:
        return infinity
    if x == -1.0:
        return -infinity
    if not -1.0 < x < 1.0:
        trigger_invalid_parameter("x", x)
        return NaN

    result = 0.0
    remaining = ERF_INV_SETTLE_ITERATIONS
    for _ in range(MAXIMUM_ERF_INV_ITERATIONS):
        last = result
        slope = ERF_CONSTANT * math.exp(-result * result)
        result -= (erf_real(result) - x) / slope

        change = abs(result - last)
        if change <= ERF_INV_TOLERANCE:
            remaining -= 1
        if change == 0 or remaining == 0:
            return result

    trigger_can_not_converge("erf_inv", MAXIMUM_ERF_INV_ITERATIONS)
    return NaN
