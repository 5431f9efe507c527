"""
Combinatorial functions: binomial coefficients and Stirling numbers.
"""

import math
from functools import lru_cache
from typing import List

import numpy as np

from ..base.constants import INTEGER_MAX, factorial_table, infinity, NaN
from ..base.error_sink import trigger_infinity, trigger_invalid_parameter
from ..base.validation import is_whole
from .gamma import ln_factorial_integer

# Exact integer evaluation of stirling2 is used up to this size.
STIRLING2_EXACT_LIMIT = 2000


def binomial_real(n: float, k: float) -> float:
    """Binomial coefficient ``n choose k``.

    Parameters
    ----------
    n, k : float
        Whole, non-negative values with ``k <= n``

    Returns
    -------
    float
        The coefficient; a ratio of factorial table entries when both are
        in the table, else ``exp(ln n! - ln k! - ln (n-k)!)``. NaN for
        invalid arguments.

    Examples
    --------
    >>> binomial_real(10, 3)
    120.0
    """
    if math.isnan(n) or math.isnan(k):
        return NaN
    if n < 0 or not is_whole(n):
        trigger_invalid_parameter("n", n)
        return NaN
    if k < 0 or k > n or not is_whole(k):
        trigger_invalid_parameter("k", k)
        return NaN

    ni = int(n)
    ki = int(k)
    table = factorial_table()
    if ni < len(table):
        return float((table[ni] / table[ki]) / table[ni - ki])

    ln_binomial = ln_factorial_integer(ni) - ln_factorial_integer(ki) - ln_factorial_integer(ni - ki)
    with np.errstate(all="ignore"):
        return float(np.exp(ln_binomial))


@lru_cache(maxsize=1024)
def _stirling1_exact(n: int, k: int) -> int:
    # Row by row: s(m, j) = (m - 1) s(m - 1, j) + s(m - 1, j - 1)
    row: List[int] = [1] + [0] * k
    for m in range(1, n + 1):
        for j in range(min(m, k), 0, -1):
            row[j] = (m - 1) * row[j] + row[j - 1]
        row[0] = 0
    return row[k]


def unsigned_stirling1_integer(n: int, k: int) -> int:
    """Unsigned Stirling number of the first kind ``[n k]``.

    Results above the signed 64-bit range saturate to ``INTEGER_MAX``.

    Examples
    --------
    >>> unsigned_stirling1_integer(5, 2)
    50
    """
    if n < 0 or k < 0 or k > n:
        return 0

    result = _stirling1_exact(n, k)
    if result > INTEGER_MAX:
        trigger_infinity("unsigned_stirling1")
        return INTEGER_MAX
    return result


@lru_cache(maxsize=1024)
def _stirling1_real(n: int, k: int) -> float:
    row = np.zeros(k + 1, dtype=np.float64)
    row[0] = 1.0
    with np.errstate(all="ignore"):
        for m in range(1, n + 1):
            upper = min(m, k)
            row[1:upper + 1] = (m - 1) * row[1:upper + 1] + row[0:upper]
            row[0] = 0.0
    return float(row[k])


def unsigned_stirling1_real(n: float, k: float) -> float:
    """Unsigned Stirling number of the first kind evaluated in floating point."""
    if math.isnan(n) or math.isnan(k):
        return NaN
    if not is_whole(n) or not is_whole(k):
        trigger_invalid_parameter("n" if not is_whole(n) else "k", n if not is_whole(n) else k)
        return NaN
    if n < 0 or k < 0 or k > n:
        return 0.0
    return _stirling1_real(int(n), int(k))


def stirling2_integer(n: int, k: int) -> float:
    """Stirling number of the second kind ``{n k}``.

    Evaluates ``(1/k!) sum_{i=0..k} (-1)^i C(k, i) (k - i)^n``. Moderate
    arguments are summed exactly in integer arithmetic; larger ones factor
    out ``k^n`` and finish in the log domain, rounding to the nearest
    integer.

    Examples
    --------
    >>> stirling2_integer(5, 2)
    15.0
    """
    if n < 0 or k < 0 or k > n:
        return 0.0
    if k == 0:
        return 1.0 if n == 0 else 0.0

    if n <= STIRLING2_EXACT_LIMIT:
        total = sum((-1) ** i * math.comb(k, i) * (k - i) ** n for i in range(k + 1))
        result = total // math.factorial(k)
        try:
            return float(result)
        except OverflowError:
            trigger_infinity("stirling2")
            return infinity

    # sum = k^n * sum_i (-1)^i C(k, i) (1 - i/k)^n
    ln_k_factorial = ln_factorial_integer(k)
    inner = 0.0
    with np.errstate(all="ignore"):
        for i in range(k):
            ln_term = (
                ln_k_factorial - ln_factorial_integer(i) - ln_factorial_integer(k - i)
                + n * math.log1p(-i / k)
            )
            inner += (-1) ** i * float(np.exp(ln_term))
    if not math.isfinite(inner):
        trigger_infinity("stirling2")
        return infinity
    if inner <= 0:
        return 0.0

    with np.errstate(all="ignore"):
        result = float(np.round(np.exp(n * math.log(k) + math.log(inner) - ln_factorial_integer(k))))
    if math.isinf(result):
        trigger_infinity("stirling2")
    return result


def stirling2_real(n: float, k: float) -> float:
    if math.isnan(n) or math.isnan(k):
        return NaN
    if not is_whole(n) or not is_whole(k):
        trigger_invalid_parameter("n" if not is_whole(n) else "k", n if not is_whole(n) else k)
        return NaN
    return stirling2_integer(int(n), int(k))
