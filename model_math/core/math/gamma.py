"""
Gamma function family.

Real and complex gamma, log-gamma, factorial, log-factorial and the beta
function. Values of at least 0.5 (real part for complex arguments) use the
Lanczos approximation with g = 7; smaller values go through the reflection
formula. When Lanczos overflows, log-gamma falls back to a Stirling series.

The kernels compute with numpy scalars so overflow and division by zero
follow IEEE rules instead of raising.
"""

import math
from typing import Union

import numpy as np

from ..base.constants import factorial_table, log_factorial_table, pi, infinity, NaN
from ..base.error_sink import trigger_nan, trigger_infinity, trigger_invalid_parameter
from ..base.validation import is_whole

ScalarLike = Union[float, complex, np.float64, np.complex128]

LANCZOS_A = 0.99999999999980993
LANCZOS_B = math.sqrt(2.0 * math.pi)
LANCZOS_COEFFICIENTS = (
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)

STIRLING_COEFFICIENTS = (
    8.33333333333333287074040641e-02,
    8.33333333333333287074040641e-02,
    1.63888888888888889505679458e-01,
    4.83333333333333281522925517e-01,
    1.90357142857142891401167617e+00,
    9.38690476190476097428927460e+00,
)

# Above this, Lanczos is not attempted for log-gamma.
LN_GAMMA_LANCZOS_LIMIT = 142.0

# Beta uses the direct gamma ratio while every argument stays below this.
BETA_DIRECT_LIMIT = 140.0

_LN_PI = math.log(math.pi)


@np.errstate(all="ignore")
def lanczos_approximation(value: ScalarLike) -> ScalarLike:
    """Lanczos approximation to the gamma function.

    Parameters
    ----------
    value : np.float64 or np.complex128
        Argument; the (real part of the) value must be at least 0.5

    Returns
    -------
    np.float64 or np.complex128
        Approximation to gamma(value); +inf when the product overflows for
        arguments beyond the factorial table
    """
    x = LANCZOS_A
    for i, coefficient in enumerate(LANCZOS_COEFFICIENTS):
        x = x + coefficient / (value + i)

    t = value + (len(LANCZOS_COEFFICIENTS) - 1.5)
    result = LANCZOS_B * np.power(t, value - 0.5) * np.exp(-t) * x

    if np.isnan(np.real(result)) and np.real(value) > len(factorial_table()) - 1:
        if np.iscomplexobj(result):
            result = np.complex128(complex(infinity, float(np.imag(result))))
        else:
            result = np.float64(infinity)
    return result


@np.errstate(all="ignore")
def stirling_approximation(value: ScalarLike) -> ScalarLike:
    """Six term Stirling series for log-gamma.

    ``x ln x - x + 0.5 ln(2 pi / x) + sum_k S_k / prod_{j<=k} (x + j)``
    """
    result = value * np.log(value) - value + 0.5 * np.log(2.0 * pi / value)

    denominator = 1.0
    for j, coefficient in enumerate(STIRLING_COEFFICIENTS, start=1):
        denominator = denominator * (value + j)
        result = result + coefficient / denominator
    return result


# Factorials ------------------------------------------------------------------

def factorial_integer(value: int) -> float:
    """Return ``value!`` as a Real.

    Negative values are an invalid parameter and give NaN. Values beyond
    the factorial table overflow to +inf.
    """
    if value < 0:
        trigger_invalid_parameter("value", value)
        return NaN

    table = factorial_table()
    if value < len(table):
        return float(table[value])
    trigger_infinity("factorial")
    return infinity


def factorial_real(value: float) -> float:
    """Return ``value!`` for a whole, non-negative real value.

    Non-whole values give NaN rather than ``gamma(value + 1)``.
    """
    if math.isnan(value):
        return NaN
    if value < 0 or (math.isfinite(value) and not is_whole(value)):
        trigger_invalid_parameter("value", value)
        return NaN
    if math.isinf(value):
        trigger_infinity("factorial")
        return infinity
    return factorial_integer(int(value))


def ln_factorial_integer(value: int) -> float:
    """Return ``ln(value!)``.

    Values beyond the table use the Stirling form
    ``n ln n - n + 0.5 ln(2 pi n) + 1/(12 n) - 1/(360 n^3) + 1/(1260 n^5)``.
    """
    if value < 0:
        trigger_invalid_parameter("value", value)
        return NaN

    table = log_factorial_table()
    if value < len(table):
        return float(table[value])

    x = float(value)
    x2 = x * x
    x3 = x2 * x
    x5 = x2 * x3
    return (
        x * math.log(x)
        - x
        + 0.5 * math.log(2 * pi * x)
        + 1.0 / (12.0 * x)
        - 1.0 / (360.0 * x3)
        + 1.0 / (1260.0 * x5)
    )


def ln_factorial_real(value: float) -> float:
    """Return ``ln(value!)`` for a whole, non-negative real value."""
    if math.isnan(value):
        return NaN
    if value < 0 or not is_whole(value):
        if math.isinf(value) and value > 0:
            return infinity
        trigger_invalid_parameter("value", value)
        return NaN
    return ln_factorial_integer(int(value))


# Gamma -------------------------------------------------------------------------

def gamma_integer(value: int) -> float:
    if value > 0:
        return factorial_integer(value - 1)
    return gamma_real(float(value))


@np.errstate(all="ignore")
def gamma_real(value: float) -> float:
    """Gamma function of a real argument.

    Parameters
    ----------
    value : float
        Argument

    Returns
    -------
    float
        gamma(value). Positive whole values come from the factorial table.
        The poles at zero and the negative integers give NaN.
    """
    if math.isnan(value):
        return NaN

    if value < 0.5:
        if is_whole(value) or math.isinf(value):
            trigger_nan("gamma")
            return NaN
        x = np.float64(value)
        return float(pi / (np.sin(pi * x) * lanczos_approximation(1.0 - x)))

    if is_whole(value):
        return factorial_real(value - 1.0)
    return float(lanczos_approximation(np.float64(value)))


@np.errstate(all="ignore")
def gamma_complex(value: complex) -> complex:
    """Gamma function of a complex argument."""
    real_part = value.real

    if real_part < 0.5:
        if value.imag == 0 and is_whole(real_part):
            trigger_nan("gamma")
            return complex(NaN, 0)
        z = np.complex128(value)
        result = complex(pi / (np.sin(pi * z) * lanczos_approximation(1.0 - z)))
    elif real_part > 0 and value.imag == 0 and is_whole(real_part):
        result = complex(factorial_real(real_part - 1), 0)
    else:
        result = complex(lanczos_approximation(np.complex128(value)))

    if value.imag == 0 and result.imag != 0:
        result = complex(result.real, 0)
    return result


def ln_gamma_integer(value: int) -> float:
    if value > 0:
        return ln_factorial_integer(value - 1)
    return ln_gamma_real(float(value))


@np.errstate(all="ignore")
def ln_gamma_real(value: float) -> float:
    """Natural log of the gamma function of a real argument.

    Arguments where gamma is negative or has a pole give NaN.
    """
    if math.isnan(value):
        return NaN
    if value == infinity:
        return infinity

    if value >= 1 and is_whole(value):
        return ln_factorial_real(value - 1)

    x = np.float64(value)
    if value < 0.5:
        reflected = lanczos_approximation(1.0 - x)
        if np.isinf(reflected):
            result = _LN_PI - np.log(np.sin(pi * x)) - stirling_approximation(1.0 - x)
        else:
            result = np.log(pi / (np.sin(pi * x) * reflected))
    elif value <= LN_GAMMA_LANCZOS_LIMIT:
        g = lanczos_approximation(x)
        result = stirling_approximation(x) if np.isinf(g) else np.log(g)
    else:
        result = stirling_approximation(x)

    result = float(result)
    if math.isnan(result):
        trigger_nan("ln_gamma")
    return result


@np.errstate(all="ignore")
def ln_gamma_complex(value: complex) -> complex:
    """Natural log of the gamma function of a complex argument."""
    if value.real >= 1 and value.imag == 0 and is_whole(value.real):
        return complex(ln_factorial_real(value.real - 1), 0)

    z = np.complex128(value)
    if value.real < 0.5:
        reflected = lanczos_approximation(1.0 - z)
        if np.isinf(reflected.real) or np.isinf(reflected.imag) or np.isnan(reflected.imag):
            result = _LN_PI - np.log(np.sin(pi * z)) - stirling_approximation(1.0 - z)
        else:
            result = np.log(pi / (np.sin(pi * z) * reflected))
    elif value.real <= LN_GAMMA_LANCZOS_LIMIT:
        g = lanczos_approximation(z)
        if np.isinf(g.real) or np.isinf(g.imag):
            result = stirling_approximation(z)
        else:
            result = np.log(g)
    else:
        result = stirling_approximation(z)

    return complex(result)


# Beta --------------------------------------------------------------------------

def beta_real(x: float, y: float) -> float:
    """Beta function ``gamma(x) gamma(y) / gamma(x + y)``.

    Parameters
    ----------
    x, y : float
        Positive arguments

    Returns
    -------
    float
        B(x, y), or NaN when either argument is not positive
    """
    if math.isnan(x) or math.isnan(y):
        return NaN
    if x <= 0 or y <= 0:
        trigger_invalid_parameter("x" if x <= 0 else "y", x if x <= 0 else y)
        return NaN

    s = x + y
    if s < BETA_DIRECT_LIMIT:
        return gamma_real(x) * gamma_real(y) / gamma_real(s)

    with np.errstate(all="ignore"):
        return float(np.exp(ln_gamma_real(x) + ln_gamma_real(y) - ln_gamma_real(s)))


def beta_complex(x: complex, y: complex) -> complex:
    """Beta function of complex arguments, evaluated in the log domain."""
    if (x.imag == 0 and x.real <= 0) or (y.imag == 0 and y.real <= 0):
        trigger_invalid_parameter("x" if x.imag == 0 and x.real <= 0 else "y", x)
        return complex(NaN, NaN)

    with np.errstate(all="ignore"):
        result = complex(np.exp(
            np.complex128(ln_gamma_complex(x))
            + np.complex128(ln_gamma_complex(y))
            - np.complex128(ln_gamma_complex(x + y))
        ))

    if x.imag == 0 and y.imag == 0:
        result = complex(result.real, 0)
    return result
