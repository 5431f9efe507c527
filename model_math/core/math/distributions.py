"""
Probability distributions: densities, cumulative distributions and quantiles.

Continuous distributions expose ``<name>_pdf``, ``<name>_cdf`` and
``<name>_quantile``; the discrete Poisson, binomial and geometric
distributions expose ``<name>_pmf`` and ``<name>_cdf``. Invalid parameters
are reported through the error sink and the function returns NaN. The
``valid_<name>_parameters`` checks are shared with the deviate generators.

Outside the support a density is 0 and a cumulative distribution is 0 or 1.
Quantiles at ``p = 0`` and ``p = 1`` return the end points of the support,
which may be infinite.
"""

import math

import numpy as np
from scipy import special

from ..base.constants import infinity, NaN, pi
from ..base.error_sink import trigger_invalid_parameter
from ..base.validation import require_positive, require_non_negative, require_probability, require_whole
from .error_function import erf_real, erfc_real, erf_inv
from .gamma import gamma_real, ln_gamma_real, ln_factorial_integer
from .incomplete_gamma import (
    inverse_lower_gamma,
    normalized_lower_gamma_real,
    normalized_upper_gamma_real,
)

SQRT_2 = math.sqrt(2.0)
RECIPROCAL_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


# Parameter checks ----------------------------------------------------------

def valid_normal_parameters(sigma: float) -> bool:
    return require_positive(sigma, "sigma")


def valid_gamma_parameters(k: float, s: float) -> bool:
    return require_positive(k, "k") and require_positive(s, "s")


def valid_weibull_parameters(shape: float, scale: float) -> bool:
    return require_positive(shape, "shape") and require_positive(scale, "scale")


def valid_rate(rate: float) -> bool:
    return require_positive(rate, "rate")


def valid_scale(scale: float) -> bool:
    return require_positive(scale, "scale")


def valid_chi_squared_parameters(k: float) -> bool:
    """Check that ``k`` is a positive whole number of degrees of freedom."""
    return require_positive(k, "k") and require_whole(k, "k")


def valid_binomial_parameters(n: int, p: float) -> bool:
    return require_non_negative(n, "n") and require_probability(p)


def valid_geometric_parameters(p: float) -> bool:
    """Check ``0 < p < 1``."""
    if 0.0 < p < 1.0:
        return True
    if not math.isnan(p):
        trigger_invalid_parameter("p", p)
    return False


def _valid_quantile(p: float) -> bool:
    return require_probability(p)


# Normal ---------------------------------------------------------------------

@np.errstate(all="ignore")
def normal_pdf(x: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Density of the normal distribution.

    Parameters
    ----------
    x : float
        Point at which to evaluate
    mean : float
        Mean
    sigma : float
        Standard deviation, ``> 0``

    Returns
    -------
    float
        The density, or NaN for an invalid ``sigma``
    """
    if not valid_normal_parameters(sigma):
        return NaN
    t = (x - mean) / sigma
    return float((RECIPROCAL_SQRT_2PI / sigma) * np.exp(np.float64(-0.5 * t * t)))


def normal_cdf(x: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Cumulative normal distribution ``(1 + erf((x - mean) / (sigma sqrt 2))) / 2``."""
    if not valid_normal_parameters(sigma):
        return NaN
    t = (x - mean) / (sigma * SQRT_2)
    if t < 0:
        return 0.5 * erfc_real(-t)
    return 0.5 * (1.0 + erf_real(t))


def normal_quantile(p: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Inverse of :func:`normal_cdf`.

    Examples
    --------
    >>> round(normal_quantile(0.975), 12)
    1.95996398454
    """
    if not (valid_normal_parameters(sigma) and _valid_quantile(p)):
        return NaN
    if p == 0.0:
        return -infinity
    if p == 1.0:
        return infinity
    return mean + sigma * SQRT_2 * erf_inv(2.0 * p - 1.0)


# Log-normal -------------------------------------------------------------------

@np.errstate(all="ignore")
def log_normal_pdf(x: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Density of the log-normal distribution; 0 for ``x <= 0``."""
    if not valid_normal_parameters(sigma):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= 0.0 or x == infinity:
        return 0.0
    t = (math.log(x) - mean) / sigma
    return float((RECIPROCAL_SQRT_2PI / (x * sigma)) * np.exp(np.float64(-0.5 * t * t)))


def log_normal_cdf(x: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    if not valid_normal_parameters(sigma):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= 0.0:
        return 0.0
    return 0.5 * erfc_real(-(math.log(x) - mean) / (sigma * SQRT_2))


@np.errstate(all="ignore")
def log_normal_quantile(p: float, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Inverse of :func:`log_normal_cdf`; 0 at ``p = 0`` and +inf at ``p = 1``."""
    if not (valid_normal_parameters(sigma) and _valid_quantile(p)):
        return NaN
    if p == 0.0:
        return 0.0
    if p == 1.0:
        return infinity
    return float(np.exp(np.float64(mean + SQRT_2 * sigma * erf_inv(2.0 * p - 1.0))))


# Gamma ------------------------------------------------------------------------

@np.errstate(all="ignore")
def gamma_pdf(x: float, k: float, s: float) -> float:
    """Density of the gamma distribution with shape ``k`` and scale ``s``.

    Evaluated as ``exp((k - 1) ln x - x/s - ln Gamma(k) - k ln s)`` so that
    large shapes do not overflow Gamma(k).
    """
    if not valid_gamma_parameters(k, s):
        return NaN
    if math.isnan(x):
        return NaN
    if x < 0.0 or x == infinity:
        return 0.0
    if x == 0.0:
        if k < 1.0:
            return infinity
        return 1.0 / s if k == 1.0 else 0.0

    exponent = (k - 1.0) * math.log(x) - x / s - ln_gamma_real(k) - k * math.log(s)
    return float(np.exp(np.float64(exponent)))


def gamma_cdf(x: float, k: float, s: float) -> float:
    """Cumulative gamma distribution ``P(k, x/s)``."""
    if not valid_gamma_parameters(k, s):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= 0.0:
        return 0.0
    return normalized_lower_gamma_real(k, x / s)


def gamma_quantile(p: float, k: float, s: float) -> float:
    """Inverse of :func:`gamma_cdf`, ``s * inverse_lower_gamma(k, p Gamma(k))``."""
    if not (valid_gamma_parameters(k, s) and _valid_quantile(p)):
        return NaN
    if p == 0.0:
        return 0.0
    if p == 1.0:
        return infinity
    return s * inverse_lower_gamma(k, p * gamma_real(k))


# Weibull ----------------------------------------------------------------------

@np.errstate(all="ignore")
def weibull_pdf(x: float, shape: float, scale: float, delay: float = 0.0) -> float:
    """Density of the three parameter Weibull distribution.

    Parameters
    ----------
    x : float
        Point at which to evaluate
    shape : float
        Shape, ``> 0``
    scale : float
        Scale, ``> 0``
    delay : float
        Location of the start of the support

    Returns
    -------
    float
        The density; 0 for ``x <= delay``
    """
    if not valid_weibull_parameters(shape, scale):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= delay:
        return 0.0
    t = np.float64((x - delay) / scale)
    return float((shape / scale) * np.power(t, shape - 1.0) * np.exp(-np.power(t, shape)))


@np.errstate(all="ignore")
def weibull_cdf(x: float, shape: float, scale: float, delay: float = 0.0) -> float:
    if not valid_weibull_parameters(shape, scale):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= delay:
        return 0.0
    t = np.float64((x - delay) / scale)
    return float(-np.expm1(-np.power(t, shape)))


@np.errstate(all="ignore")
def weibull_quantile(p: float, shape: float, scale: float, delay: float = 0.0) -> float:
    """Inverse of :func:`weibull_cdf`, ``scale (-ln(1 - p))^(1/shape) + delay``."""
    if not (valid_weibull_parameters(shape, scale) and _valid_quantile(p)):
        return NaN
    if p == 1.0:
        return infinity
    return float(scale * np.power(-np.log1p(np.float64(-p)), 1.0 / shape) + delay)


# Exponential ------------------------------------------------------------------

@np.errstate(all="ignore")
def exponential_pdf(x: float, rate: float) -> float:
    if not valid_rate(rate):
        return NaN
    if x < 0.0:
        return 0.0
    return float(rate * np.exp(np.float64(-rate * x)))


@np.errstate(all="ignore")
def exponential_cdf(x: float, rate: float) -> float:
    if not valid_rate(rate):
        return NaN
    if x < 0.0:
        return 0.0
    return float(-np.expm1(np.float64(-rate * x)))


@np.errstate(all="ignore")
def exponential_quantile(p: float, rate: float) -> float:
    """Inverse of :func:`exponential_cdf`, ``-ln(1 - p) / rate``."""
    if not (valid_rate(rate) and _valid_quantile(p)):
        return NaN
    return float(-np.log1p(np.float64(-p)) / rate)


# Rayleigh ---------------------------------------------------------------------

@np.errstate(all="ignore")
def rayleigh_pdf(x: float, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= 0.0 or x == infinity:
        return 0.0
    scale_squared = scale * scale
    return float((x / scale_squared) * np.exp(np.float64(-(x * x) / (2.0 * scale_squared))))


@np.errstate(all="ignore")
def rayleigh_cdf(x: float, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    if math.isnan(x):
        return NaN
    if x <= 0.0:
        return 0.0
    return float(-np.expm1(np.float64(-(x * x) / (2.0 * scale * scale))))


@np.errstate(all="ignore")
def rayleigh_quantile(p: float, scale: float) -> float:
    """Inverse of :func:`rayleigh_cdf`, ``scale sqrt(-2 ln(1 - p))``."""
    if not (valid_scale(scale) and _valid_quantile(p)):
        return NaN
    return float(scale * np.sqrt(-2.0 * np.log1p(np.float64(-p))))


# Chi-squared ------------------------------------------------------------------

def chi_squared_pdf(x: float, k: float) -> float:
    """Density of the chi-squared distribution with ``k`` degrees of freedom.

    This is the gamma density with shape ``k/2`` and scale 2.
    """
    if not valid_chi_squared_parameters(k):
        return NaN
    return gamma_pdf(x, k / 2.0, 2.0)


def chi_squared_cdf(x: float, k: float) -> float:
    if not valid_chi_squared_parameters(k):
        return NaN
    return gamma_cdf(x, k / 2.0, 2.0)


def chi_squared_quantile(p: float, k: float) -> float:
    if not (valid_chi_squared_parameters(k) and _valid_quantile(p)):
        return NaN
    return gamma_quantile(p, k / 2.0, 2.0)


# Poisson ----------------------------------------------------------------------

@np.errstate(all="ignore")
def poisson_pmf(k: int, rate: float) -> float:
    """Probability of ``k`` events, ``exp(k ln rate - rate - ln k!)``.

    Examples
    --------
    >>> round(poisson_pmf(2, 3.0), 12)
    0.224041807655
    """
    if not valid_rate(rate):
        return NaN
    if k < 0:
        return 0.0
    exponent = k * math.log(rate) - rate - ln_factorial_integer(k)
    return float(np.exp(np.float64(exponent)))


def poisson_cdf(k: int, rate: float) -> float:
    """Probability of at most ``k`` events, ``Q(k + 1, rate)``."""
    if not valid_rate(rate):
        return NaN
    if k < 0:
        return 0.0
    return normalized_upper_gamma_real(float(k + 1), rate)


# Binomial ---------------------------------------------------------------------

@np.errstate(all="ignore")
def binomial_pmf(k: int, n: int, p: float) -> float:
    """Probability of ``k`` successes in ``n`` trials.

    Parameters
    ----------
    k : int
        Number of successes; 0 outside ``[0, n]``
    n : int
        Number of trials, ``>= 0``
    p : float
        Success probability in ``[0, 1]``

    Returns
    -------
    float
        The probability; ``p`` of 0 or 1 gives the exact limit
    """
    if not valid_binomial_parameters(n, p):
        return NaN
    if k < 0 or k > n:
        return 0.0
    if p == 0.0:
        return 1.0 if k == 0 else 0.0
    if p == 1.0:
        return 1.0 if k == n else 0.0

    ln_binomial = ln_factorial_integer(n) - ln_factorial_integer(k) - ln_factorial_integer(n - k)
    exponent = ln_binomial + k * math.log(p) + (n - k) * math.log1p(-p)
    return float(np.exp(np.float64(exponent)))


def binomial_cdf(k: int, n: int, p: float) -> float:
    """Probability of at most ``k`` successes, ``I_{1-p}(n - k, k + 1)``."""
    if not valid_binomial_parameters(n, p):
        return NaN
    if k < 0:
        return 0.0
    if k >= n or p == 0.0:
        return 1.0
    if p == 1.0:
        return 0.0
    return float(special.betainc(float(n - k), float(k + 1), 1.0 - p))


# Geometric --------------------------------------------------------------------

@np.errstate(all="ignore")
def geometric_pmf(k: int, p: float) -> float:
    """Probability that the first success happens on trial ``k >= 1``."""
    if not valid_geometric_parameters(p):
        return NaN
    if k < 1:
        return 0.0
    return float(np.power(np.float64(1.0 - p), k - 1) * p)


@np.errstate(all="ignore")
def geometric_cdf(k: int, p: float) -> float:
    if not valid_geometric_parameters(p):
        return NaN
    if k < 1:
        return 0.0
    return float(-np.expm1(k * np.log1p(np.float64(-p))))


# Cauchy-Lorentz -----------------------------------------------------------------

def cauchy_lorentz_pdf(x: float, location: float, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    t = (x - location) / scale
    if math.isinf(t):
        return 0.0
    return 1.0 / (pi * scale * (1.0 + t * t))


def cauchy_lorentz_cdf(x: float, location: float, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    return math.atan((x - location) / scale) / pi + 0.5


def cauchy_lorentz_quantile(p: float, location: float, scale: float) -> float:
    """Inverse of :func:`cauchy_lorentz_cdf`, ``location + scale tan(pi (p - 1/2))``."""
    if not (valid_scale(scale) and _valid_quantile(p)):
        return NaN
    if p == 0.0:
        return -infinity
    if p == 1.0:
        return infinity
    return location + scale * math.tan(pi * (p - 0.5))
