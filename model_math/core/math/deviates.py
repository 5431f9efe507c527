"""
Random deviates, scalar and matrix shaped.

Every scalar generator takes the :class:`PerThread` that owns the random
state as its first argument. The ``*_matrix`` variants allocate a matrix of
the requested shape and fill each cell, in column major order, with an
independent scalar draw. Parameters are checked before anything is drawn:
a failed check is reported through the error sink and the generator returns
NaN (real deviates), -1 (integer deviates) or an empty matrix.
"""

from typing import Callable, Type

from ..base.constants import NaN
from ..base.validation import require_non_negative
from ..values.matrix import Matrix, MatrixInteger, MatrixReal
from ..values.per_thread import PerThread
from .distributions import (
    valid_binomial_parameters,
    valid_chi_squared_parameters,
    valid_gamma_parameters,
    valid_geometric_parameters,
    valid_normal_parameters,
    valid_rate,
    valid_scale,
    valid_weibull_parameters,
)

_UINT64_MAX = 2 ** 64 - 1

INVALID_INTEGER_DEVIATE = -1


def _matrix(matrix_class: Type[Matrix], number_rows: int, number_columns: int,
            valid: bool, draw: Callable[[], object]) -> Matrix:
    if not valid:
        return matrix_class()
    if not (require_non_negative(number_rows, "number_rows")
            and require_non_negative(number_columns, "number_columns")):
        return matrix_class()
    return matrix_class.generate(number_rows, number_columns, draw)


# Raw integers and uniform reals ---------------------------------------------------

def random_integer64(pt: PerThread) -> int:
    """Return 64 random bits as a signed integer."""
    return pt.random64()


def random_integer64_matrix(pt: PerThread, number_rows: int, number_columns: int) -> MatrixInteger:
    return _matrix(MatrixInteger, number_rows, number_columns, True, pt.random64)


def random_integer32(pt: PerThread) -> int:
    """Return 32 random bits as a non-negative integer."""
    return pt.random32()


def random_integer32_matrix(pt: PerThread, number_rows: int, number_columns: int) -> MatrixInteger:
    return _matrix(MatrixInteger, number_rows, number_columns, True, pt.random32)


def trng32(pt: PerThread) -> int:
    """Return 32 bits from the operating system's cryptographic generator."""
    return pt.trng()


def trng64(pt: PerThread) -> int:
    """Return 64 true random bits as a signed integer."""
    value = (pt.trng() << 32) | pt.trng()
    return value - (1 << 64) if value >= (1 << 63) else value


def trng_u(pt: PerThread) -> float:
    """Uniform true random real over [0, 1]."""
    return (trng64(pt) & _UINT64_MAX) / float(_UINT64_MAX)


def uniform_deviate_inclusive(pt: PerThread) -> float:
    """Uniform deviate over [0, 1]."""
    return pt.random_inclusive()


def uniform_deviate_inclusive_matrix(pt: PerThread, number_rows: int, number_columns: int) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, True, pt.random_inclusive)


def uniform_deviate_exclusive(pt: PerThread) -> float:
    """Uniform deviate over (0, 1)."""
    return pt.random_exclusive()


def uniform_deviate_exclusive_matrix(pt: PerThread, number_rows: int, number_columns: int) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, True, pt.random_exclusive)


# Continuous distributions ----------------------------------------------------------

def normal_deviate(pt: PerThread, mean: float = 0.0, sigma: float = 1.0) -> float:
    """Draw from the normal distribution.

    Parameters
    ----------
    pt : PerThread
        Random source
    mean : float
        Mean
    sigma : float
        Standard deviation, ``> 0``

    Returns
    -------
    float
        The deviate, or NaN for an invalid ``sigma``
    """
    if not valid_normal_parameters(sigma):
        return NaN
    return pt.random_normal(mean, sigma)


def normal_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                          mean: float = 0.0, sigma: float = 1.0) -> MatrixReal:
    """Matrix of independent normal deviates; empty for an invalid ``sigma``."""
    return _matrix(MatrixReal, number_rows, number_columns, valid_normal_parameters(sigma),
                   lambda: pt.random_normal(mean, sigma))


def log_normal_deviate(pt: PerThread, mean: float = 0.0, sigma: float = 1.0) -> float:
    if not valid_normal_parameters(sigma):
        return NaN
    return pt.random_log_normal(mean, sigma)


def log_normal_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                              mean: float = 0.0, sigma: float = 1.0) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_normal_parameters(sigma),
                   lambda: pt.random_log_normal(mean, sigma))


def gamma_deviate(pt: PerThread, k: float, s: float) -> float:
    """Draw from the gamma distribution with shape ``k`` and scale ``s``."""
    if not valid_gamma_parameters(k, s):
        return NaN
    return pt.random_gamma(k, s)


def gamma_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                         k: float, s: float) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_gamma_parameters(k, s),
                   lambda: pt.random_gamma(k, s))


def weibull_deviate(pt: PerThread, shape: float, scale: float, delay: float = 0.0) -> float:
    if not valid_weibull_parameters(shape, scale):
        return NaN
    return pt.random_weibull(scale, shape, delay)


def weibull_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                           shape: float, scale: float, delay: float = 0.0) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_weibull_parameters(shape, scale),
                   lambda: pt.random_weibull(scale, shape, delay))


def exponential_deviate(pt: PerThread, rate: float) -> float:
    if not valid_rate(rate):
        return NaN
    return pt.random_exponential(rate)


def exponential_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                               rate: float) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_rate(rate),
                   lambda: pt.random_exponential(rate))


def rayleigh_deviate(pt: PerThread, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    return pt.random_rayleigh(scale)


def rayleigh_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                            scale: float) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_scale(scale),
                   lambda: pt.random_rayleigh(scale))


def chi_squared_deviate(pt: PerThread, k: float) -> float:
    if not valid_chi_squared_parameters(k):
        return NaN
    return pt.random_chi_squared(k)


def chi_squared_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                               k: float) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_chi_squared_parameters(k),
                   lambda: pt.random_chi_squared(k))


def cauchy_lorentz_deviate(pt: PerThread, location: float, scale: float) -> float:
    if not valid_scale(scale):
        return NaN
    return pt.random_cauchy_lorentz(location, scale)


def cauchy_lorentz_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                                  location: float, scale: float) -> MatrixReal:
    return _matrix(MatrixReal, number_rows, number_columns, valid_scale(scale),
                   lambda: pt.random_cauchy_lorentz(location, scale))


# Discrete distributions ------------------------------------------------------------

def poisson_deviate(pt: PerThread, rate: float) -> int:
    """Draw a Poisson count; -1 for an invalid ``rate``."""
    if not valid_rate(rate):
        return INVALID_INTEGER_DEVIATE
    return pt.random_poisson(rate)


def poisson_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                           rate: float) -> MatrixInteger:
    return _matrix(MatrixInteger, number_rows, number_columns, valid_rate(rate),
                   lambda: pt.random_poisson(rate))


def binomial_deviate(pt: PerThread, n: int, p: float) -> int:
    """Draw the number of successes in ``n`` trials; -1 for invalid parameters."""
    if not valid_binomial_parameters(n, p):
        return INVALID_INTEGER_DEVIATE
    return pt.random_binomial(n, p)


def binomial_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                            n: int, p: float) -> MatrixInteger:
    return _matrix(MatrixInteger, number_rows, number_columns, valid_binomial_parameters(n, p),
                   lambda: pt.random_binomial(n, p))


def geometric_deviate(pt: PerThread, p: float) -> int:
    """Draw the trial of the first success; -1 for an invalid ``p``."""
    if not valid_geometric_parameters(p):
        return INVALID_INTEGER_DEVIATE
    return pt.random_geometric(p)


def geometric_deviate_matrix(pt: PerThread, number_rows: int, number_columns: int,
                             p: float) -> MatrixInteger:
    return _matrix(MatrixInteger, number_rows, number_columns, valid_geometric_parameters(p),
                   lambda: pt.random_geometric(p))
