"""
Polymorphic entry points.

Each function accepts Python or numpy scalars and :class:`Variant` values,
promotes its arguments to the join of their types and calls the matching
typed kernel. When the join has no kernel of its own the next wider kernel
is used (an Integer argument to ``erf`` runs the Real kernel). Functions
that are only defined on the real line lower Complex arguments with a zero
imaginary part and report a type conversion otherwise.

Arguments without a scalar form (None, Set, Tuple, matrices) are reported
as a failed conversion and the function returns NaN.
"""

import builtins
import inspect
import math
import warnings
from functools import wraps
from typing import Any, Callable, Dict, Iterable, Optional

from ..base.constants import NaN
from ..math import deviates, distributions
from ..math.combinatorics import (
    binomial_real,
    stirling2_integer,
    stirling2_real,
    unsigned_stirling1_integer,
    unsigned_stirling1_real,
)
from ..math.elementary import (
    NAN_COMPLEX,
    abs_complex,
    ceil_real,
    floor_real,
    is_nan as is_nan_scalar,
    ln_complex,
    ln_real,
    log_complex,
    log_real,
    lower_complex_to_real,
    nint_real,
    nroot_complex,
    nroot_real,
    pow_complex,
    pow_integer,
    pow_real,
    pow_real_integer,
    sqrt_complex,
    sqrt_real,
)
from ..math.error_function import erf_complex, erf_inv as erf_inv_real, erf_real, erfc_complex, erfc_real
from ..math.gamma import (
    beta_complex,
    beta_real,
    factorial_integer,
    factorial_real,
    gamma_complex,
    gamma_integer,
    gamma_real,
    ln_factorial_integer,
    ln_factorial_real,
    ln_gamma_complex,
    ln_gamma_integer,
    ln_gamma_real,
)
from ..math.incomplete_gamma import (
    inverse_lower_gamma as inverse_lower_gamma_real,
    lower_gamma_complex,
    lower_gamma_real,
    normalized_lower_gamma_complex,
    normalized_lower_gamma_real,
    normalized_upper_gamma_complex,
    normalized_upper_gamma_real,
    upper_gamma_complex,
    upper_gamma_real,
)
from ..math.lambert_w import lambert_w as lambert_w_kernel
from ..math.zeta import riemann_zeta_complex, riemann_zeta_real
from ..values.matrix import MatrixInteger, MatrixReal
from ..values.per_thread import PerThread
from ..values.value_type import ValueType, value_type_of
from .promotion import promote, promote_arguments, scalar_arguments, scalar_value, to_integer, to_real

Kernels = Dict[ValueType, Callable[..., Any]]

_LATTICE = (ValueType.BOOLEAN, ValueType.INTEGER, ValueType.REAL, ValueType.COMPLEX)


def _call(kernels: Kernels, *arguments: Any) -> Any:
    promoted = promote_arguments(*arguments)
    if promoted is None:
        return NAN_COMPLEX

    target, values = promoted
    for candidate in _LATTICE[_LATTICE.index(target):]:
        kernel = kernels.get(candidate)
        if kernel is not None:
            return kernel(*(promote(v, candidate) for v in values))
    raise TypeError(f"No kernel accepts {target.name} arguments")


def _lowered(kernel: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap a real kernel so it accepts complex values with zero imaginary part."""
    def lowered(*values: complex) -> Any:
        return kernel(*(lower_complex_to_real(v) for v in values))
    return lowered


# Elementary -------------------------------------------------------------------------

def pow(base: Any, exponent: Any) -> Any:
    """Raise ``base`` to ``exponent``.

    Integer operands give a saturated Integer. A Real base with an Integer
    exponent gives a Real; other Real and Complex combinations give a
    Complex.

    Examples
    --------
    >>> pow(2, 10)
    1024
    >>> pow(2.0, 3)
    8.0
    """
    scalars = scalar_arguments(base, exponent)
    if scalars is None:
        return NAN_COMPLEX

    base, exponent = scalars
    base_type = value_type_of(base)
    exponent_type = value_type_of(exponent)
    if base_type.value <= ValueType.INTEGER.value and exponent_type.value <= ValueType.INTEGER.value:
        return pow_integer(int(base), int(exponent))
    if base_type is ValueType.REAL and exponent_type.value <= ValueType.INTEGER.value:
        return pow_real_integer(base, int(exponent))
    if base_type.value <= ValueType.REAL.value and exponent_type is ValueType.REAL:
        return pow_real(float(base), exponent)
    return pow_complex(complex(base), complex(exponent))


def sqrt(value: Any) -> complex:
    """Square root; always Complex."""
    return _call({ValueType.REAL: sqrt_real, ValueType.COMPLEX: sqrt_complex}, value)


def nroot(value: Any, root: Any) -> complex:
    """``value ** (1 / root)``."""
    return _call({ValueType.REAL: nroot_real, ValueType.COMPLEX: nroot_complex}, value, root)


def abs(value: Any) -> Any:
    """Magnitude; Integer for Boolean and Integer input, Real otherwise."""
    return _call({
        ValueType.INTEGER: builtins.abs,
        ValueType.REAL: math.fabs,
        ValueType.COMPLEX: abs_complex,
    }, value)


def floor(value: Any) -> Any:
    return _call({
        ValueType.INTEGER: int,
        ValueType.REAL: floor_real,
        ValueType.COMPLEX: _lowered(floor_real),
    }, value)


def ceil(value: Any) -> Any:
    return _call({
        ValueType.INTEGER: int,
        ValueType.REAL: ceil_real,
        ValueType.COMPLEX: _lowered(ceil_real),
    }, value)


def nint(value: Any) -> Any:
    """Round to the nearest integer, ties to even."""
    return _call({
        ValueType.INTEGER: int,
        ValueType.REAL: nint_real,
        ValueType.COMPLEX: _lowered(nint_real),
    }, value)


def ln(value: Any) -> complex:
    """Natural logarithm; Complex for negative reals."""
    return _call({ValueType.REAL: ln_real, ValueType.COMPLEX: ln_complex}, value)


def log(base: Any, value: Any) -> complex:
    """Logarithm of ``value`` in ``base``."""
    return _call({ValueType.REAL: log_real, ValueType.COMPLEX: log_complex}, base, value)


def is_nan(value: Any) -> bool:
    """Check for NaN; values without a scalar form are never NaN."""
    scalar = scalar_value(value)
    return scalar is not None and is_nan_scalar(scalar)


# Gamma family -----------------------------------------------------------------------

def factorial(value: Any) -> float:
    """``value!`` for whole, non-negative values; NaN for anything else.

    Examples
    --------
    >>> factorial(10)
    3628800.0
    """
    return _call({
        ValueType.INTEGER: factorial_integer,
        ValueType.REAL: factorial_real,
        ValueType.COMPLEX: _lowered(factorial_real),
    }, value)


def ln_factorial(value: Any) -> float:
    return _call({
        ValueType.INTEGER: ln_factorial_integer,
        ValueType.REAL: ln_factorial_real,
        ValueType.COMPLEX: _lowered(ln_factorial_real),
    }, value)


def gamma(value: Any) -> Any:
    """Gamma function; Real for real input, Complex for complex input."""
    return _call({
        ValueType.INTEGER: gamma_integer,
        ValueType.REAL: gamma_real,
        ValueType.COMPLEX: gamma_complex,
    }, value)


def ln_gamma(value: Any) -> Any:
    return _call({
        ValueType.INTEGER: ln_gamma_integer,
        ValueType.REAL: ln_gamma_real,
        ValueType.COMPLEX: ln_gamma_complex,
    }, value)


def beta(x: Any, y: Any) -> Any:
    return _call({ValueType.REAL: beta_real, ValueType.COMPLEX: beta_complex}, x, y)


def lower_gamma(s: Any, x: Any) -> Any:
    """Lower incomplete gamma function."""
    return _call({ValueType.REAL: lower_gamma_real, ValueType.COMPLEX: lower_gamma_complex}, s, x)


def upper_gamma(s: Any, x: Any) -> Any:
    """Upper incomplete gamma function."""
    return _call({ValueType.REAL: upper_gamma_real, ValueType.COMPLEX: upper_gamma_complex}, s, x)


def normalized_lower_gamma(s: Any, x: Any) -> Any:
    """Regularized lower incomplete gamma function P(s, x)."""
    return _call({
        ValueType.REAL: normalized_lower_gamma_real,
        ValueType.COMPLEX: normalized_lower_gamma_complex,
    }, s, x)


def normalized_upper_gamma(s: Any, x: Any) -> Any:
    """Regularized upper incomplete gamma function Q(s, x)."""
    return _call({
        ValueType.REAL: normalized_upper_gamma_real,
        ValueType.COMPLEX: normalized_upper_gamma_complex,
    }, s, x)


def inverse_lower_gamma(s: Any, y: Any) -> float:
    """Return z with ``lower_gamma(s, z) == y``."""
    return _call({
        ValueType.REAL: inverse_lower_gamma_real,
        ValueType.COMPLEX: _lowered(inverse_lower_gamma_real),
    }, s, y)


# Error function ---------------------------------------------------------------------

def erf(value: Any) -> Any:
    return _call({ValueType.REAL: erf_real, ValueType.COMPLEX: erf_complex}, value)


def erfc(value: Any) -> Any:
    return _call({ValueType.REAL: erfc_real, ValueType.COMPLEX: erfc_complex}, value)


def erf_inv(value: Any) -> float:
    return _call({ValueType.REAL: erf_inv_real, ValueType.COMPLEX: _lowered(erf_inv_real)}, value)


# Lambert W and zeta -----------------------------------------------------------------

def lambert_w(k: Any, z: Any, epsilon: Optional[float] = None) -> complex:
    """Branch ``k`` of the Lambert W function.

    Parameters
    ----------
    k : int or Variant
        Branch index; must convert to an Integer
    z : scalar or Variant
        Argument
    epsilon : float, optional
        Relative tolerance; defaults to the configured value

    Returns
    -------
    complex
        W_k(z), or NaN when an argument does not convert
    """
    branch = to_integer(k)
    if branch is None:
        return NAN_COMPLEX
    scalars = scalar_arguments(z)
    if scalars is None:
        return NAN_COMPLEX
    return lambert_w_kernel(branch, complex(scalars[0]), epsilon)


def riemann_zeta(s: Any, pt: Optional[PerThread] = None) -> Any:
    """Riemann zeta function; ``pt`` supplies the scratch buffer for complex arguments."""
    return _call({
        ValueType.REAL: riemann_zeta_real,
        ValueType.COMPLEX: lambda value: riemann_zeta_complex(value, pt),
    }, s)


def reimann_zeta(s: Any, pt: Optional[PerThread] = None) -> Any:
    """Deprecated spelling of :func:`riemann_zeta`."""
    warnings.warn(
        "reimann_zeta is deprecated, use riemann_zeta instead",
        DeprecationWarning,
        stacklevel=2,
    )
    return riemann_zeta(s, pt)


# Combinatorics ----------------------------------------------------------------------

def binomial(n: Any, k: Any) -> float:
    """Binomial coefficient ``n choose k``.

    Examples
    --------
    >>> binomial(10, 3)
    120.0
    """
    return _call({ValueType.REAL: binomial_real, ValueType.COMPLEX: _lowered(binomial_real)}, n, k)


def unsigned_stirling1(n: Any, k: Any) -> Any:
    """Unsigned Stirling number of the first kind."""
    return _call({
        ValueType.INTEGER: unsigned_stirling1_integer,
        ValueType.REAL: unsigned_stirling1_real,
        ValueType.COMPLEX: _lowered(unsigned_stirling1_real),
    }, n, k)


def stirling2(n: Any, k: Any) -> float:
    """Stirling number of the second kind."""
    return _call({
        ValueType.INTEGER: stirling2_integer,
        ValueType.REAL: stirling2_real,
        ValueType.COMPLEX: _lowered(stirling2_real),
    }, n, k)


# Distributions and deviates -------------------------------------------------------------

_SHAPE_PARAMETERS = ("number_rows", "number_columns")


def real_function(kernel: Callable[..., Any], integer_parameters: Iterable[str] = (),
                  failure: Any = NaN) -> Callable[..., Any]:
    """Adapt a kernel with Real parameters to accept Variants.

    Parameters
    ----------
    kernel : callable
        Kernel to wrap; a leading ``pt`` parameter is passed through
    integer_parameters : iterable of str
        Names of the parameters that must convert to an Integer
    failure : Any
        Returned when an argument does not convert; a class is
        instantiated to produce the value

    Returns
    -------
    callable
        The wrapped kernel
    """
    signature = inspect.signature(kernel)
    integers = set(integer_parameters) | set(_SHAPE_PARAMETERS)

    @wraps(kernel)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()

        for name, argument in bound.arguments.items():
            if name == "pt":
                continue
            value = to_integer(argument) if name in integers else to_real(argument)
            if value is None:
                return failure() if isinstance(failure, type) else failure
            bound.arguments[name] = value
        return kernel(*bound.args, **bound.kwargs)

    return wrapper


normal_pdf = real_function(distributions.normal_pdf)
normal_cdf = real_function(distributions.normal_cdf)
normal_quantile = real_function(distributions.normal_quantile)
log_normal_pdf = real_function(distributions.log_normal_pdf)
log_normal_cdf = real_function(distributions.log_normal_cdf)
log_normal_quantile = real_function(distributions.log_normal_quantile)
gamma_pdf = real_function(distributions.gamma_pdf)
gamma_cdf = real_function(distributions.gamma_cdf)
gamma_quantile = real_function(distributions.gamma_quantile)
weibull_pdf = real_function(distributions.weibull_pdf)
weibull_cdf = real_function(distributions.weibull_cdf)
weibull_quantile = real_function(distributions.weibull_quantile)
exponential_pdf = real_function(distributions.exponential_pdf)
exponential_cdf = real_function(distributions.exponential_cdf)
exponential_quantile = real_function(distributions.exponential_quantile)
rayleigh_pdf = real_function(distributions.rayleigh_pdf)
rayleigh_cdf = real_function(distributions.rayleigh_cdf)
rayleigh_quantile = real_function(distributions.rayleigh_quantile)
chi_squared_pdf = real_function(distributions.chi_squared_pdf)
chi_squared_cdf = real_function(distributions.chi_squared_cdf)
chi_squared_quantile = real_function(distributions.chi_squared_quantile)
poisson_pmf = real_function(distributions.poisson_pmf, ("k",))
poisson_cdf = real_function(distributions.poisson_cdf, ("k",))
binomial_pmf = real_function(distributions.binomial_pmf, ("k", "n"))
binomial_cdf = real_function(distributions.binomial_cdf, ("k", "n"))
geometric_pmf = real_function(distributions.geometric_pmf, ("k",))
geometric_cdf = real_function(distributions.geometric_cdf, ("k",))
cauchy_lorentz_pdf = real_function(distributions.cauchy_lorentz_pdf)
cauchy_lorentz_cdf = real_function(distributions.cauchy_lorentz_cdf)
cauchy_lorentz_quantile = real_function(distributions.cauchy_lorentz_quantile)

random_integer64 = deviates.random_integer64
random_integer32 = deviates.random_integer32
trng32 = deviates.trng32
trng64 = deviates.trng64
trng_u = deviates.trng_u
uniform_deviate_inclusive = deviates.uniform_deviate_inclusive
uniform_deviate_exclusive = deviates.uniform_deviate_exclusive
random_integer64_matrix = real_function(deviates.random_integer64_matrix, failure=MatrixInteger)
random_integer32_matrix = real_function(deviates.random_integer32_matrix, failure=MatrixInteger)
uniform_deviate_inclusive_matrix = real_function(deviates.uniform_deviate_inclusive_matrix, failure=MatrixReal)
uniform_deviate_exclusive_matrix = real_function(deviates.uniform_deviate_exclusive_matrix, failure=MatrixReal)

normal_deviate = real_function(deviates.normal_deviate)
normal_deviate_matrix = real_function(deviates.normal_deviate_matrix, failure=MatrixReal)
log_normal_deviate = real_function(deviates.log_normal_deviate)
log_normal_deviate_matrix = real_function(deviates.log_normal_deviate_matrix, failure=MatrixReal)
gamma_deviate = real_function(deviates.gamma_deviate)
gamma_deviate_matrix = real_function(deviates.gamma_deviate_matrix, failure=MatrixReal)
weibull_deviate = real_function(deviates.weibull_deviate)
weibull_deviate_matrix = real_function(deviates.weibull_deviate_matrix, failure=MatrixReal)
exponential_deviate = real_function(deviates.exponential_deviate)
exponential_deviate_matrix = real_function(deviates.exponential_deviate_matrix, failure=MatrixReal)
rayleigh_deviate = real_function(deviates.rayleigh_deviate)
rayleigh_deviate_matrix = real_function(deviates.rayleigh_deviate_matrix, failure=MatrixReal)
chi_squared_deviate = real_function(deviates.chi_squared_deviate)
chi_squared_deviate_matrix = real_function(deviates.chi_squared_deviate_matrix, failure=MatrixReal)
cauchy_lorentz_deviate = real_function(deviates.cauchy_lorentz_deviate)
cauchy_lorentz_deviate_matrix = real_function(deviates.cauchy_lorentz_deviate_matrix, failure=MatrixReal)
poisson_deviate = real_function(deviates.poisson_deviate, failure=deviates.INVALID_INTEGER_DEVIATE)
poisson_deviate_matrix = real_function(deviates.poisson_deviate_matrix, failure=MatrixInteger)
binomial_deviate = real_function(deviates.binomial_deviate, ("n",), failure=deviates.INVALID_INTEGER_DEVIATE)
binomial_deviate_matrix = real_function(deviates.binomial_deviate_matrix, ("n",), failure=MatrixInteger)
geometric_deviate = real_function(deviates.geometric_deviate, failure=deviates.INVALID_INTEGER_DEVIATE)
geometric_deviate_matrix = real_function(deviates.geometric_deviate_matrix, failure=MatrixInteger)
