"""
Numerical kernels for model_math.

The modules in this package hold the typed kernels: elementary arithmetic,
the gamma family, incomplete gamma, combinatorics, the error functions,
Lambert W, Riemann zeta, probability distributions and random deviates.
:mod:`.aggregation` holds the variadic reducers that walk containers.
Kernel names carry the operand types they accept; the polymorphic entry
points live in :mod:`model_math.core.dispatch`.
"""

from . import aggregation, deviates, distributions
from .elementary import (
    pow_integer,
    pow_real_integer,
    pow_real,
    pow_complex,
    sqrt_real,
    sqrt_complex,
    nroot_real,
    nroot_complex,
    abs_complex,
    floor_real,
    ceil_real,
    nint_real,
    ln_real,
    ln_complex,
    log_real,
    log_complex,
    is_nan,
    lower_complex_to_real,
)
from .gamma import (
    factorial_integer,
    factorial_real,
    ln_factorial_integer,
    ln_factorial_real,
    gamma_integer,
    gamma_real,
    gamma_complex,
    ln_gamma_integer,
    ln_gamma_real,
    ln_gamma_complex,
    beta_real,
    beta_complex,
)
from .incomplete_gamma import (
    lower_gamma_real,
    lower_gamma_complex,
    upper_gamma_real,
    upper_gamma_complex,
    normalized_lower_gamma_real,
    normalized_lower_gamma_complex,
    normalized_upper_gamma_real,
    normalized_upper_gamma_complex,
    inverse_lower_gamma,
)
from .combinatorics import (
    binomial_real,
    unsigned_stirling1_integer,
    unsigned_stirling1_real,
    stirling2_integer,
    stirling2_real,
)
from .error_function import erf_real, erf_complex, erfc_real, erfc_complex, erf_inv
from .lambert_w import lambert_w
from .zeta import riemann_zeta_real, riemann_zeta_complex

__all__ = [
    # Submodules
    "aggregation",
    "deviates",
    "distributions",
    # Elementary
    "pow_integer",
    "pow_real_integer",
    "pow_real",
    "pow_complex",
    "sqrt_real",
    "sqrt_complex",
    "nroot_real",
    "nroot_complex",
    "abs_complex",
    "floor_real",
    "ceil_real",
    "nint_real",
    "ln_real",
    "ln_complex",
    "log_real",
    "log_complex",
    "is_nan",
    "lower_complex_to_real",
    # Gamma family
    "factorial_integer",
    "factorial_real",
    "ln_factorial_integer",
    "ln_factorial_real",
    "gamma_integer",
    "gamma_real",
    "gamma_complex",
    "ln_gamma_integer",
    "ln_gamma_real",
    "ln_gamma_complex",
    "beta_real",
    "beta_complex",
    # Incomplete gamma
    "lower_gamma_real",
    "lower_gamma_complex",
    "upper_gamma_real",
    "upper_gamma_complex",
    "normalized_lower_gamma_real",
    "normalized_lower_gamma_complex",
    "normalized_upper_gamma_real",
    "normalized_upper_gamma_complex",
    "inverse_lower_gamma",
    # Combinatorics
    "binomial_real",
    "unsigned_stirling1_integer",
    "unsigned_stirling1_real",
    "stirling2_integer",
    "stirling2_real",
    # Error function
    "erf_real",
    "erf_complex",
    "erfc_real",
    "erfc_complex",
    "erf_inv",
    # Lambert W and zeta
    "lambert_w",
    "riemann_zeta_real",
    "riemann_zeta_complex",
]
