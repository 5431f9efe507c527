"""
Polymorphic public functions.

This module exposes the user-facing functions. Each one unwraps Variants,
promotes its arguments on the scalar lattice and dispatches once to the
typed kernel in :mod:`model_math.core.math`. The variadic reducers accept
any mixture of scalars and containers.
"""

from .promotion import scalar_value, promote, promote_arguments, scalar_arguments, to_real, to_integer
from .functions import (
    pow,
    sqrt,
    nroot,
    abs,
    floor,
    ceil,
    nint,
    ln,
    log,
    is_nan,
    factorial,
    ln_factorial,
    gamma,
    ln_gamma,
    beta,
    lower_gamma,
    upper_gamma,
    normalized_lower_gamma,
    normalized_upper_gamma,
    inverse_lower_gamma,
    erf,
    erfc,
    erf_inv,
    lambert_w,
    riemann_zeta,
    reimann_zeta,
    binomial,
    unsigned_stirling1,
    stirling2,
    normal_pdf,
    normal_cdf,
    normal_quantile,
    log_normal_pdf,
    log_normal_cdf,
    log_normal_quantile,
    gamma_pdf,
    gamma_cdf,
    gamma_quantile,
    weibull_pdf,
    weibull_cdf,
    weibull_quantile,
    exponential_pdf,
    exponential_cdf,
    exponential_quantile,
    rayleigh_pdf,
    rayleigh_cdf,
    rayleigh_quantile,
    chi_squared_pdf,
    chi_squared_cdf,
    chi_squared_quantile,
    poisson_pmf,
    poisson_cdf,
    binomial_pmf,
    binomial_cdf,
    geometric_pmf,
    geometric_cdf,
    cauchy_lorentz_pdf,
    cauchy_lorentz_cdf,
    cauchy_lorentz_quantile,
    random_integer64,
    random_integer32,
    trng32,
    trng64,
    trng_u,
    uniform_deviate_inclusive,
    uniform_deviate_exclusive,
    random_integer64_matrix,
    random_integer32_matrix,
    uniform_deviate_inclusive_matrix,
    uniform_deviate_exclusive_matrix,
    normal_deviate,
    normal_deviate_matrix,
    log_normal_deviate,
    log_normal_deviate_matrix,
    gamma_deviate,
    gamma_deviate_matrix,
    weibull_deviate,
    weibull_deviate_matrix,
    exponential_deviate,
    exponential_deviate_matrix,
    rayleigh_deviate,
    rayleigh_deviate_matrix,
    chi_squared_deviate,
    chi_squared_deviate_matrix,
    cauchy_lorentz_deviate,
    cauchy_lorentz_deviate_matrix,
    poisson_deviate,
    poisson_deviate_matrix,
    binomial_deviate,
    binomial_deviate_matrix,
    geometric_deviate,
    geometric_deviate_matrix,
    real_function,
)
from ..math.aggregation import (
    count,
    sum,
    mean,
    min,
    max,
    variance,
    std_dev,
    sample_std_dev,
    sample_skew,
    excess_kurtosis,
    median,
    mode,
    histogram,
    sort,
    sort_descending,
)

__all__ = [
    # Promotion
    "scalar_value",
    "promote",
    "promote_arguments",
    "scalar_arguments",
    "to_real",
    "to_integer",
    # Functions
    "pow",
    "sqrt",
    "nroot",
    "abs",
    "floor",
    "ceil",
    "nint",
    "ln",
    "log",
    "is_nan",
    "factorial",
    "ln_factorial",
    "gamma",
    "ln_gamma",
    "beta",
    "lower_gamma",
    "upper_gamma",
    "normalized_lower_gamma",
    "normalized_upper_gamma",
    "inverse_lower_gamma",
    "erf",
    "erfc",
    "erf_inv",
    "lambert_w",
    "riemann_zeta",
    "reimann_zeta",
    "binomial",
    "unsigned_stirling1",
    "stirling2",
    "normal_pdf",
    "normal_cdf",
    "normal_quantile",
    "log_normal_pdf",
    "log_normal_cdf",
    "log_normal_quantile",
    "gamma_pdf",
    "gamma_cdf",
    "gamma_quantile",
    "weibull_pdf",
    "weibull_cdf",
    "weibull_quantile",
    "exponential_pdf",
    "exponential_cdf",
    "exponential_quantile",
    "rayleigh_pdf",
    "rayleigh_cdf",
    "rayleigh_quantile",
    "chi_squared_pdf",
    "chi_squared_cdf",
    "chi_squared_quantile",
    "poisson_pmf",
    "poisson_cdf",
    "binomial_pmf",
    "binomial_cdf",
    "geometric_pmf",
    "geometric_cdf",
    "cauchy_lorentz_pdf",
    "cauchy_lorentz_cdf",
    "cauchy_lorentz_quantile",
    "random_integer64",
    "random_integer32",
    "trng32",
    "trng64",
    "trng_u",
    "uniform_deviate_inclusive",
    "uniform_deviate_exclusive",
    "random_integer64_matrix",
    "random_integer32_matrix",
    "uniform_deviate_inclusive_matrix",
    "uniform_deviate_exclusive_matrix",
    "normal_deviate",
    "normal_deviate_matrix",
    "log_normal_deviate",
    "log_normal_deviate_matrix",
    "gamma_deviate",
    "gamma_deviate_matrix",
    "weibull_deviate",
    "weibull_deviate_matrix",
    "exponential_deviate",
    "exponential_deviate_matrix",
    "rayleigh_deviate",
    "rayleigh_deviate_matrix",
    "chi_squared_deviate",
    "chi_squared_deviate_matrix",
    "cauchy_lorentz_deviate",
    "cauchy_lorentz_deviate_matrix",
    "poisson_deviate",
    "poisson_deviate_matrix",
    "binomial_deviate",
    "binomial_deviate_matrix",
    "geometric_deviate",
    "geometric_deviate_matrix",
    "real_function",
    # Aggregation
    "count",
    "sum",
    "mean",
    "min",
    "max",
    "variance",
    "std_dev",
    "sample_std_dev",
    "sample_skew",
    "excess_kurtosis",
    "median",
    "mode",
    "histogram",
    "sort",
    "sort_descending",
]
