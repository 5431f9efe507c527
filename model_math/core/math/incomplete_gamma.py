"""
Incomplete gamma functions and the inverse of the lower incomplete gamma.

Two primitives cover the whole family:

* a power series for the regularized lower function ``P(s, x)``, used when
  ``s >= alpha*(x)``, accumulated directly for ``s < 70`` and relative to
  its leading term, in the log domain, above;
* the Jones/Thron continued fraction for the upper function ``Gamma(s, x)``
  in the form given by Gautschi (ACM TOMS 5(4), 1979), used otherwise.

The continued fraction converges slowly for ``x < 0.25``; there the log
domain series is used on both sides of ``alpha*(x)``.

Lower, upper, regularized lower (P) and regularized upper (Q) are derived
from whichever primitive applies.
"""

import logging
import math
from typing import Tuple

import numpy as np

from ..base.constants import epsilon, infinity, NaN
from ..base.error_sink import trigger_can_not_converge, trigger_invalid_parameter
from .elementary import pow_complex
from .gamma import gamma_real, gamma_complex, ln_gamma_real, ln_gamma_complex

logger = logging.getLogger(__name__)

LOG_DOMAIN_THRESHOLD = 70.0
SMALL_ARGUMENT_THRESHOLD = 0.25
MAXIMUM_LOWER_GAMMA_ITERATIONS = 100
MAXIMUM_UPPER_GAMMA_ITERATIONS = 1000
MAXIMUM_INVERSE_LOWER_GAMMA_ITERATIONS = 1000
INVERSE_LOWER_GAMMA_TOLERANCE = 10.0 * epsilon

_LOG_HALF = math.log(0.5)


@np.errstate(all="ignore")
def alphaz(x: float) -> float:
    """Boundary between the series and continued fraction regimes.

    ``x + 0.25`` for ``x >= 0.25`` and ``ln(0.5) / ln(x)`` below.
    """
    if x >= 0.25:
        return x + 0.25
    return float(_LOG_HALF / np.log(np.float64(x)))


def _series_iteration_cap(s: float) -> int:
    # The log-domain series serves large s, where the term ratio x / (s + k)
    # stays close to one for about sqrt(s) terms.
    if s < LOG_DOMAIN_THRESHOLD:
        return MAXIMUM_LOWER_GAMMA_ITERATIONS
    return MAXIMUM_LOWER_GAMMA_ITERATIONS + int(10.0 * math.sqrt(s))


# Real primitives ---------------------------------------------------------------

@np.errstate(all="ignore")
def _regularized_lower_series(s: float, x: float, gamma_s: float) -> float:
    cap = MAXIMUM_LOWER_GAMMA_ITERATIONS
    total = np.float64(0.0)
    xk = np.float64(1.0)
    spk = np.float64(s)
    gsk1 = spk * gamma_s

    for _ in range(cap):
        last = total
        total = total + xk / gsk1
        if total == last or np.isnan(total):
            break
        xk = xk * x
        spk = spk + 1.0
        gsk1 = spk * gsk1
    else:
        trigger_can_not_converge("lower_gamma_series", cap)
        return NaN

    return float(np.power(np.float64(x), s) * np.exp(-np.float64(x)) * total)


@np.errstate(all="ignore")
def _ln_regularized_lower_series(s: float, x: float) -> float:
    """Logarithm of ``P(s, x)`` from the power series.

    Terms are accumulated relative to the leading term
    ``x**s e**-x / Gamma(s + 1)`` so that nothing underflows for large ``s``.
    """
    cap = _series_iteration_cap(s)
    total = np.float64(1.0)
    term = np.float64(1.0)
    spk = np.float64(s)

    for _ in range(cap):
        spk = spk + 1.0
        term = term * x / spk
        last = total
        total = total + term
        if total == last or np.isnan(total):
            break
    else:
        trigger_can_not_converge("lower_gamma_log_series", cap)
        return NaN

    return float(s * np.log(np.float64(x)) - x - ln_gamma_real(s + 1.0) + np.log(total))


@np.errstate(all="ignore")
def _upper_continued_fraction(s, z) -> Tuple[object, object]:
    """Evaluate the continued fraction for the upper incomplete gamma.

    Returns ``(total, z + 1 - s)`` so that
    ``Gamma(s, z) = total / (z + 1 - s) * z**s * exp(-z)``. Works for both
    numpy real and complex scalars. The sum stops once a term no longer
    moves it by more than a rounding error; ``total`` is NaN when the
    iteration cap is exhausted.
    """
    u = 0.0
    zms = z - s
    zmsp1 = zms + 1.0
    q = (zms - 1.0) * zmsp1
    v = 4.0 * zmsp1
    w = 1.0 - s
    p = 0.0
    t = 1.0

    total = 1.0 + 0.0 * zmsp1
    for _ in range(MAXIMUM_UPPER_GAMMA_ITERATIONS):
        uk = u + w
        qk = q + v
        tau = uk * (1.0 + p)

        p = tau / (qk - tau)
        t = p * t

        last = total
        total = total + t
        if total == last or abs(t) <= epsilon * abs(total):
            return total, zmsp1

        u = uk
        q = qk
        v = v + 8.0
        w = w + 2.0

    trigger_can_not_converge("upper_gamma_continued_fraction", MAXIMUM_UPPER_GAMMA_ITERATIONS)
    return total * NaN, zmsp1


def _check_real_arguments(s: float, x: float) -> bool:
    if math.isnan(s) or math.isnan(x):
        return False
    if s <= 0:
        trigger_invalid_parameter("s", s)
        return False
    if x < 0:
        trigger_invalid_parameter("x", x)
        return False
    return True


@np.errstate(all="ignore")
def _upper_real(s: float, x: float, regularized: bool) -> float:
    total, zmsp1 = _upper_continued_fraction(np.float64(s), np.float64(x))
    if regularized:
        log_prefactor = s * np.log(np.float64(x)) - x - ln_gamma_real(s)
    else:
        log_prefactor = s * np.log(np.float64(x)) - x
    return float(total / zmsp1 * np.exp(log_prefactor))


def _regime(s: float, x: float) -> str:
    """Pick ``"series"``, ``"log_series"`` or ``"fraction"`` for real arguments."""
    if s >= alphaz(x):
        if s < LOG_DOMAIN_THRESHOLD or x == 0:
            return "series"
        return "log_series"
    if x < SMALL_ARGUMENT_THRESHOLD:
        return "log_series"
    return "fraction"


def normalized_lower_gamma_real(s: float, x: float) -> float:
    """Regularized lower incomplete gamma ``P(s, x) = gamma(s, x) / Gamma(s)``.

    Parameters
    ----------
    s : float
        Shape, must be positive
    x : float
        Upper integration limit, must be non-negative

    Returns
    -------
    float
        P(s, x) in [0, 1], or NaN for invalid arguments
    """
    if not _check_real_arguments(s, x):
        return NaN
    if math.isinf(x):
        return 1.0

    regime = _regime(s, x)
    if regime == "series":
        return _regularized_lower_series(s, x, gamma_real(s))
    if regime == "log_series":
        return math.exp(_ln_regularized_lower_series(s, x))
    return 1.0 - _upper_real(s, x, regularized=True)


def normalized_upper_gamma_real(s: float, x: float) -> float:
    """Regularized upper incomplete gamma ``Q(s, x) = 1 - P(s, x)``."""
    if not _check_real_arguments(s, x):
        return NaN
    if math.isinf(x):
        return 0.0

    regime = _regime(s, x)
    if regime == "series":
        return 1.0 - _regularized_lower_series(s, x, gamma_real(s))
    if regime == "log_series":
        return -math.expm1(_ln_regularized_lower_series(s, x))
    return _upper_real(s, x, regularized=True)


def lower_gamma_real(s: float, x: float) -> float:
    """Lower incomplete gamma ``gamma(s, x) = int_0^x t^(s-1) e^-t dt``."""
    if not _check_real_arguments(s, x):
        return NaN
    if math.isinf(x):
        return gamma_real(s)

    regime = _regime(s, x)
    if regime == "series":
        gamma_s = gamma_real(s)
        return _regularized_lower_series(s, x, gamma_s) * gamma_s
    if regime == "log_series":
        ln_p = _ln_regularized_lower_series(s, x)
        gamma_s = gamma_real(s)
        if math.isfinite(gamma_s):
            return math.exp(ln_p) * gamma_s
        with np.errstate(all="ignore"):
            return float(np.exp(np.float64(ln_p + ln_gamma_real(s))))
    return gamma_real(s) - _upper_real(s, x, regularized=False)


def upper_gamma_real(s: float, x: float) -> float:
    """Upper incomplete gamma ``Gamma(s, x) = int_x^inf t^(s-1) e^-t dt``."""
    if not _check_real_arguments(s, x):
        return NaN
    if math.isinf(x):
        return 0.0

    regime = _regime(s, x)
    if regime == "series":
        gamma_s = gamma_real(s)
        return (1.0 - _regularized_lower_series(s, x, gamma_s)) * gamma_s
    if regime == "log_series":
        q = -math.expm1(_ln_regularized_lower_series(s, x))
        gamma_s = gamma_real(s)
        if math.isfinite(gamma_s):
            return q * gamma_s
        with np.errstate(all="ignore"):
            return float(np.exp(np.log(np.float64(q)) + ln_gamma_real(s)))
    return _upper_real(s, x, regularized=False)


# Complex primitives ------------------------------------------------------------

@np.errstate(all="ignore")
def _regularized_lower_series_complex(s: complex, x: complex, gamma_s: complex) -> complex:
    cap = MAXIMUM_LOWER_GAMMA_ITERATIONS
    total = np.complex128(0)
    xk = np.complex128(1)
    spk = np.complex128(s)
    gsk1 = spk * gamma_s

    for _ in range(cap):
        last = total
        total = total + xk / gsk1
        if total == last or np.isnan(total.real):
            break
        xk = xk * x
        spk = spk + 1.0
        gsk1 = spk * gsk1
    else:
        trigger_can_not_converge("lower_gamma_series", cap)
        return complex(NaN, NaN)

    return complex(np.complex128(pow_complex(x, s)) * np.exp(-np.complex128(x)) * total)


@np.errstate(all="ignore")
def _ln_regularized_lower_series_complex(s: complex, x: complex) -> complex:
    cap = _series_iteration_cap(s.real)
    total = np.complex128(1)
    term = np.complex128(1)
    spk = np.complex128(s)

    for _ in range(cap):
        spk = spk + 1.0
        term = term * x / spk
        last = total
        total = total + term
        if total == last or np.isnan(total.real):
            break
    else:
        trigger_can_not_converge("lower_gamma_log_series", cap)
        return complex(NaN, NaN)

    ln_prefactor = s * np.log(np.complex128(x)) - x - np.complex128(ln_gamma_complex(s + 1.0))
    return complex(ln_prefactor + np.log(total))


def _check_complex_arguments(s: complex, x: complex) -> bool:
    if np.isnan(s) or np.isnan(x):
        return False
    if s.real <= 0:
        trigger_invalid_parameter("s", s)
        return False
    if x.real < 0:
        trigger_invalid_parameter("x", x)
        return False
    return True


@np.errstate(all="ignore")
def _upper_complex(s: complex, x: complex) -> complex:
    total, zmsp1 = _upper_continued_fraction(np.complex128(s), np.complex128(x))
    factor = zmsp1 * np.complex128(pow_complex(x, -s)) * np.exp(np.complex128(x))
    return complex(total / factor)


def _series_applies_complex(s: complex, x: complex) -> bool:
    return s.real >= alphaz(x.real) or abs(x) < SMALL_ARGUMENT_THRESHOLD


def _lower_series_complex(s: complex, x: complex) -> Tuple[complex, complex]:
    """Return ``(P, Gamma(s))`` from the appropriate series."""
    if s.real < LOG_DOMAIN_THRESHOLD or x.real == 0:
        gamma_s = gamma_complex(s)
        return _regularized_lower_series_complex(s, x, gamma_s), gamma_s

    ln_p = _ln_regularized_lower_series_complex(s, x)
    with np.errstate(all="ignore"):
        p = complex(np.exp(np.complex128(ln_p)))
        return p, complex(np.exp(np.complex128(ln_gamma_complex(s))))


def normalized_lower_gamma_complex(s: complex, x: complex) -> complex:
    """Regularized lower incomplete gamma for complex arguments."""
    if not _check_complex_arguments(s, x):
        return complex(NaN, NaN)

    if _series_applies_complex(s, x):
        p, _ = _lower_series_complex(s, x)
        return p
    with np.errstate(all="ignore"):
        return complex(1.0 - np.complex128(_upper_complex(s, x)) / np.complex128(gamma_complex(s)))


def normalized_upper_gamma_complex(s: complex, x: complex) -> complex:
    """Regularized upper incomplete gamma for complex arguments."""
    if not _check_complex_arguments(s, x):
        return complex(NaN, NaN)

    if _series_applies_complex(s, x):
        p, _ = _lower_series_complex(s, x)
        return 1.0 - p
    with np.errstate(all="ignore"):
        return complex(np.complex128(_upper_complex(s, x)) / np.complex128(gamma_complex(s)))


def lower_gamma_complex(s: complex, x: complex) -> complex:
    """Lower incomplete gamma for complex arguments."""
    if not _check_complex_arguments(s, x):
        return complex(NaN, NaN)

    if _series_applies_complex(s, x):
        p, gamma_s = _lower_series_complex(s, x)
        return p * gamma_s
    return gamma_complex(s) - _upper_complex(s, x)


def upper_gamma_complex(s: complex, x: complex) -> complex:
    """Upper incomplete gamma for complex arguments."""
    if not _check_complex_arguments(s, x):
        return complex(NaN, NaN)

    if _series_applies_complex(s, x):
        p, gamma_s = _lower_series_complex(s, x)
        return (1.0 - p) * gamma_s
    return _upper_complex(s, x)


# Inverse -----------------------------------------------------------------------

class _Fuzz:
    """Knuth-Lewis linear congruential generator used to perturb stalled guesses."""

    def __init__(self, seed: int = 0):
        self.state = seed

    def next_fraction(self) -> float:
        value = self.state / 0xFFFFFFFF
        self.state = (1664525 * self.state + 1013904223) & 0xFFFFFFFF
        return value


def _tolerance(y: float) -> float:
    return INVERSE_LOWER_GAMMA_TOLERANCE * max(1.0, abs(y))


def _binary_search(s: float, y: float, lower_z: float, upper_z: float) -> float:
    z = 0.5 * (lower_z + upper_z)
    while upper_z - lower_z >= INVERSE_LOWER_GAMMA_TOLERANCE * upper_z:
        z = 0.5 * (lower_z + upper_z)
        if z in (lower_z, upper_z):
            break
        if lower_gamma_real(s, z) > y:
            upper_z = z
        else:
            lower_z = z
    return z


def _bracket(s: float, y: float) -> float:
    upper_z = 0.01
    while lower_gamma_real(s, upper_z) < y:
        upper_z *= 2.0
    return upper_z


@np.errstate(all="ignore")
def inverse_lower_gamma(s: float, y: float) -> float:
    """Invert the lower incomplete gamma in its second argument.

    Finds ``z`` such that ``lower_gamma(s, z) = y`` using Halley's method
    with the closed form derivatives ``z^(s-1) e^-z`` and
    ``(s-1) z^(s-2) e^-z - z^(s-1) e^-z``.

    Parameters
    ----------
    s : float
        Shape, must be positive
    y : float
        Target value in ``[0, Gamma(s)]``

    Returns
    -------
    float
        z, +inf for ``y == Gamma(s)``, NaN for invalid arguments or when
        the iteration cap is exhausted

    Notes
    -----
    Guesses that land on NaN are resolved by bracketing and bisection;
    guesses that go negative are bisected for ``s < 0.99`` and
    restarted from a smaller guess otherwise. When the error stops
    shrinking the guess is perturbed by up to 10% either way.
    """
    if math.isnan(s) or math.isnan(y):
        return NaN
    if s <= 0:
        trigger_invalid_parameter("s", s)
        return NaN
    if y < 0:
        trigger_invalid_parameter("y", y)
        return NaN
    if y == 0:
        return 0.0

    gamma_s = gamma_real(s)
    if y == gamma_s:
        return infinity
    if y > gamma_s:
        trigger_invalid_parameter("y", y)
        return NaN

    sm1 = s - 1.0
    sm2 = s - 2.0
    fuzz = _Fuzz()
    tolerance = _tolerance(y)

    z = -math.log1p(-y) if y < 1 else 1.0
    next_guess = 0.5 * z
    error = lower_gamma_real(s, z) - y
    magnitude_error = math.inf

    for _ in range(MAXIMUM_INVERSE_LOWER_GAMMA_ITERATIONS):
        emz = np.exp(-np.float64(z))
        dlg = np.power(np.float64(z), sm1) * emz
        d2lg = sm1 * np.power(np.float64(z), sm2) * emz - dlg

        step = 2.0 * error * dlg / (2.0 * dlg * dlg - error * d2lg)
        z = float(z - step)

        if math.isnan(z):
            return _binary_search(s, y, 0.0, _bracket(s, y))

        if z <= 0.0:
            if s < 0.99:
                upper_z = -math.log1p(-y) if y < 1 else _bracket(s, y)
                return _binary_search(s, y, 0.0, upper_z)
            z = next_guess
            next_guess *= 0.5
            error = lower_gamma_real(s, z) - y
            magnitude_error = math.inf
            continue

        error = lower_gamma_real(s, z) - y
        last_magnitude_error = magnitude_error
        magnitude_error = abs(error)

        if magnitude_error <= tolerance or abs(step) <= INVERSE_LOWER_GAMMA_TOLERANCE * z:
            return z

        if magnitude_error >= last_magnitude_error:
            z += 0.2 * z * (fuzz.next_fraction() - 0.5)
            error = lower_gamma_real(s, z) - y

    logger.debug(f"inverse_lower_gamma stalled for s={s}, y={y}, last z={z}")
    trigger_can_not_converge("inverse_lower_gamma", MAXIMUM_INVERSE_LOWER_GAMMA_ITERATIONS)
    return NaN
