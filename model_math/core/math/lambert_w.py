"""
Lambert W function on every branch.

Branches 0 and -1 on the real axis above ``-1/e`` are delegated to
:func:`scipy.special.lambertw`, with one extra Householder step near the
branch point where its result loses accuracy; ``-1/e`` itself maps to
exactly -1 on both branches. Everything else is solved with a third
order Householder iteration on ``f(w) = w e^w - z`` seeded by one of the
initial guesses of Corless, Gonnet, Hare, Jeffrey and Knuth (1996):

* a branch point expansion near ``z = -1/e``,
* a Pade approximant around the origin (branch 0 only),
* the asymptotic series ``ln z + 2 pi i k - ln(ln z + 2 pi i k)``.
"""

import logging
import math
from typing import Optional

import numpy as np
from scipy import special

from ..base.constants import e, infinity, NaN, pi
from ..base.error_sink import trigger_can_not_converge
from ..config.settings import get_config
from .elementary import ln_complex, sqrt_complex

logger = logging.getLogger(__name__)

INVERSE_E = 1.0 / e

PADE_NUMERATOR = (0.0, 1.0, 2.682352941176471717, 1.326470588235293846)
PADE_DENOMINATOR = (1.0, 3.682352941176471717, 3.508823529411765563, 0.651960784313724284)
BRANCH_POINT_SERIES = (-1.0, 1.0, -1.0 / 3.0, 11.0 / 72.0)

BRANCH_POINT_RADIUS = 0.3
BRANCH_POINT_TOLERANCE = float(np.spacing(INVERSE_E))
MAXIMUM_HOUSEHOLDER_ITERATIONS = 500


def pade_guess(z: complex) -> complex:
    """Pade approximant to branch 0 near the origin."""
    z2 = z * z
    z3 = z2 * z
    n0, n1, n2, n3 = PADE_NUMERATOR
    d0, d1, d2, d3 = PADE_DENOMINATOR
    return (n0 + n1 * z + n2 * z2 + n3 * z3) / (d0 + d1 * z + d2 * z2 + d3 * z3)


def series_expansion_guess(k: int, z: complex) -> complex:
    """Asymptotic guess ``ln z + 2 pi i k - ln(ln z + 2 pi i k)``."""
    k_term = complex(0.0, 2.0 * pi * k)
    ln_z = ln_complex(z)
    return ln_z + k_term - ln_complex(ln_z + k_term)


def branch_point_guess(z: complex) -> complex:
    """Series in ``p = sqrt(2 e z + 1)`` around the branch point ``-1/e``."""
    p = sqrt_complex(2.0 * e * z + 1.0)
    p2 = p * p
    p3 = p2 * p
    s0, s1, s2, s3 = BRANCH_POINT_SERIES
    return s0 + s1 * p + s2 * p2 + s3 * p3


def _householder_step(w, z):
    """One third order Householder step on ``w e^w - z``; real or complex."""
    ew = np.exp(w)
    wew = w * ew
    f = wew - z
    df = ew + wew
    ddf = ew + df
    dddf = ew + ddf
    h = -(f / df)
    ddf_over_df = ddf / df
    dddf_over_df = dddf / df

    numerator = 1.0 + 0.5 * ddf_over_df * h
    denominator = 1.0 + (ddf_over_df + dddf_over_df * h / 6.0) * h
    return w + h * numerator / denominator


@np.errstate(all="ignore")
def householder(initial_guess: complex, z: complex, epsilon: float) -> complex:
    """Refine a guess for W(z) with Householder's third order method.

    Parameters
    ----------
    initial_guess : complex
        Starting point, which also selects the branch
    z : complex
        Argument
    epsilon : float
        Relative tolerance on successive iterates

    Returns
    -------
    complex
        W(z), or NaN after the iteration cap is exhausted
    """
    w = np.complex128(initial_guess)
    zc = np.complex128(z)
    error = infinity

    for _ in range(MAXIMUM_HOUSEHOLDER_ITERATIONS):
        last_w = w
        w = _householder_step(w, zc)

        error = abs(w - last_w) if last_w == 0 else abs(w - last_w) / abs(last_w)
        if error <= epsilon:
            return complex(w)

    logger.debug(f"lambert_w did not converge for z={z}, last error {error}")
    trigger_can_not_converge("lambert_w", MAXIMUM_HOUSEHOLDER_ITERATIONS)
    return complex(NaN, NaN)


def _initial_guess(k: int, z: complex) -> complex:
    if k == 0:
        if abs(z + INVERSE_E) < BRANCH_POINT_RADIUS:
            return branch_point_guess(z)

        # Central patch from the SciPy implementation
        abs_imag = abs(z.imag)
        if -1.0 < z.real < 1.5 and abs_imag < 1.0 and (-2.5 * abs_imag - 0.2) < z.real:
            return pade_guess(z)
        return series_expansion_guess(k, z)

    if k == -1 and abs(z) <= INVERSE_E and z.imag == 0 and z.real < 0:
        return complex(math.log(-z.real), 0)
    return series_expansion_guess(k, z)


def lambert_w_corless(k: int, z: complex, epsilon: float) -> complex:
    """Branch ``k`` of W(z) by Householder iteration from the Corless guesses."""
    if z == 0:
        return complex(-infinity, 0)
    return householder(_initial_guess(k, z), z, epsilon)


@np.errstate(all="ignore")
def _polish_near_branch_point(w: float, z: float) -> float:
    """Refine a real W close to ``-1/e``, where ``w e^w`` is nearly flat."""
    if abs(z + INVERSE_E) >= BRANCH_POINT_RADIUS:
        return w
    polished = float(_householder_step(np.float64(w), np.float64(z)))
    # Stay on the branch that was asked for
    if not math.isfinite(polished) or (polished + 1.0) * (w + 1.0) < 0:
        return w
    return polished


def lambert_w(k: int, z: complex, epsilon: Optional[float] = None) -> complex:
    """Branch ``k`` of the Lambert W function.

    Parameters
    ----------
    k : int
        Branch index; 0 is the principal branch
    z : complex
        Argument
    epsilon : float, optional
        Relative tolerance; defaults to the configured ``lambert_w_epsilon``

    Returns
    -------
    complex
        W_k(z)

    Examples
    --------
    >>> round(lambert_w(0, 1.0).real, 12)
    0.56714329041
    """
    if epsilon is None:
        epsilon = get_config().lambert_w_epsilon

    z = complex(z)
    zr = z.real
    zi = z.imag

    if math.isnan(zr) or math.isnan(zi):
        return complex(NaN, NaN)

    if zi == 0:
        if math.isinf(zr):
            return complex(zr, 0.0)

        if k in (0, -1) and abs(zr + INVERSE_E) <= BRANCH_POINT_TOLERANCE:
            return complex(-1.0, 0.0)
        if k == -1 and zr < -INVERSE_E:
            # Branches 0 and -1 are conjugate below the branch point
            return lambert_w(0, z, epsilon).conjugate()

        if k == 0 and zr >= -INVERSE_E:
            result = complex(special.lambertw(zr, 0, tol=epsilon))
            if not math.isnan(result.real):
                return complex(_polish_near_branch_point(result.real, zr), 0.0)
        elif k == -1 and -INVERSE_E <= zr < 0:
            result = complex(special.lambertw(zr, -1, tol=epsilon))
            if not math.isnan(result.real):
                return complex(_polish_near_branch_point(result.real, zr), 0.0)

        return lambert_w_corless(k, z, epsilon)

    if math.isinf(zr):
        if math.isinf(zi):
            return complex(NaN, NaN)
        if zr > 0:
            return complex(0.0, zr + 2.0 * pi * k)
        return complex(0.0, 2.0 * pi * k - zr)

    return lambert_w_corless(k, z, epsilon)
