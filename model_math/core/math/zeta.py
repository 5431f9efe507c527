"""
Riemann zeta function.

Real arguments are delegated to :func:`scipy.special.zeta`. Complex
arguments with ``Re(s) > 1`` are summed with the alternating series
acceleration described by Borwein; for ``Re(s) < 1`` the functional
equation

    zeta(s) = 2^s pi^(s-1) sin(pi s / 2) Gamma(1 - s) zeta(1 - s)

moves the evaluation to the convergent half plane. The accelerator keeps
its coefficients in the scratch buffer of a :class:`PerThread`.
"""

import logging
import math
from typing import Optional

import numpy as np
from scipy import special

from ..base.constants import epsilon, NaN, pi
from ..base.error_sink import trigger_can_not_converge
from ..values.per_thread import PerThread
from .gamma import gamma_complex

logger = logging.getLogger(__name__)

MAXIMUM_ZETA_ITERATIONS = 100
REQUIRED_CONVERGED_ITERATIONS = 2
ZETA_TOLERANCE = 4.0 * epsilon

_COMPLEX_SIZE = np.dtype(np.complex128).itemsize


def riemann_zeta_real(s: float) -> float:
    """Riemann zeta of a real argument (Euler-Maclaurin via SciPy)."""
    return float(special.zeta(s))


def _scratch(pt: Optional[PerThread]) -> np.ndarray:
    needed = MAXIMUM_ZETA_ITERATIONS * _COMPLEX_SIZE
    buffer = pt.temporary_buffer() if pt is not None else bytearray(needed)
    if len(buffer) < needed:
        raise ValueError(
            f"PerThread scratch buffer holds {len(buffer)} bytes, zeta needs {needed}"
        )
    return np.frombuffer(buffer, dtype=np.complex128, count=MAXIMUM_ZETA_ITERATIONS)


@np.errstate(all="ignore")
def _alternating_series(s: complex, pt: Optional[PerThread]) -> complex:
    if s.imag == 0:
        return complex(riemann_zeta_real(s.real), 0)

    sc = np.complex128(s)
    a = _scratch(pt)

    a[0] = 0.5 / (1.0 - np.power(np.complex128(2.0), 1.0 - sc))
    result = a[0]
    remaining = REQUIRED_CONVERGED_ITERATIONS

    for n in range(1, MAXIMUM_ZETA_ITERATIONS):
        last = result
        nc = float(n)

        for k in range(n):
            a[k] *= 0.5 * nc / (nc - k)
            result += a[k]

        a[n] = -a[n - 1] * np.power(np.complex128(nc / (nc + 1.0)), sc) / nc
        result += a[n]

        if abs(result - last) / abs(result) <= ZETA_TOLERANCE:
            remaining -= 1
            if remaining == 0:
                return complex(result)
        else:
            remaining = REQUIRED_CONVERGED_ITERATIONS

    logger.debug(f"riemann_zeta did not converge for s={s}")
    trigger_can_not_converge("riemann_zeta", MAXIMUM_ZETA_ITERATIONS)
    return complex(NaN, NaN)


def riemann_zeta_complex(s: complex, pt: Optional[PerThread] = None) -> complex:
    """Riemann zeta of a complex argument.

    Parameters
    ----------
    s : complex
        Argument; ``Re(s)`` equal to 0 or 1 does not converge
    pt : PerThread, optional
        Supplies the scratch buffer; a temporary one is used when omitted

    Returns
    -------
    complex
        zeta(s), or NaN when the series does not converge
    """
    if math.isnan(s.real) or math.isnan(s.imag):
        return complex(NaN, NaN)

    if s.imag == 0:
        return complex(riemann_zeta_real(s.real), 0)

    sr = s.real
    if sr == 1.0 or sr == 0.0:
        trigger_can_not_converge("riemann_zeta", 0)
        return complex(NaN, NaN)

    if sr > 1.0:
        return _alternating_series(s, pt)

    z1ms = _alternating_series(1.0 - s, pt)
    with np.errstate(all="ignore"):
        sc = np.complex128(s)
        result = (
            np.power(np.complex128(2.0), sc)
            * np.power(np.complex128(pi), sc - 1.0)
            * np.sin(0.5 * pi * sc)
            * np.complex128(gamma_complex(1.0 - s))
            * np.complex128(z1ms)
        )
    return complex(result)
