"""
Elementary arithmetic kernels.

Typed implementations of ``pow``, ``sqrt``, ``nroot``, ``abs``, ``floor``,
``ceil``, ``nint``, ``ln`` and ``log``. Function names carry the operand
types they accept (``pow_real_integer`` takes a Real base and an Integer
exponent); the polymorphic entry points in :mod:`model_math.core.dispatch`
promote their arguments and call one of these.

IEEE semantics are obtained through numpy scalars with floating point
warnings silenced. Indeterminate forms such as ``0 ** 0`` and ``inf ** 0``
are NaN rather than the ISO C value of 1.
"""

import cmath
import math
from typing import Union

import numpy as np

from ..base.constants import INTEGER_MAX, INTEGER_MIN, e, infinity, NaN
from ..base.error_sink import trigger_nan, trigger_type_conversion
from ..values.value_type import ValueType

Real = Union[int, float]
Number = Union[int, float, complex]

NAN_COMPLEX = complex(NaN, NaN)


def ieee_pow(base: float, exponent: float) -> float:
    """Real power with IEEE overflow and domain behaviour."""
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def ieee_complex_pow(base: complex, exponent: complex) -> complex:
    """Complex power with IEEE overflow behaviour."""
    with np.errstate(all="ignore"):
        return complex(np.power(np.complex128(base), np.complex128(exponent)))


def ieee_divide(numerator: Number, denominator: Number) -> Number:
    """Division that yields inf or NaN instead of raising on a zero denominator."""
    if isinstance(numerator, complex) or isinstance(denominator, complex):
        with np.errstate(all="ignore"):
            return complex(np.complex128(numerator) / np.complex128(denominator))
    with np.errstate(all="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


def reciprocal(value: complex) -> complex:
    """Return ``1 / value``, mapping zero to positive infinity."""
    a = value.real
    b = value.imag
    d = a * a + b * b
    if d == 0:
        return complex(infinity, 0)
    return complex(a / d, -b / d)


def _is_whole(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value)


def _scaled(value: float, multiplier: float) -> float:
    # inf * 0 is taken as 0 here; the direction multipliers are exact zeros.
    if multiplier == 0:
        return 0.0
    return value * multiplier


def lower_complex_to_real(value: complex) -> float:
    """Return the real part of ``value``, requiring a zero imaginary part.

    A non-zero imaginary part is reported as a type conversion error and
    NaN is returned.
    """
    if value.imag == 0:
        return value.real
    trigger_type_conversion(ValueType.COMPLEX, ValueType.REAL)
    return NaN


# pow -------------------------------------------------------------------------

def pow_integer(base: int, exponent: int) -> int:
    """Integer power saturating to the signed 64-bit range.

    Parameters
    ----------
    base : int
        Base
    exponent : int
        Exponent; negative exponents truncate toward zero

    Returns
    -------
    int
        ``base ** exponent``, clamped to ``INTEGER_MIN..INTEGER_MAX``
    """
    if exponent == 2:
        result = base * base
    elif exponent == 3:
        result = base * base * base
    else:
        power = ieee_pow(base, exponent)
        if math.isnan(power):
            return 0
        if math.isinf(power):
            result = INTEGER_MAX if power > 0 else INTEGER_MIN
        else:
            result = int(power)

    negative = base < 0 and exponent % 2 == 1
    if result > INTEGER_MAX or (result <= INTEGER_MIN and not negative):
        return INTEGER_MAX
    if result < INTEGER_MIN:
        return INTEGER_MIN
    return result


def pow_real_integer(base: float, exponent: int) -> float:
    """Real base raised to an Integer exponent."""
    if exponent == 2:
        return base * base
    if exponent == 3:
        return base * base * base
    if math.isnan(base):
        return NaN
    if exponent == 0 and (base == 0 or math.isinf(base)):
        trigger_nan("pow")
        return NaN
    return ieee_pow(base, exponent)


def pow_real(base: float, exponent: float) -> complex:
    """Real base raised to a Real exponent.

    The result is Complex because negative bases with fractional exponents
    leave the real axis.
    """
    if exponent == 0.5:
        return sqrt_real(base)
    if exponent == 2:
        return complex(base * base, 0)
    if exponent == 3:
        return complex(base * base * base, 0)

    if math.isnan(base) or math.isnan(exponent):
        return complex(NaN, 0)

    if exponent == 0 and (base == 0 or math.isinf(base)):
        trigger_nan("pow")
        return complex(NaN, 0)

    if math.isinf(exponent):
        if base == 0:
            trigger_nan("pow")
            return complex(NaN, 0)
        if exponent < 0:
            base = 1.0 / base
        if base > 1:
            return complex(infinity, 0)
        if base == 1:
            return complex(1.0, 0)
        if base > -1:
            return complex(0.0, 0)
        trigger_nan("pow")
        return complex(NaN, 0)

    if base >= 0 or _is_whole(exponent):
        return complex(ieee_pow(base, exponent), 0)
    return ieee_complex_pow(complex(base, 0), complex(exponent, 0))


def _zero_base_pow(exponent: complex) -> complex:
    er = exponent.real
    ei = exponent.imag

    if exponent == 0:
        trigger_nan("pow")
        return complex(NaN, 0)
    if math.isinf(er):
        trigger_nan("pow")
        return complex(NaN, 0) if ei == 0 else NAN_COMPLEX
    if math.isinf(ei):
        trigger_nan("pow")
        return NAN_COMPLEX
    if er > 0:
        return complex(0, 0)

    c = math.cos(ei)
    s = math.sin(ei)
    real = 0.0 if c == 0 else math.copysign(infinity, c)
    imag = 0.0 if s == 0 else math.copysign(infinity, s)
    return complex(real, imag)


def _real_base_infinite_pow(b: float, er: float) -> float:
    if er > 0:
        if b > 1:
            return infinity
        if b == 1:
            return 1.0
        if b > -1:
            return 0.0
        return NaN

    if b > 1:
        return NaN if math.isinf(b) else 0.0
    if b == 1:
        return 1.0
    if b >= 0:
        return infinity
    if b >= -1:
        return NaN
    return NaN if math.isinf(b) else 0.0


def _infinite_pow(base: complex, exponent: complex) -> complex:
    br = base.real
    bi = base.imag
    er = exponent.real
    ei = exponent.imag

    if exponent == 0:
        if math.isinf(br):
            trigger_nan("pow")
            return complex(NaN, 0) if bi == 0 else NAN_COMPLEX
        if math.isinf(bi):
            trigger_nan("pow")
            return NAN_COMPLEX
        return complex(1, 0)

    if exponent == 1:
        return base

    if math.isinf(ei):
        trigger_nan("pow")
        return NAN_COMPLEX

    rm = math.cos(ei)
    im = math.sin(ei)

    if bi == 0:
        if math.isinf(er):
            value = _real_base_infinite_pow(br, er)
        else:
            value = ieee_pow(br, er)

        if math.isnan(value):
            trigger_nan("pow")
            return complex(NaN if rm != 0 else 0.0, NaN if im != 0 else 0.0)
        return complex(_scaled(value, rm), _scaled(value, im))

    if br == 0:
        if math.isinf(er):
            if er > 0:
                if abs(bi) < 1:
                    return complex(0, 0)
            elif abs(bi) > 1 and not math.isinf(bi):
                return complex(0, 0)
            trigger_nan("pow")
            return NAN_COMPLEX

        # Only an infinite imaginary base reaches this point.
        if er < 0:
            return complex(0, 0)
        if _is_whole(er):
            sign = math.copysign(1.0, bi)
            quadrant = int(er) % 4
            if quadrant == 0:
                return complex(_scaled(infinity, rm), _scaled(infinity, im))
            if quadrant == 1:
                y = sign * infinity
                return complex(_scaled(-y, im), _scaled(y, rm))
            if quadrant == 2:
                x = -sign * infinity
                return complex(_scaled(x, rm), _scaled(x, im))
            y = -sign * infinity
            return complex(_scaled(-y, im), _scaled(y, rm))

        trigger_nan("pow")
        return NAN_COMPLEX

    trigger_nan("pow")
    return NAN_COMPLEX


def pow_complex(base: complex, exponent: complex) -> complex:
    """Complex base raised to a Complex exponent.

    Parameters
    ----------
    base : complex
        Base
    exponent : complex
        Exponent

    Returns
    -------
    complex
        ``base ** exponent`` with the exceptional values tabulated for
        zero, infinite and NaN operands

    Notes
    -----
    Combinations of a fully complex base (both parts non-zero) with an
    infinite component have no well defined limit; they report through
    the error sink and return ``nan + nan j``.
    """
    if exponent == 0.5:
        return sqrt_complex(base)
    if cmath.isfinite(base):
        if exponent == 2:
            return base * base
        if exponent == 3:
            return base * base * base

    br = base.real
    bi = base.imag
    er = exponent.real
    ei = exponent.imag

    if math.isnan(br) or math.isnan(bi) or math.isnan(er) or math.isnan(ei):
        if bi == 0 and ei == 0:
            if math.isnan(er) or _is_whole(er):
                return complex(NaN, 0)
        return NAN_COMPLEX

    if base == 0:
        return _zero_base_pow(exponent)

    if math.isinf(br) or math.isinf(bi) or math.isinf(er) or math.isinf(ei):
        return _infinite_pow(base, exponent)

    return ieee_complex_pow(base, exponent)


# sqrt and nroot ----------------------------------------------------------------

def sqrt_real(value: float) -> complex:
    """Square root of a real value; negative inputs give an imaginary result."""
    if math.isinf(value):
        return complex(infinity, 0) if value > 0 else complex(0, infinity)
    if math.isnan(value):
        return complex(NaN, 0)
    return cmath.sqrt(complex(value, 0.0))


def sqrt_complex(value: complex) -> complex:
    """Principal square root of a complex value."""
    r = value.real
    i = value.imag

    if math.isnan(r):
        return complex(NaN, 0) if i == 0 else NAN_COMPLEX
    if math.isnan(i):
        return NAN_COMPLEX
    if math.isinf(r):
        if math.isinf(i):
            return NAN_COMPLEX
        return complex(infinity, 0) if r > 0 else complex(0, infinity)
    if math.isinf(i):
        return complex(infinity, infinity) if i > 0 else complex(infinity, -infinity)
    return cmath.sqrt(value)


def nroot_real(value: float, root: float) -> complex:
    """Return ``value ** (1 / root)`` for a real root."""
    return pow_real(value, ieee_divide(1.0, root))


def nroot_complex(value: complex, root: complex) -> complex:
    """Return ``value ** (1 / root)`` using the complex reciprocal of ``root``."""
    return pow_complex(value, reciprocal(root))


# abs, floor, ceil, nint --------------------------------------------------------

def abs_complex(value: complex) -> float:
    """Magnitude of a complex value, exact on the axes."""
    r = value.real
    i = value.imag
    if i == 0:
        return abs(r)
    if r == 0:
        return abs(i)
    return math.sqrt(r * r + i * i)


def floor_real(value: float) -> float:
    return float(np.floor(value))


def ceil_real(value: float) -> float:
    return float(np.ceil(value))


def nint_real(value: float) -> float:
    """Round to the nearest integer, ties to even."""
    return float(np.rint(value))


# Logarithms --------------------------------------------------------------------

def ln_complex(value: complex) -> complex:
    """Natural logarithm on the principal branch; ``ln(0)`` is ``-inf``."""
    if value == 0:
        return complex(-infinity, math.atan2(value.imag, value.real))
    return cmath.log(value)


def ln_real(value: float) -> complex:
    return ln_complex(complex(value, 0.0))


def log_real(base: float, value: float) -> complex:
    """Logarithm of ``value`` in ``base`` for real operands.

    Positive operands stay on the real axis and use the dedicated base 2,
    base e and base 10 routines where they apply.
    """
    if value > 0 and base > 0:
        if base == 2:
            result = math.log2(value)
        elif base == e:
            result = math.log(value)
        elif base == 10:
            result = math.log10(value)
        else:
            result = ieee_divide(math.log(value), math.log(base))
        return complex(result, 0)
    return ieee_divide(ln_real(value), ln_real(base))


def log_complex(base: complex, value: complex) -> complex:
    """Logarithm of ``value`` in ``base`` for complex operands."""
    return ieee_divide(ln_complex(value), ln_complex(base))


def is_nan(value: Number) -> bool:
    """Check whether a scalar is or contains NaN."""
    if isinstance(value, complex):
        return cmath.isnan(value)
    if isinstance(value, float):
        return math.isnan(value)
    return False
