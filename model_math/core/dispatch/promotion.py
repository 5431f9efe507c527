"""
Argument promotion for the polymorphic functions.

Arguments are reduced to Python scalars (unwrapping :class:`Variant`) and
promoted to the join of their types on the lattice
``BOOLEAN <= INTEGER <= REAL <= COMPLEX``. Values without a scalar form
(None, Set, Tuple, matrices) are reported as a failed conversion to
Complex.
"""

from functools import reduce, singledispatch
from typing import Any, List, Optional, Tuple

import numpy as np

from ..base.error_sink import trigger_type_conversion
from ..base.validation import is_whole
from ..values.value_type import ValueType, join, value_type_of
from ..values.variant import Variant

_PROMOTIONS = {
    ValueType.BOOLEAN: bool,
    ValueType.INTEGER: int,
    ValueType.REAL: float,
    ValueType.COMPLEX: complex,
}


@singledispatch
def scalar_value(value: Any) -> Optional[Any]:
    """Return ``value`` as a Python scalar, or None when it has no scalar form.

    Examples
    --------
    >>> scalar_value(Variant(2.5))
    2.5
    >>> scalar_value(np.int64(3))
    3
    """
    return None


@scalar_value.register(bool)
@scalar_value.register(np.bool_)
def _(value) -> bool:
    return bool(value)


@scalar_value.register(int)
@scalar_value.register(np.integer)
def _(value) -> int:
    return int(value)


@scalar_value.register(float)
@scalar_value.register(np.floating)
def _(value) -> float:
    return float(value)


@scalar_value.register(complex)
@scalar_value.register(np.complexfloating)
def _(value) -> complex:
    return complex(value)


@scalar_value.register(Variant)
def _(value: Variant) -> Optional[Any]:
    return scalar_value(value.value)


def promote(value: Any, to_type: ValueType) -> Any:
    """Widen a scalar to ``to_type``; narrowing is not supported."""
    return _PROMOTIONS[to_type](value)


def _unwrapped_type(value: Any) -> ValueType:
    if isinstance(value, Variant):
        return value.value_type()
    try:
        return value_type_of(value)
    except TypeError:
        return ValueType.NONE


def scalar_arguments(*arguments: Any) -> Optional[List[Any]]:
    """Reduce every argument to a scalar.

    Returns
    -------
    list or None
        The scalars, or None after reporting the first argument that has no
        scalar form
    """
    scalars = []
    for argument in arguments:
        scalar = scalar_value(argument)
        if scalar is None:
            trigger_type_conversion(_unwrapped_type(argument), ValueType.COMPLEX)
            return None
        scalars.append(scalar)
    return scalars


def promote_arguments(*arguments: Any,
                      minimum: ValueType = ValueType.BOOLEAN) -> Optional[Tuple[ValueType, List[Any]]]:
    """Promote arguments to the join of their types.

    Parameters
    ----------
    *arguments
        Scalars or Variants
    minimum : ValueType
        Lowest type the result may have

    Returns
    -------
    tuple or None
        ``(join_type, promoted_values)``, or None if an argument has no
        scalar form
    """
    scalars = scalar_arguments(*arguments)
    if scalars is None:
        return None
    target = reduce(join, (value_type_of(s) for s in scalars), minimum)
    return target, [promote(s, target) for s in scalars]


def to_real(value: Any) -> Optional[float]:
    """Lower a scalar or Variant to a Real, reporting lossy conversions."""
    scalar = scalar_value(value)
    if scalar is None:
        trigger_type_conversion(_unwrapped_type(value), ValueType.REAL)
        return None
    if isinstance(scalar, complex):
        if scalar.imag != 0:
            trigger_type_conversion(ValueType.COMPLEX, ValueType.REAL)
            return None
        return scalar.real
    return float(scalar)


def to_integer(value: Any) -> Optional[int]:
    """Lower a scalar or Variant to an Integer, reporting lossy conversions."""
    scalar = scalar_value(value)
    if isinstance(scalar, (bool, int)):
        return int(scalar)

    real = to_real(value)
    if real is None:
        return None
    if not is_whole(real):
        trigger_type_conversion(ValueType.REAL, ValueType.INTEGER)
        return None
    return int(real)
