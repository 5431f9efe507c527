"""
Value type tags and the scalar promotion lattice.

Scalars form the lattice ``BOOLEAN <= INTEGER <= REAL <= COMPLEX``. The
remaining tags name the container types. Python scalars map onto the
lattice as ``bool``, ``int``, ``float`` and ``complex``; numpy scalars are
accepted as well.
"""

from enum import Enum
from typing import Any

import numpy as np


class ValueType(Enum):
    """Discriminator for every value the runtime understands."""

    NONE = 0
    BOOLEAN = 1
    INTEGER = 2
    REAL = 3
    COMPLEX = 4
    SET = 5
    TUPLE = 6
    MATRIX_BOOLEAN = 7
    MATRIX_INTEGER = 8
    MATRIX_REAL = 9
    MATRIX_COMPLEX = 10

    @property
    def is_scalar(self) -> bool:
        return self in SCALAR_TYPES

    @property
    def is_matrix(self) -> bool:
        return self in MATRIX_TYPES


SCALAR_TYPES = (ValueType.BOOLEAN, ValueType.INTEGER, ValueType.REAL, ValueType.COMPLEX)
MATRIX_TYPES = (
    ValueType.MATRIX_BOOLEAN,
    ValueType.MATRIX_INTEGER,
    ValueType.MATRIX_REAL,
    ValueType.MATRIX_COMPLEX,
)


def value_type_of(value: Any) -> ValueType:
    """Return the tag of a Python value.

    Parameters
    ----------
    value : Any
        A Python or numpy scalar, ``None``, or any object exposing a
        ``value_type()`` method (Variant, Set, Tuple and the matrices).

    Returns
    -------
    ValueType
        The matching tag

    Raises
    ------
    TypeError
        If the value has no representation in the runtime
    """
    if value is None:
        return ValueType.NONE
    if isinstance(value, (bool, np.bool_)):
        return ValueType.BOOLEAN
    if isinstance(value, (int, np.integer)):
        return ValueType.INTEGER
    if isinstance(value, (float, np.floating)):
        return ValueType.REAL
    if isinstance(value, (complex, np.complexfloating)):
        return ValueType.COMPLEX

    query = getattr(value, "value_type", None)
    if callable(query):
        return query()

    raise TypeError(f"Unsupported value of type {type(value).__name__}")


def join(a: ValueType, b: ValueType) -> ValueType:
    """Return the least scalar type both ``a`` and ``b`` promote to.

    Raises
    ------
    ValueError
        If either tag is not a scalar type
    """
    if not (a.is_scalar and b.is_scalar):
        raise ValueError(f"No scalar join for {a.name} and {b.name}")
    return a if a.value >= b.value else b
