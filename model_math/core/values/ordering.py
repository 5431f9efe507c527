"""
Implicit total ordering across runtime values.

Scalars compare by ``real + imag`` of their complex promotion. Values of
different categories rank as

    None < scalars < Set < Tuple < MatrixBoolean < MatrixInteger < MatrixReal < MatrixComplex

Two containers of the same category compare by size (matrices by rows, then
columns) and then element by element.
"""

from functools import cmp_to_key
from typing import Any

from .value_type import ValueType, value_type_of
from .variant import Variant


_CATEGORY_RANK = {
    ValueType.NONE: 0,
    ValueType.BOOLEAN: 1,
    ValueType.INTEGER: 1,
    ValueType.REAL: 1,
    ValueType.COMPLEX: 1,
    ValueType.SET: 2,
    ValueType.TUPLE: 3,
    ValueType.MATRIX_BOOLEAN: 4,
    ValueType.MATRIX_INTEGER: 5,
    ValueType.MATRIX_REAL: 6,
    ValueType.MATRIX_COMPLEX: 7,
}


def _unwrap(value: Any) -> Any:
    return value.value if isinstance(value, Variant) else value


def _compare(a: Any, b: Any) -> int:
    return 0 if a == b else (-1 if a < b else 1)


def _scalar_measure(value: Any) -> float:
    c = complex(value)
    return c.real + c.imag


def implicit_ordering(a: Any, b: Any) -> int:
    """Compare two runtime values.

    Parameters
    ----------
    a, b : Any
        Python scalars, Variants, Sets, Tuples or matrices

    Returns
    -------
    int
        -1, 0 or +1
    """
    a = _unwrap(a)
    b = _unwrap(b)
    ta = value_type_of(a)
    tb = value_type_of(b)

    rank_a = _CATEGORY_RANK[ta]
    rank_b = _CATEGORY_RANK[tb]
    if rank_a != rank_b:
        return -1 if rank_a < rank_b else 1

    if ta is ValueType.NONE:
        return 0

    if ta.is_scalar:
        return _compare(_scalar_measure(a), _scalar_measure(b))

    if ta.is_matrix:
        order = _compare(a.number_rows(), b.number_rows())
        if order == 0:
            order = _compare(a.number_columns(), b.number_columns())
    else:
        order = _compare(a.size(), b.size())

    if order != 0:
        return order

    for x, y in zip(a, b):
        order = implicit_ordering(x, y)
        if order != 0:
            return order
    return 0


implicit_sort_key = cmp_to_key(implicit_ordering)
