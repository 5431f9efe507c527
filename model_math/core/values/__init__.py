"""
Value types consumed and produced by the kernels.

This module groups the value type tags, the matrix, set and tuple
containers, the Variant union, the implicit ordering used for sorting, and
the per-thread random context.
"""

from .value_type import ValueType, value_type_of, join, SCALAR_TYPES, MATRIX_TYPES
from .matrix import Matrix, MatrixBoolean, MatrixInteger, MatrixReal, MatrixComplex, MATRIX_CLASSES
from .variant import Variant
from .ordering import implicit_ordering, implicit_sort_key
from .containers import Set, Tuple, null_set
from .per_thread import PerThread

__all__ = [
    # Tags
    "ValueType",
    "value_type_of",
    "join",
    "SCALAR_TYPES",
    "MATRIX_TYPES",
    # Containers
    "Matrix",
    "MatrixBoolean",
    "MatrixInteger",
    "MatrixReal",
    "MatrixComplex",
    "MATRIX_CLASSES",
    "Set",
    "Tuple",
    "null_set",
    # Variant
    "Variant",
    # Ordering
    "implicit_ordering",
    "implicit_sort_key",
    # Random context
    "PerThread",
]
