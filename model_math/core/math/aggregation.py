"""
Variadic aggregation over scalars and containers.

Every reducer accepts any mixture of Python scalars, :class:`Variant`,
:class:`Set`, :class:`Tuple` and matrices. Containers contribute all of
their elements recursively, in iteration order (matrices row by row), so

    count(Set(1, Tuple(2, 3), MatrixInteger.from_array([[4, 5]]))) == 5

None values contribute nothing. Reducers that need real values report an
invalid parameter when they meet a complex value with a nonzero imaginary
part. Reducing an empty collection reports a NaN error.
"""

import builtins
import logging
import math
from typing import Any, Iterator, List, Optional

import numpy as np

from ..base.constants import NaN
from ..base.error_sink import trigger_invalid_parameter, trigger_nan
from ..base.validation import require_positive
from ..values.containers import Set, Tuple
from ..values.matrix import Matrix, MatrixComplex, MatrixInteger, MatrixReal
from ..values.ordering import implicit_sort_key
from ..values.value_type import ValueType, value_type_of
from ..values.variant import Variant

logger = logging.getLogger(__name__)

NAN_COMPLEX = complex(NaN, NaN)


def iterate_values(*values: Any) -> Iterator[Any]:
    """Yield every scalar reachable from ``values``.

    Parameters
    ----------
    *values
        Scalars, Variants, Sets, Tuples or matrices in any nesting

    Yields
    ------
    bool, int, float or complex
        The scalars in traversal order
    """
    for value in values:
        if isinstance(value, Variant):
            value = value.value

        value_type = value_type_of(value)
        if value_type is ValueType.NONE:
            continue
        if value_type.is_scalar:
            yield value
        elif value_type.is_matrix:
            yield from value.coefficients()
        else:
            yield from iterate_values(*value)


def _real_values(values: tuple) -> Optional[np.ndarray]:
    reals: List[float] = []
    for value in iterate_values(*values):
        if isinstance(value, complex):
            if value.imag != 0.0:
                trigger_invalid_parameter("value", value)
                return None
            value = value.real
        reals.append(float(value))
    return np.array(reals, dtype=np.float64)


def _non_empty_real_values(values: tuple) -> Optional[np.ndarray]:
    reals = _real_values(values)
    if reals is None:
        return None
    if reals.size == 0:
        trigger_nan("empty collection")
        return None
    return reals


# Counting and sums ------------------------------------------------------------------

def count(*values: Any) -> int:
    """Number of scalars contained in ``values``."""
    return builtins.sum(1 for _ in iterate_values(*values))


def sum(*values: Any) -> complex:
    """Sum of every contained scalar, promoted to Complex.

    Examples
    --------
    >>> sum(Tuple(1, Set(2, 3), MatrixInteger.from_array([[4, 5]])))
    (15+0j)
    """
    total = complex(0.0, 0.0)
    for value in iterate_values(*values):
        total += value
    return total


def mean(*values: Any) -> complex:
    """Arithmetic mean, ``sum(values) / count(values)``."""
    number_values = count(*values)
    if number_values == 0:
        trigger_nan("mean")
        return NAN_COMPLEX
    return sum(*values) / number_values


# Extremes ---------------------------------------------------------------------------

def min(*values: Any) -> float:
    """Smallest contained value; every value must be real."""
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN
    return float(np.min(reals))


def max(*values: Any) -> float:
    """Largest contained value; every value must be real."""
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN
    return float(np.max(reals))


# Moments ----------------------------------------------------------------------------

def _central_sums(reals: np.ndarray):
    number_values = reals.size
    average = sum(*reals).real / number_values
    deviations = reals - average
    return number_values, deviations


def variance(*values: Any) -> float:
    """Population variance ``(1/N) sum (x - mean)^2``.

    Parameters
    ----------
    *values
        Values to reduce; all must be real

    Returns
    -------
    float
        The biased variance, or NaN for an empty or complex input
    """
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN
    number_values, deviations = _central_sums(reals)
    return float(np.dot(deviations, deviations) / number_values)


def std_dev(*values: Any) -> float:
    """Population standard deviation, the square root of :func:`variance`."""
    return math.sqrt(variance(*values))


def sample_std_dev(*values: Any) -> float:
    """Sample standard deviation with Bessel's correction (``N - 1``)."""
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN
    if reals.size < 2:
        trigger_nan("sample_std_dev")
        return NaN
    number_values, deviations = _central_sums(reals)
    return math.sqrt(float(np.dot(deviations, deviations)) / (number_values - 1))


@np.errstate(all="ignore")
def sample_skew(*values: Any) -> float:
    """Sample skewness ``(m3 / N) / (m2 / (N - 1))^(3/2)``.

    A single value has zero skew.
    """
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN
    if reals.size == 1:
        return 0.0

    number_values, deviations = _central_sums(reals)
    squares = deviations * deviations
    sum_squares = np.sum(squares)
    sum_cubes = np.sum(squares * deviations)
    return float((sum_cubes / number_values) / np.power(sum_squares / (number_values - 1), 1.5))


@np.errstate(all="ignore")
def excess_kurtosis(*values: Any) -> float:
    """Excess kurtosis ``(m4 / N) / (m2 / N)^2 - 3``."""
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN

    number_values, deviations = _central_sums(reals)
    squares = deviations * deviations
    population_variance = np.sum(squares) / number_values
    return float((np.sum(squares * squares) / number_values) / (population_variance * population_variance) - 3.0)


# Order statistics -------------------------------------------------------------------

def median(*values: Any) -> float:
    """Middle value; the mean of the two middle values for an even count."""
    reals = _non_empty_real_values(values)
    if reals is None:
        return NaN

    ordered = np.sort(reals)
    index = ordered.size // 2
    if ordered.size % 2 == 0:
        return float((ordered[index - 1] + ordered[index]) / 2.0)
    return float(ordered[index])


def mode(*values: Any) -> complex:
    """Most frequent value.

    Ties are broken in favour of the smallest value, comparing real parts
    first and then imaginary parts.
    """
    frequencies = {}
    for value in iterate_values(*values):
        key = complex(value)
        frequencies[key] = frequencies.get(key, 0) + 1

    if not frequencies:
        trigger_nan("mode")
        return NAN_COMPLEX

    best_value = NAN_COMPLEX
    best_count = 0
    for value in sorted(frequencies, key=lambda c: (c.real, c.imag)):
        if frequencies[value] > best_count:
            best_count = frequencies[value]
            best_value = value
    return best_value


# Histogram --------------------------------------------------------------------------

def histogram(lower_bound: float, upper_bound: float, number_buckets: int, *values: Any) -> Tuple:
    """Bucket the contained values.

    Parameters
    ----------
    lower_bound : float
        Lower edge of the first bucket
    upper_bound : float
        Upper edge of the last bucket; values equal to it land in the last bucket
    number_buckets : int
        Number of equally wide buckets, ``> 0``
    *values
        Values to bucket; all must be real

    Returns
    -------
    Tuple
        ``(counts, pdf, bucket_centers, count_below, count_above,
        lower_bound, upper_bound, bucket_width)`` where ``counts`` is a
        MatrixInteger column and ``pdf`` and ``bucket_centers`` are
        MatrixReal columns. An empty Tuple for invalid arguments.

    Notes
    -----
    NaN values fall in no bucket and are not counted below or above.
    """
    if not lower_bound < upper_bound:
        trigger_invalid_parameter("upper_bound", upper_bound)
        return Tuple()
    if not require_positive(number_buckets, "number_buckets"):
        return Tuple()

    reals = _real_values(values)
    if reals is None:
        return Tuple()

    number_buckets = int(number_buckets)
    bucket_width = (upper_bound - lower_bound) / number_buckets
    counts = np.zeros(number_buckets, dtype=np.int64)
    below = 0
    above = 0

    for value in reals:
        if value < lower_bound:
            below += 1
        elif value > upper_bound:
            above += 1
        elif not math.isnan(value):
            bucket = builtins.min(int((value - lower_bound) / bucket_width), number_buckets - 1)
            counts[bucket] += 1

    total = int(counts.sum())
    pdf = counts / total if total > 0 else np.zeros(number_buckets, dtype=np.float64)
    centers = lower_bound + bucket_width / 2.0 + bucket_width * np.arange(number_buckets)

    logger.debug(f"histogram: {total} bucketed, {below} below, {above} above")
    return Tuple(
        MatrixInteger.from_array(counts.reshape(-1, 1)),
        MatrixReal.from_array(pdf.reshape(-1, 1)),
        MatrixReal.from_array(centers.reshape(-1, 1)),
        below,
        above,
        float(lower_bound),
        float(upper_bound),
        float(bucket_width),
    )


# Sorting ----------------------------------------------------------------------------

def _sort_matrix(matrix: Matrix, descending: bool) -> Matrix:
    data = matrix.to_numpy().ravel()

    if isinstance(matrix, MatrixComplex) and np.any(data.imag != 0):
        order = np.argsort(np.abs(data), kind="stable")
    elif isinstance(matrix, MatrixComplex):
        order = np.argsort(data.real, kind="stable")
    else:
        order = np.argsort(data, kind="stable")

    if descending:
        order = order[::-1]
    return type(matrix).from_array(data[order].reshape(-1, 1))


def _sort(values: tuple, descending: bool) -> Any:
    if len(values) == 1:
        value = values[0].value if isinstance(values[0], Variant) else values[0]
        if isinstance(value, Matrix):
            return _sort_matrix(value, descending)
        if isinstance(value, Set):
            members = list(value)
            return Tuple(*(reversed(members) if descending else members))
        if isinstance(value, Tuple):
            values = tuple(value)

    return Tuple(*sorted(values, key=implicit_sort_key, reverse=descending))


def sort(*values: Any) -> Any:
    """Sort values in ascending order.

    A matrix sorts into a single column matrix of the same type; complex
    matrices sort by real part when every imaginary part is zero and by
    magnitude otherwise. A Set or Tuple, or several arguments, sort into a
    Tuple under the implicit ordering.

    Examples
    --------
    >>> sort(Tuple(3, 1, 2))
    Tuple(1, 2, 3)
    """
    return _sort(values, descending=False)


def sort_descending(*values: Any) -> Any:
    """Sort values in descending order; see :func:`sort`."""
    return _sort(values, descending=True)
