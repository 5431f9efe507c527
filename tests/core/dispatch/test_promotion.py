import numpy as np
import pytest

from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.dispatch.promotion import (
    promote,
    promote_arguments,
    scalar_value,
    to_integer,
    to_real,
)
from model_math.core.values.containers import Set, Tuple
from model_math.core.values.matrix import MatrixReal
from model_math.core.values.value_type import ValueType, value_type_of
from model_math.core.values.variant import Variant


class TestScalarValue:
    @pytest.mark.parametrize("value, expected, expected_type", [
        (np.bool_(True), True, bool),
        (np.int64(3), 3, int),
        (np.float32(0.5), 0.5, float),
        (np.complex128(1 + 2j), 1 + 2j, complex),
        (Variant(2.5), 2.5, float),
        (Variant(Variant(7)), 7, int),
    ])
    def test_scalars(self, value, expected, expected_type):
        result = scalar_value(value)
        assert result == expected
        assert type(result) is expected_type

    @pytest.mark.parametrize("value", [None, Variant(), Set(1), Tuple(1, 2), MatrixReal(1, 1), "text"])
    def test_no_scalar_form(self, value):
        assert scalar_value(value) is None


class TestPromotion:
    def test_promote_widens(self):
        assert promote(True, ValueType.INTEGER) == 1
        assert type(promote(3, ValueType.REAL)) is float
        assert promote(2.5, ValueType.COMPLEX) == complex(2.5, 0)

    @pytest.mark.parametrize("arguments, expected_type", [
        ((True, False), ValueType.BOOLEAN),
        ((True, 2), ValueType.INTEGER),
        ((1, 2.5), ValueType.REAL),
        ((1, Variant(2.5), 1j), ValueType.COMPLEX),
    ])
    def test_join(self, arguments, expected_type):
        target, values = promote_arguments(*arguments)
        assert target is expected_type
        assert all(value_type_of(v) is expected_type for v in values)

    def test_promoted_values(self):
        assert promote_arguments(True, 2) == (ValueType.INTEGER, [1, 2])
        target, values = promote_arguments(1, 2.5)
        assert values == [1.0, 2.5]
        assert type(values[0]) is float

    def test_minimum(self):
        target, values = promote_arguments(2, 3, minimum=ValueType.REAL)
        assert target is ValueType.REAL
        assert values == [2.0, 3.0]

    def test_container_argument(self):
        assert promote_arguments(1, Tuple(2)) is None
        assert has_error(ErrorKind.TYPE_CONVERSION)


class TestLowering:
    def test_to_real(self):
        assert to_real(3) == 3.0
        assert to_real(Variant(complex(2.0, 0.0))) == 2.0
        assert not has_error()

    def test_to_real_rejects_imaginary_part(self):
        assert to_real(complex(2.0, 1.0)) is None
        assert has_error(ErrorKind.TYPE_CONVERSION)

    def test_to_real_rejects_container(self):
        assert to_real(Set(1.0)) is None
        assert has_error(ErrorKind.TYPE_CONVERSION)

    @pytest.mark.parametrize("value, expected", [(True, 1), (5, 5), (4.0, 4), (complex(-2, 0), -2)])
    def test_to_integer(self, value, expected):
        result = to_integer(value)
        assert result == expected
        assert type(result) is int

    def test_to_integer_rejects_fraction(self):
        assert to_integer(2.5) is None
        assert has_error(ErrorKind.TYPE_CONVERSION)
