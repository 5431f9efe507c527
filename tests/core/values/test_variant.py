import math

import numpy as np
import pytest

from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.base.exceptions import TypeConversionError
from model_math.core.values.containers import Set, Tuple
from model_math.core.values.matrix import MatrixReal
from model_math.core.values.value_type import ValueType, join, value_type_of
from model_math.core.values.variant import Variant


class TestValueType:
    @pytest.mark.parametrize("value, expected", [
        (None, ValueType.NONE),
        (True, ValueType.BOOLEAN),
        (np.bool_(False), ValueType.BOOLEAN),
        (3, ValueType.INTEGER),
        (np.int32(3), ValueType.INTEGER),
        (2.5, ValueType.REAL),
        (1j, ValueType.COMPLEX),
        (Set(), ValueType.SET),
        (Tuple(), ValueType.TUPLE),
        (MatrixReal(), ValueType.MATRIX_REAL),
    ])
    def test_value_type_of(self, value, expected):
        assert value_type_of(value) is expected

    def test_unsupported_value(self):
        with pytest.raises(TypeError):
            value_type_of("text")

    def test_join(self):
        assert join(ValueType.INTEGER, ValueType.REAL) is ValueType.REAL
        assert join(ValueType.COMPLEX, ValueType.BOOLEAN) is ValueType.COMPLEX
        assert join(ValueType.BOOLEAN, ValueType.BOOLEAN) is ValueType.BOOLEAN

    def test_join_rejects_containers(self):
        with pytest.raises(ValueError):
            join(ValueType.SET, ValueType.INTEGER)


class TestVariant:
    def test_numpy_scalars_are_unwrapped(self):
        v = Variant(np.float32(1.5))
        assert v.value_type() is ValueType.REAL
        assert type(v.value) is float

    def test_copy_constructor(self):
        assert Variant(Variant(3)) == Variant(3)

    def test_none(self):
        v = Variant()
        assert v.is_none()
        assert v.to_integer() == 0
        assert v.to_complex() == 0j
        assert not has_error()

    def test_widening_conversions(self):
        assert Variant(True).to_integer() == 1
        assert Variant(3).to_real() == 3.0
        assert Variant(2.5).to_complex() == complex(2.5, 0.0)

    def test_narrowing_whole_values(self):
        assert Variant(4.0).to_integer() == 4
        assert Variant(complex(2.0, 0.0)).to_real() == 2.0
        assert not has_error()

    def test_lossy_integer_conversion_reports(self):
        assert Variant(2.5).to_integer() == 0
        assert has_error(ErrorKind.TYPE_CONVERSION)

    def test_lossy_real_conversion_reports(self):
        assert math.isnan(Variant(complex(1.0, 1.0)).to_real())
        assert has_error(ErrorKind.TYPE_CONVERSION)

    def test_lossy_conversion_raises_under_raise_policy(self, raising):
        with pytest.raises(TypeConversionError):
            Variant(Set(1)).to_real()

    def test_try_convert_does_not_report(self):
        assert Variant(1e30).try_convert(ValueType.INTEGER) == (0, False)
        assert not has_error()

    def test_container_conversion(self):
        t = Tuple(1, 2)
        assert Variant(t).to_tuple() is t
        assert Variant(t).to_boolean()
        assert Variant(t).to_set(report=False) is None

    def test_matrix_conversion(self):
        m = MatrixReal.from_array([[1.0, 2.0]])
        assert Variant(m).to_matrix_real() is m
        assert Variant(m).to_matrix_integer(report=False) is None
        assert Variant(1.0).to_matrix_complex(report=False) is None

    def test_failed_matrix_conversion_reports(self):
        assert Variant(Set(1)).to_matrix_boolean() is None
        assert has_error(ErrorKind.TYPE_CONVERSION)

    def test_equality_compares_tags(self):
        assert Variant(1) == 1
        assert Variant(1) != Variant(1.0)

    def test_repr(self):
        assert repr(Variant()) == "Variant()"
        assert repr(Variant(2)) == "Variant(2)"
