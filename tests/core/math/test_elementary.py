import cmath
import math

import pytest

from model_math.core.base.constants import INTEGER_MAX, INTEGER_MIN
from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.math.elementary import (
    abs_complex,
    ceil_real,
    floor_real,
    is_nan,
    ln_complex,
    ln_real,
    log_complex,
    log_real,
    lower_complex_to_real,
    nint_real,
    nroot_complex,
    nroot_real,
    pow_complex,
    pow_integer,
    pow_real,
    pow_real_integer,
    reciprocal,
    sqrt_complex,
    sqrt_real,
)


class TestPowInteger:
    @pytest.mark.parametrize("base, exponent, expected", [
        (3, 2, 9),
        (-2, 3, -8),
        (2, 10, 1024),
        (7, 0, 1),
        (2, -1, 0),
        (1, -5, 1),
    ])
    def test_values(self, base, exponent, expected):
        assert pow_integer(base, exponent) == expected

    def test_saturates(self):
        assert pow_integer(2, 63) == INTEGER_MAX
        assert pow_integer(10, 40) == INTEGER_MAX
        assert pow_integer(-10, 41) == INTEGER_MIN

    def test_most_negative_power(self):
        assert pow_integer(-2, 63) == INTEGER_MIN


class TestPowReal:
    def test_real_integer(self):
        assert pow_real_integer(1.5, 2) == 2.25
        assert pow_real_integer(2.0, -2) == 0.25
        assert pow_real_integer(-2.0, 3) == -8.0

    def test_zero_to_the_zero_is_nan(self):
        assert math.isnan(pow_real_integer(0.0, 0))
        assert has_error(ErrorKind.NAN)

    def test_negative_base_fractional_exponent_is_complex(self):
        result = pow_real(-8.0, 1.0 / 3.0)
        assert result == pytest.approx(complex(1.0, math.sqrt(3.0)), rel=1e-14)

    def test_whole_exponent_stays_real(self):
        assert pow_real(-2.0, 4.0) == complex(16.0, 0.0)

    @pytest.mark.parametrize("base, exponent, expected", [
        (2.0, math.inf, math.inf),
        (0.5, math.inf, 0.0),
        (1.0, math.inf, 1.0),
        (0.5, -math.inf, math.inf),
    ])
    def test_infinite_exponent(self, base, exponent, expected):
        assert pow_real(base, exponent) == complex(expected, 0.0)

    def test_nan_propagates_without_report(self):
        assert math.isnan(pow_real(math.nan, 2.5).real)
        assert not has_error()

    def test_overflow_is_infinite(self):
        assert pow_real(10.0, 400.0).real == math.inf


class TestPowComplex:
    def test_basic(self):
        assert pow_complex(1j, complex(2, 0)) == complex(-1, 0)
        assert pow_complex(complex(2, 0), complex(0.5, 0)) == pytest.approx(complex(math.sqrt(2.0), 0))

    def test_general(self):
        base = complex(1.0, 2.0)
        exponent = complex(0.3, -0.7)
        assert pow_complex(base, exponent) == pytest.approx(base ** exponent, rel=1e-12)

    def test_zero_base(self):
        assert pow_complex(0j, complex(2.5, 1.0)) == 0j
        assert pow_complex(0j, complex(-1.0, 0.0)) == complex(math.inf, 0.0)

    def test_zero_to_the_zero(self):
        result = pow_complex(0j, 0j)
        assert math.isnan(result.real)
        assert has_error(ErrorKind.NAN)

    def test_infinite_base(self):
        assert pow_complex(complex(math.inf, 0), complex(2.5, 0)) == complex(math.inf, 0)
        assert pow_complex(complex(math.inf, 0), complex(-1.5, 0)) == 0j

    def test_infinite_imaginary_base_whole_power(self):
        assert pow_complex(complex(0, math.inf), complex(4, 0)) == complex(math.inf, 0)

    @pytest.mark.parametrize("base, exponent, expected", [
        (complex(math.inf, 0), complex(2, 0), complex(math.inf, 0)),
        (complex(-math.inf, 0), complex(2, 0), complex(math.inf, 0)),
        (complex(-math.inf, 0), complex(3, 0), complex(-math.inf, 0)),
        (complex(math.inf, 0), complex(3, 0), complex(math.inf, 0)),
        (complex(0, math.inf), complex(2, 0), complex(-math.inf, 0)),
    ])
    def test_infinite_base_squared_and_cubed(self, base, exponent, expected):
        assert pow_complex(base, exponent) == expected
        assert not has_error()


class TestRoots:
    def test_sqrt_real(self):
        assert sqrt_real(4.0) == complex(2.0, 0.0)
        assert sqrt_real(-4.0) == complex(0.0, 2.0)
        assert sqrt_real(-math.inf) == complex(0.0, math.inf)

    def test_sqrt_complex(self):
        assert sqrt_complex(complex(3.0, 4.0)) == pytest.approx(complex(2.0, 1.0))
        assert sqrt_complex(complex(1.0, -math.inf)) == complex(math.inf, -math.inf)

    def test_nroot(self):
        assert nroot_real(27.0, 3.0).real == pytest.approx(3.0)
        assert nroot_complex(complex(16.0, 0.0), complex(4.0, 0.0)) == pytest.approx(complex(2.0, 0.0))

    def test_reciprocal_of_zero(self):
        assert reciprocal(0j) == complex(math.inf, 0)
        assert reciprocal(complex(0, 2)) == complex(0, -0.5)


class TestRounding:
    def test_abs(self):
        assert abs_complex(complex(3.0, 4.0)) == 5.0
        assert abs_complex(complex(-2.0, 0.0)) == 2.0
        assert abs_complex(complex(0.0, -7.0)) == 7.0

    def test_floor_ceil(self):
        assert floor_real(-1.5) == -2.0
        assert ceil_real(-1.5) == -1.0
        assert math.isinf(floor_real(math.inf))

    @pytest.mark.parametrize("value, expected", [(2.5, 2.0), (3.5, 4.0), (-0.5, -0.0), (1.2, 1.0)])
    def test_nint_ties_to_even(self, value, expected):
        assert nint_real(value) == expected


class TestLogarithms:
    def test_ln_of_negative(self):
        assert ln_real(-1.0) == pytest.approx(complex(0.0, math.pi))

    def test_ln_of_zero(self):
        assert ln_complex(0j) == complex(-math.inf, 0.0)

    @pytest.mark.parametrize("base, value, expected", [
        (2.0, 8.0, 3.0),
        (10.0, 1000.0, 3.0),
        (math.e, math.e ** 2, 2.0),
        (3.0, 81.0, 4.0),
    ])
    def test_log_real(self, base, value, expected):
        assert log_real(base, value) == pytest.approx(complex(expected, 0.0), rel=1e-14)

    def test_log_complex(self):
        value = complex(1.0, 1.0)
        assert log_complex(complex(2.0, 0.0), value) == pytest.approx(cmath.log(value) / math.log(2.0))


class TestHelpers:
    def test_is_nan(self):
        assert is_nan(math.nan)
        assert is_nan(complex(1.0, math.nan))
        assert not is_nan(3)
        assert not is_nan(1.0)

    def test_lower_complex_to_real(self):
        assert lower_complex_to_real(complex(2.0, 0.0)) == 2.0
        assert math.isnan(lower_complex_to_real(complex(2.0, 1.0)))
        assert has_error(ErrorKind.TYPE_CONVERSION)
