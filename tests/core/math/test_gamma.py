import math

import numpy as np
import pytest
from scipy import special

from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.math.gamma import (
    beta_complex,
    beta_real,
    factorial_integer,
    factorial_real,
    gamma_complex,
    gamma_integer,
    gamma_real,
    lanczos_approximation,
    ln_factorial_integer,
    ln_factorial_real,
    ln_gamma_complex,
    ln_gamma_integer,
    ln_gamma_real,
    stirling_approximation,
)


class TestFactorial:
    def test_factorial_of_ten(self):
        assert factorial_integer(10) == 3628800.0

    def test_largest_finite(self):
        assert math.isfinite(factorial_integer(170))
        assert factorial_integer(171) == math.inf
        assert has_error(ErrorKind.INFINITY)

    def test_negative_is_invalid(self):
        assert math.isnan(factorial_integer(-1))
        assert has_error(ErrorKind.INVALID_PARAMETER)

    def test_factorial_real(self):
        assert factorial_real(5.0) == 120.0
        assert math.isnan(factorial_real(2.5))
        assert has_error(ErrorKind.INVALID_PARAMETER)

    def test_factorial_real_nan_is_silent(self):
        assert math.isnan(factorial_real(math.nan))
        assert not has_error()

    @pytest.mark.parametrize("n", [0, 1, 20, 170, 171, 500, 10000])
    def test_ln_factorial(self, n):
        assert ln_factorial_integer(n) == pytest.approx(math.lgamma(n + 1), rel=1e-12, abs=1e-15)

    def test_ln_factorial_real(self):
        assert ln_factorial_real(4.0) == pytest.approx(math.log(24.0))
        assert ln_factorial_real(math.inf) == math.inf
        assert math.isnan(ln_factorial_real(-2.0))


class TestGamma:
    def test_half(self):
        assert gamma_real(0.5) == pytest.approx(math.sqrt(math.pi), rel=1e-13)

    @pytest.mark.parametrize("x", [0.1, 0.7, 1.5, 3.3, 10.25, 50.5, 120.7, -0.5, -1.5, -7.3])
    def test_against_math_gamma(self, x):
        assert gamma_real(x) == pytest.approx(math.gamma(x), rel=1e-12)

    def test_whole_values_use_table(self):
        assert gamma_real(11.0) == 3628800.0
        assert gamma_integer(5) == 24.0

    @pytest.mark.parametrize("pole", [0.0, -1.0, -4.0])
    def test_poles(self, pole):
        assert math.isnan(gamma_real(pole))
        assert has_error(ErrorKind.NAN)

    def test_pole_through_integer_kernel(self):
        assert math.isnan(gamma_integer(0))

    def test_overflow(self):
        assert gamma_real(172.0) == math.inf

    def test_reflection_identity(self):
        for x in (0.2, 0.35, 0.6):
            assert gamma_real(x) * gamma_real(1.0 - x) == pytest.approx(math.pi / math.sin(math.pi * x), rel=1e-12)

    def test_complex_matches_scipy(self):
        for z in (complex(1, 1), complex(0.25, -3.0), complex(-1.5, 0.5), complex(7.5, 2.0)):
            assert gamma_complex(z) == pytest.approx(complex(special.gamma(z)), rel=1e-11)

    def test_complex_on_real_axis(self):
        result = gamma_complex(complex(4.5, 0.0))
        assert result.imag == 0.0
        assert result.real == pytest.approx(math.gamma(4.5), rel=1e-13)

    def test_complex_pole(self):
        assert math.isnan(gamma_complex(complex(-2.0, 0.0)).real)
        assert has_error(ErrorKind.NAN)

    def test_lanczos_accepts_numpy_scalars(self):
        assert isinstance(lanczos_approximation(np.float64(2.5)), np.floating)


class TestLnGamma:
    @pytest.mark.parametrize("x", [0.5, 1.5, 2.5, 30.25, 141.5, 142.5, 1000.5, 1e6 + 0.5, -1.5])
    def test_against_math_lgamma(self, x):
        assert ln_gamma_real(x) == pytest.approx(math.lgamma(x), rel=1e-12)

    def test_negative_gamma_gives_nan(self):
        assert math.isnan(ln_gamma_real(-0.5))
        assert has_error(ErrorKind.NAN)

    def test_infinity(self):
        assert ln_gamma_real(math.inf) == math.inf

    def test_integer_kernel(self):
        assert ln_gamma_integer(11) == pytest.approx(math.log(3628800.0))

    def test_complex_matches_scipy(self):
        for z in (complex(1, 1), complex(2.5, -1.0), complex(200.0, 5.0)):
            assert ln_gamma_complex(z) == pytest.approx(complex(special.loggamma(z)), rel=1e-11)

    def test_stirling_agrees_with_lanczos(self):
        x = np.float64(60.5)
        assert float(stirling_approximation(x)) == pytest.approx(math.log(float(lanczos_approximation(x))), rel=1e-12)


class TestBeta:
    def test_small_arguments(self):
        assert beta_real(2.0, 3.0) == pytest.approx(1.0 / 12.0, rel=1e-14)

    @pytest.mark.parametrize("x, y", [(0.5, 0.5), (2.5, 7.0), (100.0, 60.0), (300.5, 2.0)])
    def test_against_scipy(self, x, y):
        assert beta_real(x, y) == pytest.approx(special.beta(x, y), rel=1e-10)

    def test_invalid(self):
        assert math.isnan(beta_real(0.0, 1.0))
        assert has_error(ErrorKind.INVALID_PARAMETER)

    def test_complex(self):
        x = complex(1.5, 0.5)
        y = complex(2.0, -1.0)
        expected = complex(special.gamma(x) * special.gamma(y) / special.gamma(x + y))
        assert beta_complex(x, y) == pytest.approx(expected, rel=1e-10)

    def test_complex_on_real_axis(self):
        result = beta_complex(complex(2.0, 0.0), complex(3.0, 0.0))
        assert result.imag == 0.0
        assert result.real == pytest.approx(1.0 / 12.0, rel=1e-12)
