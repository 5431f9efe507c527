import math

import pytest
from scipy import special

from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.math.error_function import erf_complex, erf_inv, erf_real, erfc_complex, erfc_real

POINTS = [-6.0, -3.0, -2.0, -1.2, -0.3, 0.0, 0.25, 1.0, 1.999, 2.0, 2.5, 4.0, 8.0]


class TestErf:
    def test_erf_of_one(self):
        assert erf_real(1.0) == pytest.approx(0.8427007929497149, rel=1e-14)

    @pytest.mark.parametrize("x", POINTS)
    def test_against_math_erf(self, x):
        assert erf_real(x) == pytest.approx(math.erf(x), rel=1e-12, abs=1e-15)

    @pytest.mark.parametrize("x", POINTS)
    def test_erfc_against_math(self, x):
        assert erfc_real(x) == pytest.approx(math.erfc(x), rel=1e-10)

    def test_erfc_keeps_tail_precision(self):
        assert erfc_real(10.0) == pytest.approx(2.088487583762545e-45, rel=1e-10)

    def test_nan(self):
        assert math.isnan(erf_real(math.nan))
        assert math.isnan(erfc_real(math.nan))
        assert not has_error()

    def test_odd(self):
        for x in (0.1, 0.9, 1.7, 3.2):
            assert erf_real(-x) == -erf_real(x)


class TestErfComplex:
    def test_known_value(self):
        expected = complex(1.3161512816979477, 0.19045346923783471)
        assert erf_complex(complex(1.0, 1.0)) == pytest.approx(expected, rel=1e-10)

    @pytest.mark.parametrize("x", [0.3, 1.0, 2.5])
    def test_real_axis(self, x):
        assert erf_complex(complex(x, 0.0)).real == pytest.approx(math.erf(x), rel=1e-10)

    def test_symmetries(self):
        z = complex(0.7, 0.4)
        value = erf_complex(z)
        assert erf_complex(-z) == pytest.approx(-value)
        assert erf_complex(z.conjugate()) == pytest.approx(value.conjugate())

    def test_large_argument_uses_continued_fraction(self):
        z = complex(3.0, 0.5)
        assert erfc_complex(z) == pytest.approx(1.0 - erf_complex(z))
        assert abs(erfc_complex(z)) < 1e-3

    @pytest.mark.parametrize("z", [complex(0.1, 2.0), complex(0.5, 3.0), complex(-1.5, 0.7), complex(2.5, -1.0)])
    def test_against_scipy(self, z):
        assert erf_complex(z) == pytest.approx(complex(special.erf(z)), rel=1e-13)
        assert erfc_complex(z) == pytest.approx(complex(special.erfc(z)), rel=1e-13)

    def test_near_imaginary_axis(self):
        # erf(iy) = i erfi(y)
        assert erf_complex(complex(0.0, 2.0)) == pytest.approx(complex(0.0, special.erfi(2.0)), rel=1e-13)

    def test_erfc_on_real_axis(self):
        assert erfc_complex(complex(2.0, 0.0)) == complex(erfc_real(2.0), 0.0)


class TestErfInv:
    @pytest.mark.parametrize("y", [-0.99, -0.5, 0.0, 0.1, 0.5, 0.9, 0.999999])
    def test_inverts_erf(self, y):
        assert erf_real(erf_inv(y)) == pytest.approx(y, rel=1e-12, abs=1e-15)

    def test_half(self):
        assert erf_inv(0.5) == pytest.approx(0.4769362762044699, rel=1e-12)

    def test_end_points(self):
        assert erf_inv(1.0) == math.inf
        assert erf_inv(-1.0) == -math.inf

    def test_outside_domain(self):
        assert math.isnan(erf_inv(1.5))
        assert has_error(ErrorKind.INVALID_PARAMETER)
