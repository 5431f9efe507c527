import cmath
import math

import pytest

from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.math.zeta import riemann_zeta_complex, riemann_zeta_real
from model_math.core.values.per_thread import PerThread

BERNOULLI = (1.0 / 6.0, -1.0 / 30.0, 1.0 / 42.0, -1.0 / 30.0, 5.0 / 66.0, -691.0 / 2730.0)


def _euler_maclaurin(s, n=100):
    total = sum(k ** -s for k in range(1, n))
    total += n ** (1 - s) / (s - 1) + 0.5 * n ** -s
    rising = s
    for k, b in enumerate(BERNOULLI, start=1):
        total += b / math.factorial(2 * k) * rising * n ** (-s - 2 * k + 1)
        rising *= (s + 2 * k - 1) * (s + 2 * k)
    return total


class TestRealZeta:
    def test_basel(self):
        assert riemann_zeta_real(2.0) == pytest.approx(math.pi ** 2 / 6.0, rel=1e-14)

    def test_negative_argument(self):
        assert riemann_zeta_real(-1.0) == pytest.approx(-1.0 / 12.0, rel=1e-12)

    def test_complex_on_real_axis_is_real(self):
        result = riemann_zeta_complex(complex(4.0, 0.0))
        assert result.imag == 0.0
        assert result.real == pytest.approx(math.pi ** 4 / 90.0, rel=1e-14)


class TestComplexZeta:
    def test_near_real_axis(self):
        result = riemann_zeta_complex(complex(2.0, 1e-9))
        assert result.real == pytest.approx(math.pi ** 2 / 6.0, rel=1e-8)

    def test_conjugate_symmetry(self):
        s = complex(3.0, 2.0)
        assert riemann_zeta_complex(s.conjugate()) == pytest.approx(riemann_zeta_complex(s).conjugate(), rel=1e-12)

    def test_dirichlet_series(self):
        s = complex(3.0, 2.0)
        expected = sum(n ** -s for n in range(1, 200000))
        assert riemann_zeta_complex(s) == pytest.approx(expected, rel=1e-9)

    @pytest.mark.parametrize("s", [complex(1.5, 40.0), complex(2.0, 25.0), complex(1.5, -40.0)])
    def test_large_imaginary_part(self, s):
        result = riemann_zeta_complex(s)
        assert result == pytest.approx(_euler_maclaurin(s), rel=1e-10)
        assert not has_error(ErrorKind.CAN_NOT_CONVERGE)

    def test_reflection_with_large_imaginary_part(self):
        s = complex(-0.5, 40.0)
        assert cmath.isfinite(riemann_zeta_complex(s))
        assert not has_error(ErrorKind.CAN_NOT_CONVERGE)

    def test_functional_equation_half_plane(self):
        result = riemann_zeta_complex(complex(-1.0, 1e-9))
        assert result.real == pytest.approx(-1.0 / 12.0, rel=1e-6)

    def test_critical_strip(self):
        # Reflection pairs s with 1 - s, both evaluated through the series
        s = complex(0.5, 2.0)
        result = riemann_zeta_complex(s)
        assert riemann_zeta_complex(s.conjugate()) == pytest.approx(result.conjugate(), rel=1e-10)
        assert cmath.isfinite(result)

    def test_uses_per_thread_scratch(self):
        pt = PerThread(seed=0)
        s = complex(2.5, 1.5)
        assert riemann_zeta_complex(s, pt) == riemann_zeta_complex(s)

    @pytest.mark.parametrize("s", [complex(1.0, 2.0), complex(0.0, 3.0)])
    def test_divergent_lines(self, s):
        assert cmath.isnan(riemann_zeta_complex(s))
        assert has_error(ErrorKind.CAN_NOT_CONVERGE)

    def test_nan(self):
        assert cmath.isnan(riemann_zeta_complex(complex(math.nan, 1.0)))
        assert not has_error()
