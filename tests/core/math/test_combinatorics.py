import math

import pytest

from model_math.core.base.constants import INTEGER_MAX
from model_math.core.base.error_sink import ErrorKind, has_error
from model_math.core.math.combinatorics import (
    binomial_real,
    stirling2_integer,
    stirling2_real,
    unsigned_stirling1_integer,
    unsigned_stirling1_real,
)


class TestBinomial:
    def test_ten_choose_three(self):
        assert binomial_real(10, 3) == 120.0

    @pytest.mark.parametrize("n, k", [(0, 0), (5, 0), (5, 5), (30, 15), (170, 85)])
    def test_against_math_comb(self, n, k):
        assert binomial_real(n, k) == pytest.approx(math.comb(n, k), rel=1e-12)

    def test_beyond_factorial_table(self):
        assert binomial_real(200, 100) == pytest.approx(math.comb(200, 100), rel=1e-10)

    def test_symmetry(self):
        for k in range(0, 21):
            assert binomial_real(20, k) == binomial_real(20, 20 - k)

    @pytest.mark.parametrize("n, k", [(5, 6), (-1, 0), (4.5, 2), (5, -1), (5, 1.5)])
    def test_invalid(self, n, k):
        assert math.isnan(binomial_real(n, k))
        assert has_error(ErrorKind.INVALID_PARAMETER)


class TestStirlingFirstKind:
    @pytest.mark.parametrize("n, k, expected", [
        (0, 0, 1),
        (3, 0, 0),
        (4, 2, 11),
        (5, 2, 50),
        (6, 3, 225),
        (7, 7, 1),
        (3, 5, 0),
    ])
    def test_values(self, n, k, expected):
        assert unsigned_stirling1_integer(n, k) == expected

    def test_row_sums_to_factorial(self):
        assert sum(unsigned_stirling1_integer(8, k) for k in range(9)) == math.factorial(8)

    def test_saturates(self):
        assert unsigned_stirling1_integer(30, 1) == INTEGER_MAX
        assert has_error(ErrorKind.INFINITY)

    def test_real(self):
        assert unsigned_stirling1_real(6.0, 3.0) == 225.0
        assert unsigned_stirling1_real(30.0, 1.0) == pytest.approx(float(math.factorial(29)), rel=1e-12)
        assert unsigned_stirling1_real(2.0, 4.0) == 0.0

    def test_real_rejects_fractions(self):
        assert math.isnan(unsigned_stirling1_real(4.5, 2.0))
        assert has_error(ErrorKind.INVALID_PARAMETER)


class TestStirlingSecondKind:
    @pytest.mark.parametrize("n, k, expected", [
        (0, 0, 1.0),
        (4, 0, 0.0),
        (5, 2, 15.0),
        (10, 3, 9330.0),
        (6, 6, 1.0),
        (3, 5, 0.0),
    ])
    def test_values(self, n, k, expected):
        assert stirling2_integer(n, k) == expected

    def test_bell_number(self):
        assert sum(stirling2_integer(6, k) for k in range(7)) == 203.0

    def test_large_n_log_domain(self):
        assert stirling2_integer(2500, 1) == 1.0
        assert stirling2_integer(2500, 2) == math.inf
        assert has_error(ErrorKind.INFINITY)

    def test_overflow_in_exact_range(self):
        assert stirling2_integer(1500, 3) == math.inf

    def test_real(self):
        assert stirling2_real(10.0, 3.0) == 9330.0
        assert math.isnan(stirling2_real(10.0, 2.5))
