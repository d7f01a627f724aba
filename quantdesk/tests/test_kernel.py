import math
import random

import pytest

from quantdesk.errors import NotPositiveDefiniteError
from quantdesk.kernel.linalg import cholesky, invert_spd, mat_mul, quadratic_form, transpose
from quantdesk.kernel.normal import normal_cdf, normal_pdf
from quantdesk.kernel.sampling import make_rng, standard_normal


def test_normal_cdf_at_zero():
    assert abs(normal_cdf(0.0) - 0.5) < 1e-6


def test_normal_cdf_known_quantiles():
    assert abs(normal_cdf(1.96) - 0.9750021) < 1e-6
    assert abs(normal_cdf(-1.645) - 0.0499849) < 1e-6


def test_normal_cdf_symmetry():
    for x in [0.1, 0.5, 1.0, 2.3, 4.0, 9.9]:
        assert abs(normal_cdf(x) + normal_cdf(-x) - 1.0) < 1e-12


def test_normal_cdf_monotone_and_bounded():
    xs = [i / 10 for i in range(-120, 121)]
    values = [normal_cdf(x) for x in xs]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_normal_cdf_tails_clamped():
    assert normal_cdf(-11) == 0.0
    assert normal_cdf(11) == 1.0


def test_normal_pdf_peak():
    assert normal_pdf(0.0) == pytest.approx(1 / math.sqrt(2 * math.pi))
    assert normal_pdf(1.5) == pytest.approx(normal_pdf(-1.5))


def test_invert_spd_round_trip():
    m = [[4.0, 2.0], [2.0, 3.0]]
    inv = invert_spd(m)
    assert inv[0][0] == pytest.approx(3 / 8)
    assert inv[0][1] == pytest.approx(-2 / 8)
    assert inv[1][1] == pytest.approx(4 / 8)
    identity = mat_mul(m, inv)
    for i in range(2):
        for j in range(2):
            assert identity[i][j] == pytest.approx(1.0 if i == j else 0.0, abs=1e-12)


def test_cholesky_reconstructs_matrix():
    m = [[0.04, 0.01, 0.002], [0.01, 0.09, 0.006], [0.002, 0.006, 0.0144]]
    lower = cholesky(m)
    rebuilt = mat_mul(lower, transpose(lower))
    for i in range(3):
        for j in range(3):
            assert rebuilt[i][j] == pytest.approx(m[i][j])


def test_strict_cholesky_rejects_indefinite_matrix():
    with pytest.raises(NotPositiveDefiniteError):
        cholesky([[1.0, 2.0], [2.0, 1.0]], pivot_floor=None)


def test_pivot_floor_keeps_factorization_finite():
    lower = cholesky([[1.0, 2.0], [2.0, 1.0]])
    assert all(math.isfinite(v) for row in lower for v in row)


def test_quadratic_form():
    assert quadratic_form([1.0, 2.0], [[2.0, 0.0], [0.0, 3.0]]) == pytest.approx(14.0)


def test_standard_normal_moments():
    rng = random.Random(42)
    draws = [standard_normal(rng) for _ in range(20000)]
    mean = sum(draws) / len(draws)
    var = sum((d - mean) ** 2 for d in draws) / len(draws)
    assert abs(mean) < 0.05
    assert abs(var - 1.0) < 0.05


def test_make_rng_prefers_injected_generator():
    rng = random.Random(1)
    assert make_rng(seed=99, rng=rng) is rng
    assert make_rng(seed=7).random() == random.Random(7).random()
